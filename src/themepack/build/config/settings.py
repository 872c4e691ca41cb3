"""
Theme build settings.

Loads the package metadata (package.json), the optional deployment target
(server.config.json) and the build layout (packaged defaults.yaml merged
with the project's themepack.yaml) into a single Settings object.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from pydantic import ValidationError

from .exceptions import (
    DeploymentConfigNotFoundException,
    InvalidConfigException,
    PackageFileNotFoundException,
)
from .models import BuildLayout, DeploymentTarget, PackageMetadata

logger = logging.getLogger(__name__)

PACKAGE_FILE = 'package.json'
DEPLOYMENT_FILE = 'server.config.json'
LAYOUT_FILE = 'themepack.yaml'
DEFAULTS_PATH = Path(__file__).parent / 'defaults.yaml'


@dataclass
class Settings:
    """Everything a build task needs to know about the theme."""

    root: Path
    pkg: PackageMetadata
    layout: BuildLayout
    deployment: Optional[DeploymentTarget] = None

    def interpolate(self, template: str) -> str:
        """Expand {pkg.name}, {paths.dist}, {deployment.host}... in a template."""
        return template.format(
            pkg=self.pkg,
            paths=self.layout.paths,
            deployment=self.deployment,
        )

    def path(self, template: str) -> Path:
        """Interpolate a template and resolve it against the theme root."""
        return self.root / self.interpolate(template)

    @property
    def base_dir(self) -> Path:
        return self.path('{paths.base}')

    @property
    def dist_dir(self) -> Path:
        return self.path('{paths.dist}')

    @property
    def release_dir(self) -> Path:
        return self.path(self.layout.release_dir)

    @property
    def archive_path(self) -> Path:
        return self.path(self.layout.archive)

    @property
    def placeholder(self) -> str:
        return self.layout.placeholder


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        with open(path, 'r') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise InvalidConfigException(f"Invalid JSON: {e}", path=str(path))


def _validate(model, data, path: Path):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        error = e.errors()[0]
        field = '.'.join(str(part) for part in error['loc'])
        raise InvalidConfigException(error['msg'], path=str(path), field=field)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into a copy of base, recursing into nested dicts."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_package(root: Path) -> PackageMetadata:
    path = root / PACKAGE_FILE
    if not path.exists():
        raise PackageFileNotFoundException(f"{PACKAGE_FILE} not found", path=str(path))
    return _validate(PackageMetadata, _read_json(path), path)


def load_deployment(root: Path) -> DeploymentTarget:
    path = root / DEPLOYMENT_FILE
    if not path.exists():
        raise DeploymentConfigNotFoundException(f"{DEPLOYMENT_FILE} not found", path=str(path))
    return _validate(DeploymentTarget, _read_json(path), path)


def load_layout(root: Path) -> BuildLayout:
    """Load the packaged defaults and overlay the project's themepack.yaml."""
    with open(DEFAULTS_PATH, 'r') as f:
        layout = yaml.safe_load(f)

    override_path = root / LAYOUT_FILE
    if override_path.exists():
        try:
            with open(override_path, 'r') as f:
                override = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidConfigException(f"Invalid YAML: {e}", path=str(override_path))
        if not isinstance(override, dict):
            raise InvalidConfigException("Expected a mapping at the top level", path=str(override_path))
        logger.debug(f"Applying layout overrides from {override_path}")
        layout = deep_merge(layout, override)
    else:
        logger.debug(f"No {LAYOUT_FILE} in {root}, using default layout")

    return _validate(BuildLayout, layout, override_path)


def load_settings(root: Optional[Path] = None, require_deployment: bool = False) -> Settings:
    """Load settings for the theme rooted at root (defaults to the working directory).

    The deployment target is only mandatory for tasks that sync to a remote
    host; other tasks load it when present.
    """
    root = Path(root) if root is not None else Path.cwd()

    pkg = load_package(root)
    layout = load_layout(root)

    deployment = None
    if require_deployment or (root / DEPLOYMENT_FILE).exists():
        deployment = load_deployment(root)

    logger.info(f"Loaded settings for {pkg.name} {pkg.version} from {root}")
    return Settings(root=root, pkg=pkg, layout=layout, deployment=deployment)
