"""
Delegated build tools.

Stylesheet compilation and remote sync shell out to the sass and rsync
executables through the invoke context; script and style minification go
through rjsmin and rcssmin.
"""

import logging
import shlex
from pathlib import Path
from typing import Any, Dict, List, Optional

import rcssmin
import rjsmin

from .config.models import DeploymentTarget, RsyncConfig, SassConfig

logger = logging.getLogger(__name__)


def _read(path: Path) -> str:
    return Path(path).read_text(encoding='utf-8')


def _write(path: Path, content: str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


def concat(sources: List[str], dest: str, separator: str = '\n') -> Path:
    """Join sources into dest with separator; missing sources are skipped."""
    parts = []
    for source in sources:
        if not Path(source).is_file():
            logger.warning(f"Source file \"{source}\" not found")
            continue
        parts.append(_read(source))
    written = _write(dest, separator.join(parts))
    logger.debug(f"Concatenated {len(parts)} files into {dest}")
    return written


def uglify(source: str, dest: str) -> Path:
    """Minify a script."""
    return _write(dest, rjsmin.jsmin(_read(source)))


def cssmin(source: str, dest: str) -> Path:
    """Minify a stylesheet."""
    return _write(dest, rcssmin.cssmin(_read(source)))


def _option_args(options: Dict[str, Any]) -> List[str]:
    """Turn {'line_numbers': True, 'style': 'expanded'} into CLI flags."""
    args = []
    for name, value in options.items():
        flag = '--' + name.replace('_', '-')
        if value is True:
            args.append(flag)
        elif value is False or value is None:
            continue
        elif isinstance(value, (list, tuple)):
            args.extend(f"{flag}={item}" for item in value)
        else:
            args.append(f"{flag}={value}")
    return args


def sass_command(config: SassConfig, target: str, source: str, dest: str) -> str:
    """Build the sass command line for one source file and target (dev/dist)."""
    options: Dict[str, Any] = {'load_path': config.load_path}
    if config.precision is not None:
        options['precision'] = config.precision
    options.update(config.targets.get(target, {}))

    cmd = ['bundle', 'exec'] if config.bundle_exec else []
    cmd.append(config.executable)
    cmd.extend(_option_args(options))
    cmd.extend([source, dest])
    return ' '.join(shlex.quote(part) for part in cmd)


def sass_jobs(config: SassConfig, sass_dir: Path, base_dir: Path) -> List[tuple]:
    """Pair every configured Sass source with its compiled stylesheet path."""
    jobs = []
    for name in config.sources:
        dest_name = Path(name).with_suffix(config.ext).name
        jobs.append((sass_dir / name, base_dir / config.dest / dest_name))
    return jobs


def compile_sass(ctx, config: SassConfig, target: str, sass_dir: Path, base_dir: Path) -> List[Path]:
    """Compile every configured Sass source for a target."""
    compiled = []
    for source, dest in sass_jobs(config, sass_dir, base_dir):
        dest.parent.mkdir(parents=True, exist_ok=True)
        cmd = sass_command(config, target, str(source), str(dest))
        logger.debug(f"Running: {cmd}")
        with ctx.cd(str(base_dir)):
            ctx.run(cmd)
        compiled.append(dest)
    return compiled


def rsync_command(config: RsyncConfig, source: Path, target: DeploymentTarget) -> str:
    """Build the rsync command syncing source's contents to the deployment target."""
    cmd = [config.executable] + list(config.args)
    if config.recursive:
        cmd.append('--recursive')
    if config.sync_dest:
        cmd.append('--delete')
    if config.ssh:
        cmd.append(f"--rsh=ssh -p {target.port}")
    cmd.append(str(source).rstrip('/') + '/')
    cmd.append(target.destination)
    return ' '.join(shlex.quote(part) for part in cmd)


def rsync(ctx, config: RsyncConfig, source: Path, target: DeploymentTarget):
    cmd = rsync_command(config, source, target)
    logger.debug(f"Running: {cmd}")
    return ctx.run(cmd)


def run_shell(ctx, command: str, cwd: Optional[Path] = None):
    """Run an arbitrary configured command, e.g. the secondary compile step."""
    logger.debug(f"Running: {command}")
    if cwd is None:
        return ctx.run(command)
    with ctx.cd(str(cwd)):
        return ctx.run(command)
