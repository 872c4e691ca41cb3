"""
Configuration management for themepack build tasks.
"""

from .exceptions import (
    ConfigException,
    DeploymentConfigNotFoundException,
    InvalidConfigException,
    PackageFileNotFoundException,
)
from .models import BuildLayout, DeploymentTarget, PackageMetadata
from .settings import Settings, load_settings


__all__ = [
    'ConfigException',
    'DeploymentConfigNotFoundException',
    'InvalidConfigException',
    'PackageFileNotFoundException',
    'BuildLayout',
    'DeploymentTarget',
    'PackageMetadata',
    'Settings',
    'load_settings',
]
