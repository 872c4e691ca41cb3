"""
Centralized logging configuration.

bootstrap_logging() configures logging from a logging.ini in the theme root
using Python's native INI format, with LOG_LEVEL overriding the levels.
"""

import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
BASIC_FORMAT = '%(levelname)s: %(name)s: %(message)s'


def _find_logging_config(root: Optional[Path] = None) -> Optional[Path]:
    """Find logging.ini in the theme root, if any."""
    config_path = (root or Path.cwd()) / 'logging.ini'
    if config_path.exists():
        return config_path
    return None


def _env_log_level() -> Optional[str]:
    log_level = os.environ.get('LOG_LEVEL', '').strip().upper()
    if not log_level:
        return None
    if log_level not in LOG_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{log_level}', ignoring", file=sys.stderr)
        return None
    return log_level


def bootstrap_logging(root: Optional[Path] = None) -> None:
    """
    Bootstrap logging for the build tasks.

    Loads logging.ini with logging.config.fileConfig() when present and falls
    back to basicConfig at WARNING otherwise. LOG_LEVEL, when set, overrides
    the root logger and its stream handlers.
    """
    config_path = _find_logging_config(root)

    if config_path is None:
        logging.basicConfig(level=logging.WARNING, format=BASIC_FORMAT, stream=sys.stderr)
    else:
        try:
            logging.config.fileConfig(str(config_path), disable_existing_loggers=False)
        except Exception as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            logging.basicConfig(level=logging.WARNING, format=BASIC_FORMAT, stream=sys.stderr)

    env_level = _env_log_level()
    if env_level:
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, env_level))
        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setLevel(getattr(logging, env_level))

    logging.getLogger(__name__).debug(f"Logging configured from {config_path or 'defaults'}")


def setup_logging(debug: bool = False) -> None:
    """Set up logging for a task run; --debug turns on themepack debug output."""
    bootstrap_logging()
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger('themepack').setLevel(logging.DEBUG)
        for handler in logging.getLogger().handlers:
            handler.setLevel(logging.DEBUG)
        print("🐛 Debug logging enabled")
