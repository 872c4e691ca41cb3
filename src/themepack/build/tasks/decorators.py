"""
Task decorators for logging setup and error reporting.
"""
import functools
import logging
import sys

from invoke.exceptions import UnexpectedExit

from themepack.build.config.exceptions import ConfigException
from themepack.build.config.logging import setup_logging
from themepack.build.exceptions import BuildException, StepFailedException

logger = logging.getLogger(__name__)


def build_task(func):
    """Decorator for build tasks.

    Sets up logging from the task's --debug flag, prints configuration
    guidance or the failed step to stderr and exits non-zero on failure.
    """
    @functools.wraps(func)
    def wrapper(ctx, *args, **kwargs):
        setup_logging(debug=kwargs.get('debug', False))
        try:
            return func(ctx, *args, **kwargs)
        except ConfigException as e:
            print(e.guidance, file=sys.stderr)
            sys.exit(1)
        except StepFailedException as e:
            logger.debug("Step failure", exc_info=e.cause)
            if isinstance(e.cause, ConfigException):
                print(e.cause.guidance, file=sys.stderr)
            elif isinstance(e.cause, UnexpectedExit):
                print(f"❌ {e.step}: '{e.cause.result.command}' exited with {e.cause.result.exited}", file=sys.stderr)
            else:
                print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)
        except BuildException as e:
            print(f"❌ {e}", file=sys.stderr)
            sys.exit(1)
        # Let other exceptions bubble up
    return wrapper
