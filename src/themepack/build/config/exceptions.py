"""
Exception classes with built-in guidance for build configuration loading.
"""
import sys


class ConfigException(Exception):
    """Base exception for all configuration errors."""
    def __init__(self, message: str, path: str = None, field: str = None):
        super().__init__(message)
        self.path = path
        self.field = field
        self.guidance = self._generate_guidance()

    def _get_current_command(self):
        """Get the current command being executed."""
        if len(sys.argv) > 0:
            executable = sys.argv[0].split('/')[-1]
            args = sys.argv[1:]
            if args:
                return f"{executable} {' '.join(args)}"
            else:
                return executable
        return "unknown command"

    def _generate_guidance(self):
        """Override in subclasses to provide specific guidance."""
        return f"""
❌ Configuration error: {self}
💡 Check your configuration and try again
"""


class PackageFileNotFoundException(ConfigException):
    """Raised when package.json is missing from the theme root."""

    def _generate_guidance(self):
        return f"""
❌ Package metadata not found at {self.path}
💡 Run the command from the theme root, or create a package.json with at least:
   {{"name": "my-theme", "version": "0.1.0"}}
"""


class DeploymentConfigNotFoundException(ConfigException):
    """Raised when server.config.json is required but missing."""

    def _generate_guidance(self):
        command = self._get_current_command()
        return f"""
❌ Deployment target not found at {self.path}
💡 '{command}' syncs the release to a remote host, therefore you must create
   server.config.json next to package.json:
   {{"username": "deploy", "host": "example.com", "path": "/var/www/wp-content/themes/", "port": 22}}
"""


class InvalidConfigException(ConfigException):
    """Raised when a configuration document cannot be parsed or validated."""

    def _generate_guidance(self):
        where = f" ({self.field})" if self.field else ""
        return f"""
❌ Invalid configuration in {self.path}{where}: {self}
💡 Fix the file and try again
"""
