"""
Exceptions raised while running the build pipeline.
"""


class BuildException(Exception):
    """Base exception for build pipeline errors."""


class BlockParseError(BuildException):
    """Raised when an optimization block in a template is malformed."""
    def __init__(self, message: str, template: str = None, line: int = None):
        location = template or '<template>'
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(f"{location}: {message}")
        self.template = template
        self.line = line


class StepFailedException(BuildException):
    """Raised when a pipeline step fails; remaining steps are not run."""
    def __init__(self, step: str, cause: BaseException):
        super().__init__(f"Step '{step}' failed: {cause}")
        self.step = step
        self.cause = cause
