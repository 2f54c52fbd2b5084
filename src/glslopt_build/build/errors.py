"""Exception hierarchy for glslopt-build.

Every fatal condition is raised as a BuildError subclass and propagates to the
single top-level caller (the CLI), which decides how to terminate.
"""

from typing import Optional


class BuildError(Exception):
    """Base class for all build failures."""

    pass


class BuildConfigError(BuildError):
    """Raised when the build environment is missing required settings."""

    pass


class ToolInvocationError(BuildError):
    """Raised when an external tool fails.

    Attributes:
        command: Full argument list of the failed invocation
        returncode: Exit status, or None if the tool could not be started
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        message: str,
        command: Optional[list[str]] = None,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class HostCompilerError(ToolInvocationError):
    """Raised when compiling a source file on the host override path fails."""

    pass


class ArchiverError(ToolInvocationError):
    """Raised when creating a static archive fails."""

    pass


class NativeBuildError(BuildError):
    """Raised when the setuptools native compiler layer fails to build a unit."""

    pass
