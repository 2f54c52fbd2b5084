"""Subprocess helpers for running host build tools.

Wraps subprocess.run so every tool invocation gets the same platform flags
(no console window on Windows, stdin detached from the terminal) and so
captured tool output can be relayed to the operator unchanged.
"""

import subprocess
import sys
from typing import Any, Optional, TextIO


def get_subprocess_creation_flags() -> int:
    """Get platform-specific subprocess creation flags.

    Returns:
        - Windows: subprocess.CREATE_NO_WINDOW (prevents console window)
        - Other platforms: 0 (no special flags)
    """
    if sys.platform == "win32":
        return subprocess.CREATE_NO_WINDOW
    return 0


def safe_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
    """Execute subprocess.run with platform-specific flags.

    Automatically applies:
    - CREATE_NO_WINDOW on Windows
    - stdin=DEVNULL, so a compiler never blocks waiting on the terminal

    Args:
        cmd: Command and arguments (same as subprocess.run)
        **kwargs: Additional arguments passed to subprocess.run

    Returns:
        CompletedProcess result from subprocess.run

    Raises:
        OSError: If the executable cannot be started
    """
    default_flags = get_subprocess_creation_flags()

    if "creationflags" in kwargs:
        kwargs["creationflags"] = kwargs["creationflags"] | default_flags
    elif default_flags:
        kwargs["creationflags"] = default_flags

    if "stdin" not in kwargs:
        kwargs["stdin"] = subprocess.DEVNULL

    return subprocess.run(cmd, **kwargs)


def relay_output(
    result: subprocess.CompletedProcess,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> None:
    """Write a finished process's captured stdout/stderr verbatim.

    Captured text goes to the matching stream of this process (or the
    streams given). Nothing is added or stripped.
    """
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr
    if result.stdout:
        out.write(result.stdout)
        out.flush()
    if result.stderr:
        err.write(result.stderr)
        err.flush()
