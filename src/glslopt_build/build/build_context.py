"""Build Context - snapshot of the environment a build runs in.

The parent build system communicates through environment variables. They are
read exactly once, at orchestration start, into an immutable BuildContext
that is threaded through every component. Nothing downstream reads
``os.environ`` again.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

from .errors import BuildConfigError

TARGET_ENV = "TARGET"
SANDBOX_TARGET_ENV = "SB2_TARGET"
OUT_DIR_ENV = "OUT_DIR"


@dataclass(frozen=True)
class BuildContext:
    """Immutable build configuration.

    Attributes:
        target: Target triple requested by the parent build (None if unset)
        sandbox_target: Target triple of the scratchbox2 sandbox (None if unset)
        out_dir: Output root owned by this build run (None if unset)
        source_dir: Directory that declared source and include paths are relative to
        host_cc: C compiler used on the host override path
        host_cxx: C++ compiler used on the host override path
        archiver: Archiving tool used on the host override path
        jobs: Number of files of one unit compiled concurrently
    """

    target: Optional[str]
    sandbox_target: Optional[str]
    out_dir: Optional[Path]
    source_dir: Path = Path(".")
    host_cc: str = "host-cc"
    host_cxx: str = "host-c++"
    archiver: str = "ar"
    jobs: int = 1

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "BuildContext":
        """Snapshot the build environment.

        Args:
            environ: Mapping to read from (defaults to ``os.environ``)
            **overrides: Field values that replace the snapshot (None values are ignored)

        Returns:
            A frozen BuildContext
        """
        env = os.environ if environ is None else environ
        out_dir = env.get(OUT_DIR_ENV)
        context = cls(
            target=env.get(TARGET_ENV),
            sandbox_target=env.get(SANDBOX_TARGET_ENV),
            out_dir=Path(out_dir) if out_dir else None,
        )
        applied = {key: value for key, value in overrides.items() if value is not None}
        if "out_dir" in applied:
            applied["out_dir"] = Path(applied["out_dir"])
        if "source_dir" in applied:
            applied["source_dir"] = Path(applied["source_dir"])
        return replace(context, **applied)

    def require_out_dir(self) -> Path:
        """Return the output root, failing if the parent build did not set one.

        Raises:
            BuildConfigError: If no output directory is configured
        """
        if self.out_dir is None:
            raise BuildConfigError(f"{OUT_DIR_ENV} is not set; cannot place build artifacts")
        return self.out_dir
