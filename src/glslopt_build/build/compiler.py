"""Host Compiler.

Compiles glsl-optimizer sources one file at a time with the host override
toolchain (``host-cc`` / ``host-c++``) for legacy i686 targets.

Compilation Strategy:
    - One blocking tool invocation per source file
    - Fixed flag profile from build_profiles.LEGACY_I686_PROFILE
    - Objects at ``<out_dir>/<source parent>/<stem>.o`` so reruns land on the same paths
    - Tool stdout/stderr relayed verbatim; a non-zero exit aborts the build
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .. import output
from ..subprocess_utils import relay_output, safe_run
from .build_profiles import LEGACY_I686_PROFILE, ProfileFlags
from .build_units import BuildUnit, ObjectFile
from .errors import BuildError, HostCompilerError

logger = logging.getLogger(__name__)


def object_path_for(source_path: str, out_dir: Path) -> Path:
    """Derive the object file path for a source file.

    The source's parent directory is mirrored under ``out_dir`` and the
    extension replaced by ``.o``. Absolute sources have their anchor dropped
    so the object still lands inside ``out_dir``.

    Args:
        source_path: Source file path as declared in the build unit
        out_dir: Output root

    Returns:
        Object file path (pure function of its inputs)
    """
    path = Path(source_path)
    parent = path.parent
    if parent.is_absolute():
        parent = parent.relative_to(parent.anchor)
    return out_dir / parent / f"{path.stem}.o"


class HostCompiler:
    """Drives the host compiler over the sources of a build unit.

    Args:
        out_dir: Output root for object files
        source_dir: Working directory for the compiler (declared paths are relative to it)
        profile: Compile profile supplying flags and defines
        jobs: Files of one unit compiled concurrently (1 = strictly sequential)
        stdout: Stream that receives relayed tool stdout (defaults to sys.stdout)
        stderr: Stream that receives relayed tool stderr (defaults to sys.stderr)
    """

    def __init__(
        self,
        out_dir: Path,
        source_dir: Path,
        profile: ProfileFlags = LEGACY_I686_PROFILE,
        jobs: int = 1,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.out_dir = out_dir
        self.source_dir = source_dir
        self.profile = profile
        self.jobs = max(1, jobs)
        self.stdout = stdout
        self.stderr = stderr
        self._relay_lock = threading.Lock()

    def build_command(self, tool: str, include_paths: Sequence[str], source_path: str, object_path: Path) -> list[str]:
        """Assemble the full compiler command line for one source file."""
        cmd = [tool, "-isystem", self.profile.injected_include_dir(self.out_dir)]
        cmd.extend(self.profile.compile_flags)
        for include in include_paths:
            cmd.extend(["-I", include])
        cmd.extend(self.profile.define_flags())
        cmd.extend(["-o", str(object_path)])
        cmd.extend(["-c", source_path])
        return cmd

    def compile_source(self, tool: str, include_paths: Sequence[str], source_path: str) -> ObjectFile:
        """Compile a single source file to an object file.

        Args:
            tool: Compiler executable
            include_paths: Include directories, in order
            source_path: Source file, relative to ``source_dir`` or absolute

        Returns:
            The compiled ObjectFile

        Raises:
            HostCompilerError: If the object directory cannot be created,
                the tool cannot be started, or it exits non-zero
        """
        object_path = object_path_for(source_path, self.out_dir)
        try:
            object_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise HostCompilerError(f"Failed to create output directory {object_path.parent}: {e}") from e

        cmd = self.build_command(tool, include_paths, source_path, object_path)
        logger.debug(f"Compile command: {' '.join(cmd)}")
        output.log(f"Compiling: {source_path}")
        output.log_detail(f"Build command: {' '.join(cmd)}", verbose_only=True)

        try:
            result = safe_run(cmd, cwd=self.source_dir, capture_output=True, text=True)
        except OSError as e:
            raise HostCompilerError(f"Failed to execute {tool} for {source_path}: {e}", command=cmd) from e

        with self._relay_lock:
            relay_output(result, self.stdout, self.stderr)
            output.log_detail(f"Compile status: {result.returncode}", verbose_only=True)

        if result.returncode != 0:
            raise HostCompilerError(
                f"Compilation failed for {source_path} (exit code {result.returncode})",
                command=cmd,
                returncode=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )

        return ObjectFile(source_path=source_path, object_path=object_path)

    def compile_unit(self, unit: BuildUnit, tool: str) -> list[ObjectFile]:
        """Compile every source of ``unit``, returning objects in declaration order.

        Raises:
            HostCompilerError: On the first failing file; no further files are started
        """
        if self.jobs == 1:
            return [self.compile_source(tool, unit.include_paths, source) for source in unit.source_files]

        with ThreadPoolExecutor(max_workers=self.jobs, thread_name_prefix=f"compile-{unit.name}") as executor:
            futures = [
                executor.submit(self.compile_source, tool, unit.include_paths, source)
                for source in unit.source_files
            ]
            try:
                return [future.result() for future in futures]
            except BuildError:
                for future in futures:
                    future.cancel()
                raise
