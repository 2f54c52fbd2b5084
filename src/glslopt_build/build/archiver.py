"""Static archive creation for the host override path.

Archiving Process:
    1. ``ar cq lib<name>.a <objects...>`` in the output root (members in unit order)
    2. ``ar s <out_dir>/lib<name>.a`` to refresh the symbol index
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .. import output
from ..subprocess_utils import relay_output, safe_run
from .build_units import Archive, ObjectFile, archive_file_name
from .errors import ArchiverError

logger = logging.getLogger(__name__)


class Archiver:
    """Combines a unit's object files into a static archive.

    Args:
        out_dir: Output root the archive is written to
        tool: Archiver executable (default "ar")
        stdout: Stream that receives relayed tool stdout
        stderr: Stream that receives relayed tool stderr
    """

    def __init__(
        self,
        out_dir: Path,
        tool: str = "ar",
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.out_dir = out_dir
        self.tool = tool
        self.stdout = stdout
        self.stderr = stderr

    def create_archive(self, unit_name: str, object_files: Sequence[ObjectFile]) -> Archive:
        """Create ``lib<unit_name>.a`` from already compiled objects.

        Args:
            unit_name: Build unit name
            object_files: Objects in the unit's declared source order

        Returns:
            The resulting Archive

        Raises:
            ArchiverError: If there is nothing to archive or the tool fails
        """
        if not object_files:
            raise ArchiverError(f"No object files provided for {archive_file_name(unit_name)}")

        archive_name = archive_file_name(unit_name)
        # cq appends: a rerun into the same OUT_DIR adds these members again,
        # so members are unique only within a single run.
        cmd = [self.tool, "cq", archive_name]
        cmd.extend(str(obj.object_path) for obj in object_files)

        output.log_detail(f"Archiving {len(object_files)} objects into {archive_name}", verbose_only=True)
        logger.debug(f"Archive command: {' '.join(cmd)}")

        try:
            result = safe_run(cmd, cwd=self.out_dir, capture_output=True, text=True)
        except OSError as e:
            raise ArchiverError(f"Failed to execute {self.tool}: {e}", command=cmd) from e

        relay_output(result, self.stdout, self.stderr)
        if result.returncode != 0:
            raise ArchiverError(
                f"Archive creation failed for {archive_name} (exit code {result.returncode})",
                command=cmd,
                returncode=result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )

        archive_path = self.out_dir / archive_name
        self.refresh_index(archive_path)
        return Archive(unit_name=unit_name, archive_path=archive_path, members=tuple(object_files))

    def refresh_index(self, archive_path: Path) -> None:
        """Regenerate the archive's symbol index.

        The exit status is reported but never fails the build.
        """
        cmd = [self.tool, "s", str(archive_path)]
        try:
            result = safe_run(cmd, capture_output=True, text=True)
        except OSError as e:
            output.log_warning(f"Could not refresh symbol index of {archive_path.name}: {e}")
            return
        if result.returncode != 0:
            output.log_warning(
                f"Symbol index refresh of {archive_path.name} exited with {result.returncode}; continuing"
            )
            logger.debug(f"ar s stderr: {result.stderr}")
