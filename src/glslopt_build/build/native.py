"""Native build path backed by setuptools' ``build_clib`` command.

setuptools finds and configures the platform C/C++ compiler, skips objects
that are newer than their sources, and writes one static library per unit.
This module feeds it the unit definitions and platform defines, then
registers the resulting archive with the parent build.
"""

import logging
from pathlib import Path
from typing import Optional

from setuptools import Distribution
from setuptools.command.build_clib import build_clib
from setuptools.errors import BaseError, CCompilerError

from .. import output
from .build_units import Archive, BuildUnit, ObjectFile
from .config_policy import PlatformDefines, PlatformFamily
from .directives import LinkDirectiveEmitter
from .errors import NativeBuildError

logger = logging.getLogger(__name__)


class NativeBuilder:
    """Builds units through the setuptools compiler layer.

    Args:
        out_dir: Output root for objects and archives
        source_dir: Directory the unit's declared paths are relative to
        defines: Platform defines from config_policy
        family: Host platform family (selects the warning suppression flag)
        emitter: Directive emitter used to register each archive
        cxx_runtime: C++ runtime library linked after C++ units (None to skip)
    """

    def __init__(
        self,
        out_dir: Path,
        source_dir: Path,
        defines: PlatformDefines,
        family: PlatformFamily,
        emitter: LinkDirectiveEmitter,
        cxx_runtime: Optional[str] = None,
    ):
        self.out_dir = out_dir
        self.source_dir = source_dir
        self.defines = defines
        self.family = family
        self.emitter = emitter
        self.cxx_runtime = cxx_runtime

    def _warning_flags(self) -> list[str]:
        return ["/w"] if self.family is PlatformFamily.WINDOWS else ["-w"]

    def library_spec(self, unit: BuildUnit) -> tuple[str, dict]:
        """Translate a BuildUnit into a ``build_clib`` library entry."""
        build_info = {
            "sources": [str(self.source_dir / source) for source in unit.source_files],
            "include_dirs": [str(self.source_dir / include) for include in unit.include_paths],
            "macros": list(self.defines.items()),
            "cflags": self._warning_flags(),
        }
        return unit.name, build_info

    def build_unit(self, unit: BuildUnit) -> Archive:
        """Compile and archive one unit, then register it with the parent build.

        Raises:
            NativeBuildError: If setuptools fails to compile or archive the unit
        """
        name, build_info = self.library_spec(unit)
        dist = Distribution({"libraries": [(name, build_info)]})
        cmd = build_clib(dist)
        cmd.build_clib = str(self.out_dir)
        cmd.build_temp = str(self.out_dir)
        cmd.ensure_finalized()

        logger.debug(f"build_clib {name}: {len(build_info['sources'])} sources")
        try:
            cmd.run()
        except (CCompilerError, BaseError) as e:
            raise NativeBuildError(f"Native build of {name} failed: {e}") from e

        objects = cmd.compiler.object_filenames(build_info["sources"], output_dir=str(self.out_dir))
        members = tuple(
            ObjectFile(source_path=source, object_path=Path(obj))
            for source, obj in zip(unit.source_files, objects)
        )
        archive = Archive(
            unit_name=name,
            archive_path=self.out_dir / cmd.compiler.library_filename(name),
            members=members,
        )
        output.log_detail(f"Archive: {archive.archive_path}", verbose_only=True)

        self.emitter.emit_archives(self.out_dir, [archive])
        if unit.requires_cpp and self.cxx_runtime:
            self.emitter.link_dylib(self.cxx_runtime)
        return archive
