"""
Build orchestration for the glsl-optimizer static archives.

The toolchain path is decided once per invocation:

- native: every unit is handed to the setuptools compiler layer
  (native.NativeBuilder), which also registers its own link directives.
- host-override: every unit is compiled file by file with the host
  toolchain (compiler.HostCompiler), archived (archiver.Archiver), and
  registered (directives.LinkDirectiveEmitter). The C++ runtime is linked
  explicitly at the end because nothing else adds it on this path.

Both paths build the same BUILD_UNITS registry, in declaration order.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, TextIO

from .. import output
from .archiver import Archiver
from .build_context import BuildContext
from .build_units import BUILD_UNITS, Archive, BuildUnit
from .compiler import HostCompiler
from .config_policy import cxx_runtime_library, platform_defines, platform_family
from .directives import LinkDirectiveEmitter
from .native import NativeBuilder
from .target import ToolchainChoice, detect_toolchain

logger = logging.getLogger(__name__)

# Runtime of the legacy i686 Linux target the override path builds for.
LEGACY_CXX_RUNTIME = "stdc++"


@dataclass
class BuildResult:
    """Outcome of a completed build."""

    toolchain: ToolchainChoice
    archives: list[Archive] = field(default_factory=list)
    build_time: float = 0.0


class BuildOrchestrator:
    """
    Builds every unit of the registry with the selected toolchain.

    Args:
        context: Environment snapshot for this run
        units: Build units, in build order
        toolchain: Force a toolchain path instead of detecting it
        stdout: Directive and relayed tool stdout stream (defaults to sys.stdout)
        stderr: Relayed tool stderr stream (defaults to sys.stderr)
    """

    def __init__(
        self,
        context: BuildContext,
        units: Sequence[BuildUnit] = BUILD_UNITS,
        toolchain: Optional[ToolchainChoice] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.context = context
        self.units = tuple(units)
        self.forced_toolchain = toolchain
        self.stdout = stdout
        self.stderr = stderr
        self.emitter = LinkDirectiveEmitter(stdout)

    def select_toolchain(self) -> ToolchainChoice:
        if self.forced_toolchain is not None:
            logger.debug(f"Toolchain forced to {self.forced_toolchain}")
            return self.forced_toolchain
        return detect_toolchain(self.context)

    def build(self) -> BuildResult:
        """Run the build.

        Returns:
            BuildResult listing the archives produced

        Raises:
            BuildConfigError: If no output directory is configured
            HostCompilerError: If a source file fails to compile (override path)
            ArchiverError: If an archive cannot be created (override path)
            NativeBuildError: If setuptools fails to build a unit (native path)
        """
        start_time = time.time()
        choice = self.select_toolchain()
        out_dir = self.context.require_out_dir().absolute()
        output.log(f"Toolchain: {choice}")
        output.log_detail(f"Output directory: {out_dir}", verbose_only=True)

        if choice is ToolchainChoice.HOST_OVERRIDE:
            archives = self._build_host_override(out_dir)
        else:
            archives = self._build_native(out_dir)

        return BuildResult(toolchain=choice, archives=archives, build_time=time.time() - start_time)

    def _build_native(self, out_dir: Path) -> list[Archive]:
        family = platform_family()
        builder = NativeBuilder(
            out_dir=out_dir,
            source_dir=self.context.source_dir,
            defines=platform_defines(family),
            family=family,
            emitter=self.emitter,
            cxx_runtime=cxx_runtime_library(),
        )
        archives = []
        total = len(self.units)
        for index, unit in enumerate(self.units, start=1):
            with output.TimedLogger(f"Building {unit.archive_name} ({len(unit.source_files)} files)", phase=(index, total)):
                archives.append(builder.build_unit(unit))
        return archives

    def _build_host_override(self, out_dir: Path) -> list[Archive]:
        compiler = HostCompiler(
            out_dir=out_dir,
            source_dir=self.context.source_dir,
            jobs=self.context.jobs,
            stdout=self.stdout,
            stderr=self.stderr,
        )
        archiver = Archiver(out_dir, tool=self.context.archiver, stdout=self.stdout, stderr=self.stderr)

        archives = []
        total = len(self.units)
        for index, unit in enumerate(self.units, start=1):
            tool = self.context.host_cxx if unit.requires_cpp else self.context.host_cc
            with output.TimedLogger(f"Building {unit.archive_name} with {tool}", phase=(index, total)):
                objects = compiler.compile_unit(unit, tool)
                archive = archiver.create_archive(unit.name, objects)
            self.emitter.emit_archives(out_dir, [archive])
            archives.append(archive)

        self.emitter.link_dylib(LEGACY_CXX_RUNTIME)
        return archives
