"""
Build system components for glslopt-build.

- Platform defines (config_policy)
- Toolchain detection (target)
- Host compilation and archiving (compiler, archiver)
- setuptools native builds (native)
- Link directives for the parent build (directives)
- Build orchestration (orchestrator)
"""

from .build_context import BuildContext
from .build_units import BUILD_UNITS, Archive, BuildUnit, ObjectFile
from .errors import BuildError
from .orchestrator import BuildOrchestrator, BuildResult
from .target import ToolchainChoice, detect_toolchain

__all__ = [
    "BUILD_UNITS",
    "Archive",
    "BuildContext",
    "BuildError",
    "BuildOrchestrator",
    "BuildResult",
    "BuildUnit",
    "ObjectFile",
    "ToolchainChoice",
    "detect_toolchain",
]
