"""Compile profile for the host override toolchain.

Design:
    The override path drives the host compiler directly, so every flag it
    needs is declared here once as a frozen ProfileFlags value. The compiler
    just appends ``profile.compile_flags`` and ``profile.defines`` without
    knowing what is in them.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ProfileFlags:
    """Flags for one compile profile.

    Attributes:
        name: Profile identifier
        description: Human-readable profile description
        compile_flags: Code generation flags, in command-line order
        defines: Preprocessor defines passed as ``-D<define>``
        injected_include: Header directory (relative to the output root) passed with ``-isystem``
    """

    name: str
    description: str
    compile_flags: tuple[str, ...]
    defines: tuple[str, ...]
    injected_include: str

    def injected_include_dir(self, out_dir: Path) -> str:
        """Resolve the injected header directory for an output root."""
        return f"{out_dir}/{self.injected_include}"

    def define_flags(self) -> list[str]:
        return [f"-D{define}" for define in self.defines]


# The injected headers live in the parent build's top-level include directory,
# four levels above OUT_DIR (target/<profile>/build/<crate>-<hash>/out).
LEGACY_I686_PROFILE = ProfileFlags(
    name="legacy-i686",
    description="Unoptimized 32-bit i686 host build with debug info",
    compile_flags=(
        "-O0",
        "-ffunction-sections",
        "-fdata-sections",
        "-fPIC",
        "-g",
        "-fno-omit-frame-pointer",
        "-m32",
        "-march=i686",
    ),
    defines=(
        "__STDC_FORMAT_MACROS",
        "HAVE_ENDIAN_H",
        "HAVE_PTHREAD",
        "HAVE_TIMESPEC_GET",
    ),
    injected_include="../../../../include",
)
