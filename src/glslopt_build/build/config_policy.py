"""Preprocessor defines required to build glsl-optimizer for a platform.

The vendored Mesa sources expect a handful of feature macros that depend on
the host platform family. ``platform_defines`` is a pure function from a
``PlatformFamily`` to an ordered mapping of define name to optional value.
"""

import sys
from enum import Enum
from typing import Optional

PlatformDefines = dict[str, Optional[str]]


class PlatformFamily(Enum):
    """Platform families that need distinct defines."""

    LINUX = "linux"
    BSD = "bsd"
    WINDOWS = "windows"
    OTHER_UNIX = "other-unix"

    def __str__(self) -> str:
        return self.value


_BSD_PREFIXES = ("freebsd", "dragonfly", "openbsd")

# Keep the vendored sources from pulling in the embedding application's
# allocator (moz_malloc) and abort hook (mozalloc_abort).
_HOOK_SENTINELS = ("MOZ_INCLUDE_MOZALLOC_H", "mozilla_throw_gcc_h")


def platform_family(sys_platform: Optional[str] = None) -> PlatformFamily:
    """Map a ``sys.platform`` string to its PlatformFamily.

    Args:
        sys_platform: Value in ``sys.platform`` format (defaults to the running host)

    Returns:
        The matching family; unknown platforms are treated as other-unix
    """
    name = sys.platform if sys_platform is None else sys_platform
    if name.startswith("linux"):
        return PlatformFamily.LINUX
    if name.startswith(_BSD_PREFIXES):
        return PlatformFamily.BSD
    if name == "win32":
        return PlatformFamily.WINDOWS
    return PlatformFamily.OTHER_UNIX


def platform_defines(family: PlatformFamily) -> PlatformDefines:
    """Return the defines needed to compile glsl-optimizer for ``family``.

    Args:
        family: Target platform family

    Returns:
        Ordered mapping of define name to value (None for bare ``-DNAME``)
    """
    defines: PlatformDefines = {"__STDC_FORMAT_MACROS": None}

    if family is PlatformFamily.LINUX:
        defines["_GNU_SOURCE"] = None
        defines["HAVE_ENDIAN_H"] = None
    elif family is PlatformFamily.BSD:
        defines["PTHREAD_SETAFFINITY_IN_NP_HEADER"] = None

    if family is PlatformFamily.WINDOWS:
        defines["_USE_MATH_DEFINES"] = None
    else:
        defines["HAVE_PTHREAD"] = None
        defines["HAVE_TIMESPEC_GET"] = None

    for name in _HOOK_SENTINELS:
        defines[name] = None

    return defines


def cxx_runtime_library(sys_platform: Optional[str] = None) -> Optional[str]:
    """Name of the C++ runtime a parent link needs for C++ archives.

    Returns None where the toolchain links it implicitly (MSVC).
    """
    name = sys.platform if sys_platform is None else sys_platform
    if name == "win32":
        return None
    if name == "darwin" or name.startswith(_BSD_PREFIXES):
        return "c++"
    return "stdc++"
