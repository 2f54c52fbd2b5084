"""Toolchain selection for the current build.

Legacy i686 cross builds cannot use the setuptools compiler layer: it would
pick the build machine's compiler and produce 64-bit objects. They are built
with the host override toolchain instead. Inside a scratchbox2 sandbox that
already targets i686 the native path works, so the sandbox target is checked
too.
"""

import logging
from enum import Enum

from .build_context import BuildContext

logger = logging.getLogger(__name__)

LEGACY_TARGET = "i686-unknown-linux-gnu"


class ToolchainChoice(Enum):
    """Which toolchain path a build takes."""

    NATIVE_ABSTRACTION = "native"
    HOST_OVERRIDE = "host-override"

    def __str__(self) -> str:
        return self.value


def detect_toolchain(context: BuildContext) -> ToolchainChoice:
    """Decide the toolchain path from the snapshotted target triples.

    Unset triples never match, so a missing variable simply selects the
    native path.
    """
    is_legacy_target = context.target == LEGACY_TARGET
    in_legacy_sandbox = context.sandbox_target == LEGACY_TARGET
    logger.debug(
        f"Toolchain detection: target={context.target!r} sandbox={context.sandbox_target!r}"
    )
    if is_legacy_target and not in_legacy_sandbox:
        return ToolchainChoice.HOST_OVERRIDE
    return ToolchainChoice.NATIVE_ABSTRACTION
