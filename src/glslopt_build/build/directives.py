"""Link directives for the parent Cargo build.

Directives are written one per line to stdout in the build-script protocol
Cargo reads (``cargo:<key>=<value>``). Any other stdout text is ignored by
Cargo, which is why relayed compiler output can share the stream.
"""

import sys
from pathlib import Path
from typing import Iterable, Optional, TextIO

from .build_units import Archive

DIRECTIVE_PREFIX = "cargo:"


class LinkDirectiveEmitter:
    """Writes link-search, link-lib and rerun-if-changed directives."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout

    def _emit(self, key: str, value: str) -> None:
        self.stream.write(f"{DIRECTIVE_PREFIX}{key}={value}\n")
        self.stream.flush()

    def link_search(self, out_dir: Path) -> None:
        self._emit("rustc-link-search", f"native={out_dir}")

    def link_static(self, unit_name: str) -> None:
        self._emit("rustc-link-lib", f"static={unit_name}")

    def link_dylib(self, library: str) -> None:
        self._emit("rustc-link-lib", library)

    def rerun_if_changed(self, path: str) -> None:
        self._emit("rerun-if-changed", path)

    def emit_archives(self, out_dir: Path, archives: Iterable[Archive]) -> None:
        """Emit the directives for archives built under ``out_dir``.

        Order: one search path, one static link per archive, then one rebuild
        trigger per compiled source file.
        """
        archives = list(archives)
        self.link_search(out_dir)
        for archive in archives:
            self.link_static(archive.unit_name)
        for archive in archives:
            for member in archive.members:
                self.rerun_if_changed(member.source_path)
