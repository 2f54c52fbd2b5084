"""End-to-end host override builds with a real 32-bit capable toolchain."""

import io
import subprocess

import pytest

from glslopt_build.build.build_context import BuildContext
from glslopt_build.build.build_units import BuildUnit
from glslopt_build.build.errors import HostCompilerError
from glslopt_build.build.orchestrator import BuildOrchestrator
from glslopt_build.build.target import LEGACY_TARGET

pytestmark = pytest.mark.integration

UNIT = BuildUnit(
    name="trio",
    source_files=("lib/one.c", "lib/two.c", "lib/three.c"),
    include_paths=("include",),
)


@pytest.fixture
def source_tree(tmp_path):
    (tmp_path / "include").mkdir()
    (tmp_path / "include" / "trio.h").write_text("int trio_value(int);\n")
    lib = tmp_path / "lib"
    lib.mkdir()
    for index, name in enumerate(["one", "two", "three"]):
        (lib / f"{name}.c").write_text(
            f'#include "trio.h"\nint trio_{name}(void) {{ return trio_value({index}); }}\n'
        )
    return tmp_path


def _context(source_tree, toolchain):
    cc, ar = toolchain
    return BuildContext(
        target=LEGACY_TARGET,
        sandbox_target=None,
        out_dir=source_tree / "out",
        source_dir=source_tree,
        host_cc=cc,
        host_cxx=cc,
        archiver=ar,
    )


def test_three_sources_one_archive(source_tree, i686_toolchain):
    stdout = io.StringIO()
    result = BuildOrchestrator(_context(source_tree, i686_toolchain), units=[UNIT], stdout=stdout).build()

    out_dir = source_tree / "out"
    assert sorted(p.name for p in out_dir.rglob("*.o")) == ["one.o", "three.o", "two.o"]
    archive = result.archives[0].archive_path
    assert archive == out_dir / "libtrio.a"

    listing = subprocess.run([i686_toolchain[1], "t", str(archive)], capture_output=True, text=True, check=True)
    assert listing.stdout.split() == ["one.o", "two.o", "three.o"]
    assert "cargo:rustc-link-lib=static=trio" in stdout.getvalue()


def test_syntax_error_aborts_without_archive(source_tree, i686_toolchain):
    (source_tree / "lib" / "two.c").write_text("int broken(void) { return 0 }\n")

    with pytest.raises(HostCompilerError) as excinfo:
        BuildOrchestrator(_context(source_tree, i686_toolchain), units=[UNIT], stdout=io.StringIO()).build()

    assert excinfo.value.returncode != 0
    assert not (source_tree / "out" / "libtrio.a").exists()
