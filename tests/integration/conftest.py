"""Fixtures that locate a real host toolchain, skipping when none is usable."""

import shutil
import subprocess
import sys
import sysconfig

import pytest


def _first_word(value):
    parts = (value or "").split()
    return parts[0] if parts else None


@pytest.fixture(scope="session")
def i686_toolchain(tmp_path_factory):
    """Return (cc, ar) able to produce 32-bit i686 objects, or skip."""
    if not sys.platform.startswith("linux"):
        pytest.skip("32-bit host override builds are Linux only")
    cc = shutil.which("gcc") or shutil.which("cc")
    ar = shutil.which("ar")
    if cc is None or ar is None:
        pytest.skip("gcc/cc and ar are required")

    check_dir = tmp_path_factory.mktemp("m32check")
    source = check_dir / "m32check.c"
    source.write_text("int m32check(void) { return 0; }\n")
    result = subprocess.run(
        [cc, "-m32", "-march=i686", "-c", str(source), "-o", str(check_dir / "m32check.o")],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        pytest.skip("host compiler cannot target i686 (-m32)")
    return cc, ar


@pytest.fixture(scope="session")
def native_toolchain():
    """Skip unless the compiler and archiver Python was configured with exist."""
    cc = _first_word(sysconfig.get_config_var("CC"))
    ar = _first_word(sysconfig.get_config_var("AR")) or "ar"
    if sys.platform == "win32" or cc is None:
        pytest.skip("no configured Unix C compiler")
    if shutil.which(cc) is None or shutil.which(ar) is None:
        pytest.skip(f"{cc} or {ar} not on PATH")
