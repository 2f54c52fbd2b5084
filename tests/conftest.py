"""Pytest configuration and fixtures for glslopt-build tests.

Restores stdout/stderr after each test (Python 3.13 closes captured streams
when a test raises; see https://github.com/pytest-dev/pytest/issues/11439) and
provides a fake host toolchain for tests that must not run real compilers.
"""

import subprocess
import sys
import warnings
from pathlib import Path

import pytest

if sys.version_info >= (3, 13):
    warnings.filterwarnings("ignore", category=ResourceWarning)


@pytest.fixture(autouse=True)
def _restore_stdio():  # noqa: PT004
    """Ensure stdout/stderr are always restored after each test."""
    yield

    if sys.stdout.closed:
        sys.stdout = sys.__stdout__
    if sys.stderr.closed:
        sys.stderr = sys.__stderr__


class FakeToolchain:
    """Stands in for host-cc/host-c++/ar.

    Compiles by writing the source path into the ``-o`` file, archives by
    writing member paths (one per line) into the archive, and records every
    command it sees. Sources listed in ``failing`` exit with status 1.
    """

    def __init__(self):
        self.commands: list[list[str]] = []
        self.failing: set[str] = set()
        self.index_returncode = 0

    def __call__(self, cmd, cwd=None, **kwargs):
        self.commands.append(list(cmd))
        if "-c" in cmd:
            source = cmd[cmd.index("-c") + 1]
            if source in self.failing:
                return subprocess.CompletedProcess(cmd, 1, stdout="", stderr=f"{source}:1:1: error: expected ';'\n")
            Path(cmd[cmd.index("-o") + 1]).write_text(source)
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
        if cmd[1] == "cq":
            archive = Path(cwd) / cmd[2]
            with open(archive, "a") as f:
                for member in cmd[3:]:
                    f.write(member + "\n")
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")
        if cmd[1] == "s":
            return subprocess.CompletedProcess(cmd, self.index_returncode, stdout="", stderr="")
        raise AssertionError(f"unexpected command: {cmd}")

    def compile_commands(self) -> list[list[str]]:
        return [cmd for cmd in self.commands if "-c" in cmd]

    def archive_commands(self) -> list[list[str]]:
        return [cmd for cmd in self.commands if "-c" not in cmd]


@pytest.fixture
def fake_toolchain(monkeypatch):
    """Patch safe_run in the compiler and archiver with a FakeToolchain."""
    toolchain = FakeToolchain()
    monkeypatch.setattr("glslopt_build.build.compiler.safe_run", toolchain)
    monkeypatch.setattr("glslopt_build.build.archiver.safe_run", toolchain)
    return toolchain
