"""Tests for the setuptools-backed native build path."""

import io
from unittest.mock import patch

import pytest
from setuptools.errors import CompileError

from glslopt_build.build.build_units import BuildUnit
from glslopt_build.build.config_policy import PlatformFamily, platform_defines
from glslopt_build.build.directives import LinkDirectiveEmitter
from glslopt_build.build.errors import NativeBuildError
from glslopt_build.build.native import NativeBuilder

C_UNIT = BuildUnit(name="glcpp", source_files=("src/a.c", "src/b.c"), include_paths=("include", "src"))
CXX_UNIT = BuildUnit(name="glsl_optimizer", source_files=("src/c.cpp",), include_paths=("include",), requires_cpp=True)


def _builder(tmp_path, family=PlatformFamily.LINUX, cxx_runtime="stdc++"):
    stream = io.StringIO()
    builder = NativeBuilder(
        out_dir=tmp_path / "out",
        source_dir=tmp_path,
        defines=platform_defines(family),
        family=family,
        emitter=LinkDirectiveEmitter(stream),
        cxx_runtime=cxx_runtime,
    )
    return builder, stream


class TestLibrarySpec:
    def test_unit_translated_to_build_clib_entry(self, tmp_path):
        builder, _ = _builder(tmp_path)
        name, info = builder.library_spec(C_UNIT)

        assert name == "glcpp"
        assert info["sources"] == [str(tmp_path / "src/a.c"), str(tmp_path / "src/b.c")]
        assert info["include_dirs"] == [str(tmp_path / "include"), str(tmp_path / "src")]
        assert ("_GNU_SOURCE", None) in info["macros"]
        assert ("MOZ_INCLUDE_MOZALLOC_H", None) in info["macros"]
        assert info["cflags"] == ["-w"]

    def test_windows_warning_flag(self, tmp_path):
        builder, _ = _builder(tmp_path, family=PlatformFamily.WINDOWS)
        assert builder.library_spec(C_UNIT)[1]["cflags"] == ["/w"]


class TestBuildUnit:
    @patch("glslopt_build.build.native.build_clib")
    def test_build_registers_directives(self, mock_build_clib, tmp_path):
        cmd = mock_build_clib.return_value
        cmd.compiler.object_filenames.return_value = [str(tmp_path / "out/a.o"), str(tmp_path / "out/b.o")]
        cmd.compiler.library_filename.return_value = "libglcpp.a"
        builder, stream = _builder(tmp_path)

        archive = builder.build_unit(C_UNIT)

        cmd.run.assert_called_once()
        assert cmd.build_clib == str(tmp_path / "out")
        assert cmd.build_temp == str(tmp_path / "out")
        assert archive.archive_path == tmp_path / "out" / "libglcpp.a"
        assert [m.source_path for m in archive.members] == list(C_UNIT.source_files)
        assert stream.getvalue().splitlines() == [
            f"cargo:rustc-link-search=native={tmp_path / 'out'}",
            "cargo:rustc-link-lib=static=glcpp",
            "cargo:rerun-if-changed=src/a.c",
            "cargo:rerun-if-changed=src/b.c",
        ]

    @patch("glslopt_build.build.native.build_clib")
    def test_cpp_unit_links_runtime(self, mock_build_clib, tmp_path):
        cmd = mock_build_clib.return_value
        cmd.compiler.object_filenames.return_value = [str(tmp_path / "out/c.o")]
        cmd.compiler.library_filename.return_value = "libglsl_optimizer.a"
        builder, stream = _builder(tmp_path)

        builder.build_unit(CXX_UNIT)

        assert stream.getvalue().splitlines()[-1] == "cargo:rustc-link-lib=stdc++"

    @patch("glslopt_build.build.native.build_clib")
    def test_no_runtime_when_none(self, mock_build_clib, tmp_path):
        cmd = mock_build_clib.return_value
        cmd.compiler.object_filenames.return_value = [str(tmp_path / "out/c.o")]
        cmd.compiler.library_filename.return_value = "glsl_optimizer.lib"
        builder, stream = _builder(tmp_path, family=PlatformFamily.WINDOWS, cxx_runtime=None)

        builder.build_unit(CXX_UNIT)

        assert "cargo:rustc-link-lib=stdc++" not in stream.getvalue()

    @patch("glslopt_build.build.native.build_clib")
    def test_compile_error_wrapped(self, mock_build_clib, tmp_path):
        mock_build_clib.return_value.run.side_effect = CompileError("command 'gcc' failed")
        builder, stream = _builder(tmp_path)

        with pytest.raises(NativeBuildError, match="glcpp"):
            builder.build_unit(C_UNIT)
        assert stream.getvalue() == ""
