# SPDX-License-Identifier: MIT
"""Tests for tsplan.toolchains.msvc."""

from pathlib import Path

import pytest

from tsplan.core.options import BuildOptions, Optimize, build_option_plan
from tsplan.core.plan import assemble
from tsplan.core.triple import TargetTriple
from tsplan.packages.imported import CacheDirLocator
from tsplan.toolchains.msvc import MsvcToolchain

WINDOWS = TargetTriple.parse("x86_64-windows-msvc")


def make_plan(**options):
    option_plan = build_option_plan(
        BuildOptions(**options), WINDOWS, locator=CacheDirLocator("C:/deps")
    )
    source = "lib/src/lib.c" if options.get("amalgamated") else "lib/src/parser.c"
    return assemble([Path(source)], option_plan)


class TestMsvcToolchain:
    def test_creation(self):
        tc = MsvcToolchain()
        assert tc.name == "msvc"
        assert tc.cmd == "cl"
        assert tc.object_suffix == ".obj"

    def test_compile_args(self):
        args = MsvcToolchain().compile_args(make_plan(), WINDOWS)
        assert args[0] == "/std:c11"
        assert "/Ilib/include" in args
        assert "/D_POSIX_C_SOURCE=200112L" in args
        assert "/D_DEFAULT_SOURCE" in args

    def test_shared_has_no_pic_flag(self):
        args = MsvcToolchain().compile_args(make_plan(build_shared=True), WINDOWS)
        assert "-fPIC" not in args

    def test_wasm(self):
        plan = make_plan(enable_wasm=True, build_shared=True)
        tc = MsvcToolchain()
        compile_args = tc.compile_args(plan, WINDOWS)
        assert "/DTREE_SITTER_FEATURE_WASM" in compile_args
        assert (
            "/external:IC:/deps/wasmtime_c_api_x86_64_windows/include" in compile_args
        )
        assert tc.link_args(plan, WINDOWS) == [
            "/LIBPATH:C:/deps/wasmtime_c_api_x86_64_windows/lib",
            "/DLL",
            "/DEBUG",
            "wasmtime.lib",
        ]

    def test_artifact_name(self):
        """Static library and DLL import library are both tree-sitter.lib."""
        tc = MsvcToolchain()
        assert tc.artifact_name(make_plan(), WINDOWS) == "tree-sitter.lib"
        assert tc.artifact_name(make_plan(build_shared=True), WINDOWS) == (
            "tree-sitter.dll"
        )

    def test_debug_flags(self):
        plan = make_plan()
        tc = MsvcToolchain()
        assert tc.compile_args(plan, WINDOWS)[:3] == ["/std:c11", "/Od", "/Zi"]
        assert "/DEBUG" in tc.link_args(plan, WINDOWS)

    @pytest.mark.parametrize(
        "mode,flag,ndebug",
        [
            (Optimize.RELEASE_SAFE, "/O2", False),
            (Optimize.RELEASE_FAST, "/O2", True),
            (Optimize.RELEASE_SMALL, "/O1", True),
        ],
    )
    def test_release_flags(self, mode, flag, ndebug):
        plan = make_plan(optimize=mode)
        tc = MsvcToolchain()
        args = tc.compile_args(plan, WINDOWS)
        assert args[1] == flag
        assert "/Zi" not in args
        assert ("/DNDEBUG" in args) is ndebug
        assert "/DEBUG" not in tc.link_args(plan, WINDOWS)

    def test_compile_command(self):
        cmd = MsvcToolchain().compile_command(
            make_plan(amalgamated=True),
            WINDOWS,
            Path("lib/src/lib.c"),
            Path("obj/lib.obj"),
        )
        assert cmd[:2] == ["cl", "/nologo"]
        assert cmd[-3:] == ["/c", "/Foobj/lib.obj", "lib/src/lib.c"]
