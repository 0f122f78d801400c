# SPDX-License-Identifier: MIT
"""Tests for tsplan.core.plan and tsplan.core.project."""

import json
from pathlib import Path

import pytest

from tsplan.core.errors import (
    ClassificationError,
    InvariantViolation,
    SourceScanError,
)
from tsplan.core.layout import ProjectLayout
from tsplan.core.options import (
    BuildOptions,
    Linkage,
    LinkLibrary,
    Optimize,
    OptionPlan,
    build_option_plan,
)
from tsplan.core.plan import BuildPlan, assemble
from tsplan.core.project import plan_build
from tsplan.core.triple import Abi, Arch, Os, TargetTriple
from tsplan.packages.imported import CacheDirLocator, ExternalDependency

LINUX = TargetTriple(Arch.X86_64, Os.LINUX, Abi.GNU)
MIPS = TargetTriple(Arch.MIPS, Os.LINUX, Abi.GNU)


class TestAssemble:
    def test_merges_option_plan(self):
        option_plan = build_option_plan(BuildOptions(), LINUX)
        sources = [Path("lib/src/alloc.c"), Path("lib/src/parser.c")]
        plan = assemble(sources, option_plan)

        assert isinstance(plan, BuildPlan)
        assert plan.name == "tree-sitter"
        assert plan.sources == tuple(sources)
        assert plan.include_paths == tuple(option_plan.include_paths)
        assert plan.defines == tuple(option_plan.defines.items())
        assert plan.linkage is Linkage.STATIC
        assert plan.header_dir == Path("lib/include")
        assert plan.header_install_dir == Path(".")
        assert plan.optimize is Optimize.DEBUG
        assert plan.external_dependency is None

    def test_plan_is_frozen(self):
        plan = assemble([Path("a.c")], build_option_plan(BuildOptions(), LINUX))
        with pytest.raises(AttributeError):
            plan.linkage = Linkage.DYNAMIC  # type: ignore[misc]

    def test_define_map(self):
        plan = assemble([Path("a.c")], build_option_plan(BuildOptions(), LINUX))
        assert plan.define_map()["_POSIX_C_SOURCE"] == "200112L"

    def test_missing_dependency(self):
        option_plan = OptionPlan(requires_external=True)
        with pytest.raises(InvariantViolation, match="none was classified"):
            assemble([Path("a.c")], option_plan)

    def test_amalgamated_needs_one_source(self):
        option_plan = OptionPlan(amalgamated=True)
        with pytest.raises(InvariantViolation, match="exactly one source"):
            assemble([Path("lib.c"), Path("parser.c")], option_plan)
        with pytest.raises(InvariantViolation, match="exactly one source"):
            assemble([], option_plan)

    def test_split_rejects_amalgamated_source(self):
        with pytest.raises(InvariantViolation, match="amalgamated source lib.c"):
            assemble([Path("src/lib.c"), Path("src/parser.c")], OptionPlan())

    def test_dynamic_without_pic(self):
        option_plan = OptionPlan(linkage=Linkage.DYNAMIC, pic=None)
        with pytest.raises(InvariantViolation, match="position-independent"):
            assemble([Path("a.c")], option_plan)

    def test_needed_library_without_dependency(self):
        option_plan = OptionPlan(link_libraries=[LinkLibrary("wasmtime", needed=True)])
        with pytest.raises(InvariantViolation, match="needed link library"):
            assemble([Path("a.c")], option_plan)

    def test_optimize_carried_through(self):
        option_plan = OptionPlan(optimize=Optimize.RELEASE_SAFE)
        assert assemble([Path("a.c")], option_plan).optimize is Optimize.RELEASE_SAFE

    def test_custom_header_install_dir(self):
        layout = ProjectLayout(header_install_dir=Path("tree_sitter_api"))
        plan = assemble([Path("a.c")], OptionPlan(), layout=layout)
        assert plan.header_install_dir == Path("tree_sitter_api")

    def test_custom_library_name(self):
        layout = ProjectLayout(library_name="ts")
        plan = assemble([Path("a.c")], OptionPlan(), layout=layout)
        assert plan.name == "ts"


class TestSerialization:
    def test_to_dict(self):
        dep = ExternalDependency.for_root(
            "wasmtime_c_api_x86_64_linux", "deps/x", needed=True
        )
        option_plan = OptionPlan(
            defines={"A": "1", "B": ""},
            include_paths=[Path("lib/include")],
            system_include_paths=[dep.include_dir],
            library_paths=[dep.lib_dir],
            link_libraries=[LinkLibrary("wasmtime", needed=True)],
            linkage=Linkage.DYNAMIC,
            pic=True,
            requires_external=True,
            external_dependency=dep,
        )
        data = assemble([Path("lib/src/a.c")], option_plan).to_dict()

        assert data["sources"] == ["lib/src/a.c"]
        assert data["defines"] == {"A": "1", "B": ""}
        assert data["system_include_paths"] == ["deps/x/include"]
        assert data["library_paths"] == ["deps/x/lib"]
        assert data["link_libraries"] == [{"name": "wasmtime", "needed": True}]
        assert data["linkage"] == "dynamic"
        assert data["pic"] is True
        assert data["external_dependency"]["identifier"] == (
            "wasmtime_c_api_x86_64_linux"
        )
        assert data["external_dependency"]["lib_dir"] == "deps/x/lib"
        assert data["optimize"] == "debug"
        assert data["header_dir"] == "lib/include"
        assert data["header_install_dir"] == "."

    def test_to_json_is_valid_json(self):
        plan = assemble([Path("a.c")], build_option_plan(BuildOptions(), LINUX))
        assert json.loads(plan.to_json()) == plan.to_dict()


class TestPlanBuild:
    def test_split_static(self, layout, split_sources):
        plan = plan_build(BuildOptions(), LINUX, layout=layout)
        assert [p.name for p in plan.sources] == split_sources
        assert plan.linkage is Linkage.STATIC
        assert plan.external_dependency is None

    def test_amalgamated(self, layout):
        plan = plan_build(BuildOptions(amalgamated=True), LINUX, layout=layout)
        assert plan.sources == (layout.source_path / "lib.c",)

    def test_shared_wasm(self, layout):
        plan = plan_build(
            BuildOptions(enable_wasm=True, build_shared=True),
            LINUX,
            layout=layout,
            locator=CacheDirLocator("/cache"),
        )
        assert plan.linkage is Linkage.DYNAMIC
        assert plan.link_libraries == (LinkLibrary("wasmtime", needed=True),)
        assert plan.external_dependency is not None
        assert plan.external_dependency.identifier == "wasmtime_c_api_x86_64_linux"

    def test_unsupported_target_fails_before_scanning(self, tmp_path):
        """No lib/src exists, but classification fails first."""
        layout = ProjectLayout(root=tmp_path)
        with pytest.raises(ClassificationError):
            plan_build(BuildOptions(enable_wasm=True), MIPS, layout=layout)

    def test_missing_source_dir(self, tmp_path):
        layout = ProjectLayout(root=tmp_path)
        with pytest.raises(SourceScanError):
            plan_build(BuildOptions(), LINUX, layout=layout)

    def test_linked_amalgamated_source_not_compiled(self, layout, split_sources):
        try:
            (layout.source_path / "all.c").symlink_to(layout.source_path / "lib.c")
        except (OSError, NotImplementedError):
            pytest.skip("symlinks not supported")
        plan = plan_build(BuildOptions(), LINUX, layout=layout)
        assert [p.name for p in plan.sources] == split_sources

    def test_idempotent(self, layout):
        options = BuildOptions(enable_wasm=True, build_shared=True)
        first = plan_build(options, LINUX, layout=layout)
        second = plan_build(options, LINUX, layout=layout)
        assert first == second
        assert first.to_json() == second.to_json()

    def test_independent_targets(self, layout):
        options = BuildOptions(enable_wasm=True)
        linux = plan_build(options, LINUX, layout=layout)
        mac = plan_build(options, TargetTriple(Arch.AARCH64, Os.MACOS), layout=layout)
        assert linux.external_dependency is not None
        assert mac.external_dependency is not None
        assert linux.external_dependency.identifier != mac.external_dependency.identifier
        assert linux.sources == mac.sources
