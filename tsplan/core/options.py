# SPDX-License-Identifier: MIT
"""Build options and the option plan.

build_option_plan() turns the three build switches and the target into
everything the plan needs except the source list: macro definitions,
include and library paths, linkage, and the external wasmtime
dependency. It never touches the filesystem; source discovery belongs
to tsplan.core.sources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from tsplan.core.classify import classify
from tsplan.core.errors import ConfigureError
from tsplan.core.layout import ProjectLayout
from tsplan.packages.imported import CacheDirLocator, ExternalDependency

if TYPE_CHECKING:
    from tsplan.core.triple import TargetTriple
    from tsplan.packages.imported import DependencyLocator

logger = logging.getLogger(__name__)

# Portability macros for POSIX extensions; set on every target.
BASELINE_DEFINES: tuple[tuple[str, str], ...] = (
    ("_POSIX_C_SOURCE", "200112L"),
    ("_DEFAULT_SOURCE", ""),
    ("_BSD_SOURCE", ""),
    ("_DARWIN_C_SOURCE", ""),
)

WASM_FEATURE_DEFINE = "TREE_SITTER_FEATURE_WASM"

# Default bundle cache, relative to the project root.
DEFAULT_DEPS_DIR = Path("deps")


class Linkage(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"

    def __str__(self) -> str:
        return self.value


class Optimize(str, Enum):
    """Optimization mode of the library build.

    DEBUG and RELEASE_SAFE keep assertions; RELEASE_FAST and
    RELEASE_SMALL compile them out.
    """

    DEBUG = "debug"
    RELEASE_SAFE = "release-safe"
    RELEASE_FAST = "release-fast"
    RELEASE_SMALL = "release-small"

    def __str__(self) -> str:
        return self.value

    @property
    def keeps_assertions(self) -> bool:
        return self in (Optimize.DEBUG, Optimize.RELEASE_SAFE)

    @classmethod
    def parse(cls, value: str | Optimize) -> Optimize:
        """Parse a mode name.

        Accepts ``release-fast``, ``release_fast`` and ``ReleaseFast``.

        Raises:
            ConfigureError: If the name is not an optimization mode.
        """
        if isinstance(value, Optimize):
            return value
        if isinstance(value, str):
            wanted = value.strip().lower().replace("-", "").replace("_", "")
            for mode in cls:
                if mode.value.replace("-", "") == wanted:
                    return mode
        choices = ", ".join(mode.value for mode in cls)
        raise ConfigureError(
            f"unknown optimization mode {value!r} (expected one of {choices})",
            "optimize",
        )


@dataclass(frozen=True)
class BuildOptions:
    """The build switches, fixed for one planning pass.

    Attributes:
        enable_wasm: Build with wasm support (links wasmtime).
        build_shared: Build a shared library instead of a static one.
        amalgamated: Compile the amalgamated source instead of the
            split sources.
        optimize: Optimization mode.
    """

    enable_wasm: bool = False
    build_shared: bool = False
    amalgamated: bool = False
    optimize: Optimize = Optimize.DEBUG


@dataclass(frozen=True)
class LinkLibrary:
    """A library the produced artifact links against.

    Attributes:
        name: Library name, without prefix or suffix.
        needed: Keep the dependency even if the linker sees no use for
            it at link time.
    """

    name: str
    needed: bool = False


@dataclass
class OptionPlan:
    """Everything in a build plan except the sources.

    Attributes:
        defines: Macro name -> value ("" for a bare define), in order.
        include_paths: Include directories.
        system_include_paths: Include directories of external headers.
        library_paths: Library search directories.
        link_libraries: Libraries to link.
        c_standard: C language standard.
        linkage: Static or dynamic library.
        pic: True to force position-independent code, None to leave it
            to the target default.
        amalgamated: Whether the amalgamated source is compiled.
        optimize: Optimization mode.
        requires_external: Whether an external dependency was requested.
        external_dependency: The classified dependency, if requested.
    """

    defines: dict[str, str] = field(default_factory=dict)
    include_paths: list[Path] = field(default_factory=list)
    system_include_paths: list[Path] = field(default_factory=list)
    library_paths: list[Path] = field(default_factory=list)
    link_libraries: list[LinkLibrary] = field(default_factory=list)
    c_standard: str = "c11"
    linkage: Linkage = Linkage.STATIC
    pic: bool | None = None
    amalgamated: bool = False
    optimize: Optimize = Optimize.DEBUG
    requires_external: bool = False
    external_dependency: ExternalDependency | None = None


def build_option_plan(
    options: BuildOptions,
    triple: TargetTriple,
    *,
    layout: ProjectLayout | None = None,
    locator: DependencyLocator | None = None,
) -> OptionPlan:
    """Build the option plan for a target.

    Args:
        options: Build switches.
        triple: Target being built for.
        layout: Project layout (defaults to the standard layout).
        locator: Finds the wasmtime bundle root. Defaults to the
            ``deps/`` directory under the project root.

    Returns:
        The OptionPlan.

    Raises:
        ClassificationError: If wasm is enabled and the target has no
            wasmtime bundle.
    """
    layout = layout or ProjectLayout()

    plan = OptionPlan(
        defines=dict(BASELINE_DEFINES),
        include_paths=layout.include_paths,
        c_standard=layout.c_standard,
        amalgamated=options.amalgamated,
        optimize=options.optimize,
    )

    if options.build_shared:
        plan.pic = True
        plan.linkage = Linkage.DYNAMIC

    if options.enable_wasm:
        plan.requires_external = True
        # Fails the whole build on an unsupported target
        identifier = classify(triple)
        if locator is None:
            locator = CacheDirLocator(layout.path(DEFAULT_DEPS_DIR))
        dep = ExternalDependency.for_root(
            identifier,
            locator.locate(identifier),
            needed=options.build_shared,
        )
        plan.external_dependency = dep
        plan.defines[WASM_FEATURE_DEFINE] = ""
        plan.system_include_paths.append(dep.include_dir)
        plan.library_paths.append(dep.lib_dir)
        if dep.needed:
            plan.link_libraries.append(LinkLibrary(dep.library, needed=True))

    logger.debug(
        "Option plan for %s: linkage=%s, optimize=%s, wasm=%s",
        triple,
        plan.linkage,
        plan.optimize,
        plan.external_dependency.identifier if plan.external_dependency else None,
    )
    return plan
