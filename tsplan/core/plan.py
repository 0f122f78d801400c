# SPDX-License-Identifier: MIT
"""The build plan handed to the artifact emitter.

assemble() merges the resolved sources and the option plan into a
BuildPlan. It makes no decisions of its own, but it re-checks the
plan's invariants so that a broken plan never reaches the emitter.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tsplan.core.errors import InvariantViolation
from tsplan.core.layout import ProjectLayout
from tsplan.core.options import Linkage, LinkLibrary

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tsplan.core.options import Optimize, OptionPlan
    from tsplan.packages.imported import ExternalDependency


@dataclass(frozen=True)
class BuildPlan:
    """A complete, immutable description of one library build.

    Attributes:
        name: Library base name (e.g. "tree-sitter").
        sources: Source files, in compile order.
        include_paths: Include directories.
        system_include_paths: Include directories of external headers.
        library_paths: Library search directories.
        defines: (name, value) macro definitions, in order.
        c_standard: C language standard.
        link_libraries: Libraries to link.
        linkage: Static or dynamic library.
        pic: True to force position-independent code, None for the
            target default.
        amalgamated: Whether sources is the amalgamated source.
        optimize: Optimization mode.
        external_dependency: The wasmtime bundle, if linked.
        header_dir: Public header directory installed with the library.
        header_install_dir: Where the contents of header_dir go,
            relative to the include install prefix ("." for the prefix
            itself).
    """

    name: str
    sources: tuple[Path, ...]
    include_paths: tuple[Path, ...]
    system_include_paths: tuple[Path, ...]
    library_paths: tuple[Path, ...]
    defines: tuple[tuple[str, str], ...]
    c_standard: str
    link_libraries: tuple[LinkLibrary, ...]
    linkage: Linkage
    pic: bool | None
    amalgamated: bool
    optimize: Optimize
    external_dependency: ExternalDependency | None
    header_dir: Path
    header_install_dir: Path

    @property
    def is_shared(self) -> bool:
        return self.linkage is Linkage.DYNAMIC

    def define_map(self) -> dict[str, str]:
        return dict(self.defines)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dict.

        Paths are written with forward slashes so the output does not
        depend on the host.
        """
        dep = self.external_dependency
        return {
            "name": self.name,
            "sources": [p.as_posix() for p in self.sources],
            "include_paths": [p.as_posix() for p in self.include_paths],
            "system_include_paths": [
                p.as_posix() for p in self.system_include_paths
            ],
            "library_paths": [p.as_posix() for p in self.library_paths],
            "defines": {name: value for name, value in self.defines},
            "c_standard": self.c_standard,
            "link_libraries": [
                {"name": lib.name, "needed": lib.needed}
                for lib in self.link_libraries
            ],
            "linkage": self.linkage.value,
            "pic": self.pic,
            "amalgamated": self.amalgamated,
            "optimize": self.optimize.value,
            "external_dependency": dep.to_dict() if dep else None,
            "header_dir": self.header_dir.as_posix(),
            "header_install_dir": self.header_install_dir.as_posix(),
        }

    def to_json(self) -> str:
        """Serialize to JSON; identical plans give identical text."""
        return json.dumps(self.to_dict(), indent=2) + "\n"


def assemble(
    sources: Sequence[Path],
    option_plan: OptionPlan,
    *,
    layout: ProjectLayout | None = None,
) -> BuildPlan:
    """Merge sources and an option plan into a BuildPlan.

    Args:
        sources: Resolved source files.
        option_plan: Result of build_option_plan().
        layout: Project layout (defaults to the standard layout).

    Returns:
        The BuildPlan.

    Raises:
        InvariantViolation: If the inputs contradict each other.
    """
    layout = layout or ProjectLayout()
    _check_invariants(sources, option_plan, layout)

    return BuildPlan(
        name=layout.library_name,
        sources=tuple(sources),
        include_paths=tuple(option_plan.include_paths),
        system_include_paths=tuple(option_plan.system_include_paths),
        library_paths=tuple(option_plan.library_paths),
        defines=tuple(option_plan.defines.items()),
        c_standard=option_plan.c_standard,
        link_libraries=tuple(option_plan.link_libraries),
        linkage=option_plan.linkage,
        pic=option_plan.pic,
        amalgamated=option_plan.amalgamated,
        optimize=option_plan.optimize,
        external_dependency=option_plan.external_dependency,
        header_dir=layout.header_dir,
        header_install_dir=layout.header_install_dir,
    )


def _check_invariants(
    sources: Sequence[Path], option_plan: OptionPlan, layout: ProjectLayout
) -> None:
    if option_plan.requires_external and option_plan.external_dependency is None:
        raise InvariantViolation(
            "external dependency requested but none was classified"
        )

    if option_plan.amalgamated:
        if len(sources) != 1:
            raise InvariantViolation(
                f"amalgamated build needs exactly one source, got {len(sources)}"
            )
    elif any(Path(s).name == layout.amalgamated_source for s in sources):
        raise InvariantViolation(
            f"split build includes the amalgamated source "
            f"{layout.amalgamated_source}"
        )

    if option_plan.linkage is Linkage.DYNAMIC and option_plan.pic is not True:
        raise InvariantViolation("shared library without position-independent code")

    if (
        any(lib.needed for lib in option_plan.link_libraries)
        and option_plan.external_dependency is None
    ):
        raise InvariantViolation("needed link library without an external dependency")
