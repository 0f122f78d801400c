# SPDX-License-Identifier: MIT
"""MSVC toolchain.

Spells plans for cl.exe / link.exe. Used for ``*-windows-msvc``
targets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsplan.core.build_context import MsvcCompileLinkContext
from tsplan.core.options import Optimize
from tsplan.tools.toolchain import BaseToolchain

if TYPE_CHECKING:
    from pathlib import Path

    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple

OPTIMIZE_FLAGS: dict[Optimize, tuple[str, ...]] = {
    Optimize.DEBUG: ("/Od", "/Zi"),
    Optimize.RELEASE_SAFE: ("/O2",),
    Optimize.RELEASE_FAST: ("/O2",),
    Optimize.RELEASE_SMALL: ("/O1",),
}


class MsvcToolchain(BaseToolchain):
    """Toolchain for the Microsoft C compiler."""

    context_class = MsvcCompileLinkContext
    object_suffix = ".obj"

    def __init__(self, cmd: str = "cl") -> None:
        super().__init__("msvc", cmd)

    def c_standard_flag(self, standard: str) -> str:
        return f"/std:{standard}"

    def pic_flags(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        return []

    def optimize_flags(self, optimize: Optimize) -> list[str]:
        return list(OPTIMIZE_FLAGS[optimize])

    def optimize_link_flags(self, optimize: Optimize) -> list[str]:
        return ["/DEBUG"] if optimize is Optimize.DEBUG else []

    def shared_flags(self, triple: TargetTriple) -> list[str]:
        return ["/DLL"]

    def artifact_name(self, plan: BuildPlan, triple: TargetTriple) -> str:
        """File name of the produced library.

        A static build produces ``tree-sitter.lib``. A shared build
        produces ``tree-sitter.dll``, and the linker writes its import
        library next to it under the same ``tree-sitter.lib`` name, so
        static and shared builds must not share an output directory.
        """
        suffix = ".dll" if plan.is_shared else ".lib"
        return f"{plan.name}{suffix}"

    def compile_command(
        self, plan: BuildPlan, triple: TargetTriple, source: Path, output: Path
    ) -> list[str]:
        return [
            self.cmd,
            "/nologo",
            *self.compile_args(plan, triple),
            "/c",
            f"/Fo{output.as_posix()}",
            source.as_posix(),
        ]
