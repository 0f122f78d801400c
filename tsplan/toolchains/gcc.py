# SPDX-License-Identifier: MIT
"""GCC-style toolchain (gcc, clang, mingw).

Spells plans for any compiler that takes GNU driver options.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsplan.core.options import Optimize
from tsplan.tools.toolchain import BaseToolchain

if TYPE_CHECKING:
    from pathlib import Path

    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple

OPTIMIZE_FLAGS: dict[Optimize, tuple[str, ...]] = {
    Optimize.DEBUG: ("-O0", "-g"),
    Optimize.RELEASE_SAFE: ("-O2",),
    Optimize.RELEASE_FAST: ("-O2",),
    Optimize.RELEASE_SMALL: ("-Os",),
}


class GccToolchain(BaseToolchain):
    """Toolchain for gcc-compatible compiler drivers.

    Example:
        tc = GccToolchain()
        tc.compile_args(plan, triple)
        # ['-std=c11', '-O0', '-g', '-Ilib/include', ..., '-D_DEFAULT_SOURCE', ...]
    """

    def __init__(self, cmd: str = "cc") -> None:
        super().__init__("gcc", cmd)

    def c_standard_flag(self, standard: str) -> str:
        return f"-std={standard}"

    def pic_flags(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        # PE has no PIC, and Mach-O code is PIC already
        if plan.pic and not triple.is_windows and not triple.is_macos:
            return ["-fPIC"]
        return []

    def optimize_flags(self, optimize: Optimize) -> list[str]:
        return list(OPTIMIZE_FLAGS[optimize])

    def shared_flags(self, triple: TargetTriple) -> list[str]:
        return ["-dynamiclib"] if triple.is_macos else ["-shared"]

    def link_args(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        """Linker arguments.

        On ELF targets, needed libraries are wrapped in --no-as-needed so
        the dependency is recorded even if --as-needed is the default.
        """
        ctx = self.context(plan, triple)
        tokens = [f"{ctx.libdir_prefix}{d}" for d in ctx.libdirs]
        tokens.extend(ctx.link_flags)
        elf = not triple.is_windows and not triple.is_macos
        for lib in plan.link_libraries:
            if lib.needed and elf:
                tokens.extend(
                    [
                        "-Wl,--push-state,--no-as-needed",
                        ctx.format_lib(lib.name),
                        "-Wl,--pop-state",
                    ]
                )
            else:
                tokens.append(ctx.format_lib(lib.name))
        return tokens

    def artifact_name(self, plan: BuildPlan, triple: TargetTriple) -> str:
        if not plan.is_shared:
            return f"lib{plan.name}.a"
        if triple.is_windows:
            return f"lib{plan.name}.dll"
        if triple.is_macos:
            return f"lib{plan.name}.dylib"
        return f"lib{plan.name}.so"

    def compile_command(
        self, plan: BuildPlan, triple: TargetTriple, source: Path, output: Path
    ) -> list[str]:
        return [
            self.cmd,
            *self.compile_args(plan, triple),
            "-c",
            "-o",
            output.as_posix(),
            source.as_posix(),
        ]
