# SPDX-License-Identifier: MIT
"""Toolchain protocol and base implementation.

A Toolchain knows how a family of compilers (gcc/clang, MSVC) spells a
build plan: compile flags, link flags, and the library file name.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tsplan.core.build_context import CompileLinkContext

if TYPE_CHECKING:
    from pathlib import Path

    from tsplan.core.options import Optimize
    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple

# Defined when the optimization mode compiles assertions out
NDEBUG_DEFINE = "NDEBUG"


@runtime_checkable
class Toolchain(Protocol):
    """Protocol for toolchains."""

    @property
    def name(self) -> str:
        """Toolchain name (e.g., 'gcc', 'msvc')."""
        ...

    def compile_args(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        """Arguments shared by every compile of the plan's sources."""
        ...

    def link_args(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        """Arguments for producing the plan's library."""
        ...

    def artifact_name(self, plan: BuildPlan, triple: TargetTriple) -> str:
        """File name of the produced library."""
        ...

    def compile_command(
        self, plan: BuildPlan, triple: TargetTriple, source: Path, output: Path
    ) -> list[str]:
        """Full command compiling one source to one object file."""
        ...


class BaseToolchain(ABC):
    """Abstract base class for toolchains.

    Subclasses provide the flag spellings; the base class assembles
    them in a fixed order.
    """

    context_class: type[CompileLinkContext] = CompileLinkContext
    object_suffix = ".o"

    def __init__(self, name: str, cmd: str) -> None:
        """Initialize a toolchain.

        Args:
            name: Toolchain name.
            cmd: Compiler command.
        """
        self._name = name
        self.cmd = cmd

    @property
    def name(self) -> str:
        return self._name

    @abstractmethod
    def c_standard_flag(self, standard: str) -> str:
        """Flag selecting a C language standard (e.g. "c11")."""
        ...

    @abstractmethod
    def pic_flags(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        """Flags for position-independent code, if the target needs any."""
        ...

    @abstractmethod
    def optimize_flags(self, optimize: Optimize) -> list[str]:
        """Compiler flags for an optimization mode."""
        ...

    def optimize_link_flags(self, optimize: Optimize) -> list[str]:
        """Linker flags for an optimization mode (none by default)."""
        return []

    @abstractmethod
    def shared_flags(self, triple: TargetTriple) -> list[str]:
        """Flags telling the linker to produce a shared library."""
        ...

    @abstractmethod
    def artifact_name(self, plan: BuildPlan, triple: TargetTriple) -> str: ...

    @abstractmethod
    def compile_command(
        self, plan: BuildPlan, triple: TargetTriple, source: Path, output: Path
    ) -> list[str]: ...

    def context(self, plan: BuildPlan, triple: TargetTriple) -> CompileLinkContext:
        """Create the formatting context for a plan."""
        ctx = self.context_class.from_plan(plan)
        ctx.flags = [
            self.c_standard_flag(plan.c_standard),
            *self.optimize_flags(plan.optimize),
            *self.pic_flags(plan, triple),
        ]
        if not plan.optimize.keeps_assertions:
            ctx.defines.append(NDEBUG_DEFINE)
        if plan.is_shared:
            ctx.link_flags = self.shared_flags(triple)
        ctx.link_flags.extend(self.optimize_link_flags(plan.optimize))
        return ctx

    def compile_args(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        return self.context(plan, triple).compile_tokens()

    def link_args(self, plan: BuildPlan, triple: TargetTriple) -> list[str]:
        return self.context(plan, triple).link_tokens()

    def object_name(self, source: Path) -> str:
        return source.stem + self.object_suffix

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, cmd={self.cmd!r})"
