# SPDX-License-Identifier: MIT
"""Compile/link context for rendering a plan into command-line tokens.

The formatting (prefixes like -I, -D, -L, -l) is done here rather than
in the generators, so each toolchain picks its own prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsplan.core.plan import BuildPlan


@dataclass
class CompileLinkContext:
    """Compile and link inputs of a plan, before formatting.

    Attributes:
        includes: Include directories (without prefix).
        system_includes: External include directories (without prefix).
        defines: Preprocessor definitions, ``NAME`` or ``NAME=value``.
        flags: Additional compiler flags.
        link_flags: Linker flags.
        libs: Libraries to link (without prefix).
        libdirs: Library search directories (without prefix).
        include_prefix: Prefix for include directories.
        system_include_prefix: Prefix for external include directories.
        define_prefix: Prefix for preprocessor definitions.
        libdir_prefix: Prefix for library directories.
        lib_prefix: Prefix for libraries.
    """

    includes: list[str] = field(default_factory=list)
    system_includes: list[str] = field(default_factory=list)
    defines: list[str] = field(default_factory=list)
    flags: list[str] = field(default_factory=list)
    link_flags: list[str] = field(default_factory=list)
    libs: list[str] = field(default_factory=list)
    libdirs: list[str] = field(default_factory=list)

    include_prefix: str = "-I"
    system_include_prefix: str = "-isystem"
    define_prefix: str = "-D"
    libdir_prefix: str = "-L"
    lib_prefix: str = "-l"

    @classmethod
    def from_plan(cls, plan: BuildPlan, **prefixes: str) -> CompileLinkContext:
        """Create a context holding a plan's paths, defines and libraries.

        Args:
            plan: The build plan.
            **prefixes: Prefix overrides (e.g. define_prefix="/D").

        Returns:
            A CompileLinkContext. Toolchain flags are left empty.
        """
        return cls(
            includes=[p.as_posix() for p in plan.include_paths],
            system_includes=[p.as_posix() for p in plan.system_include_paths],
            defines=[
                f"{name}={value}" if value else name for name, value in plan.defines
            ],
            libs=[lib.name for lib in plan.link_libraries],
            libdirs=[p.as_posix() for p in plan.library_paths],
            **prefixes,
        )

    def compile_tokens(self) -> list[str]:
        """Flags, include and define tokens, in that order."""
        tokens = list(self.flags)
        tokens.extend(f"{self.include_prefix}{inc}" for inc in self.includes)
        for inc in self.system_includes:
            tokens.extend(self._split_prefix(self.system_include_prefix, inc))
        tokens.extend(f"{self.define_prefix}{d}" for d in self.defines)
        return tokens

    def link_tokens(self) -> list[str]:
        """Library directory, linker flag and library tokens."""
        tokens = [f"{self.libdir_prefix}{d}" for d in self.libdirs]
        tokens.extend(self.link_flags)
        tokens.extend(self.format_lib(lib) for lib in self.libs)
        return tokens

    def format_lib(self, lib: str) -> str:
        return f"{self.lib_prefix}{lib}"

    @staticmethod
    def _split_prefix(prefix: str, value: str) -> list[str]:
        # Word prefixes (-isystem) take the path as a separate token
        if prefix.startswith("-") and len(prefix) > 2:
            return [prefix, value]
        return [f"{prefix}{value}"]


@dataclass
class MsvcCompileLinkContext(CompileLinkContext):
    """Context for MSVC compilation and linking.

    Uses MSVC-specific prefixes for flags.
    """

    include_prefix: str = "/I"
    system_include_prefix: str = "/external:I"
    define_prefix: str = "/D"
    libdir_prefix: str = "/LIBPATH:"
    lib_prefix: str = ""

    def format_lib(self, lib: str) -> str:
        # MSVC uses full library names (wasmtime.lib, not -lwasmtime)
        if lib.endswith(".lib"):
            return lib
        return f"{lib}.lib"
