# SPDX-License-Identifier: MIT
"""Target triple model.

A TargetTriple names the platform a build is planned for as an
(architecture, operating system, ABI) tuple, written ``arch-os-abi``
on the command line (e.g. ``x86_64-linux-gnu``, ``aarch64-macos``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from tsplan.core.errors import TripleParseError


class Arch(str, Enum):
    """CPU architectures tsplan knows how to name."""

    X86_64 = "x86_64"
    AARCH64 = "aarch64"
    X86 = "x86"
    ARM = "arm"
    S390X = "s390x"
    RISCV64 = "riscv64"
    RISCV32 = "riscv32"
    MIPS = "mips"
    MIPS64 = "mips64"
    POWERPC64LE = "powerpc64le"
    LOONGARCH64 = "loongarch64"
    WASM32 = "wasm32"

    def __str__(self) -> str:
        return self.value


class Os(str, Enum):
    """Operating systems tsplan knows how to name."""

    LINUX = "linux"
    WINDOWS = "windows"
    MACOS = "macos"
    FREEBSD = "freebsd"
    NETBSD = "netbsd"
    OPENBSD = "openbsd"
    WASI = "wasi"
    FREESTANDING = "freestanding"

    def __str__(self) -> str:
        return self.value


class Abi(str, Enum):
    """ABIs tsplan knows how to name.

    ``none`` is used where the platform has a single ABI (macOS) or
    when a triple is written without one.
    """

    NONE = "none"
    GNU = "gnu"
    GNUEABI = "gnueabi"
    GNUEABIHF = "gnueabihf"
    MUSL = "musl"
    MUSLEABIHF = "musleabihf"
    ANDROID = "android"
    MSVC = "msvc"

    def __str__(self) -> str:
        return self.value


# Spellings accepted by parse() in addition to the canonical names.
_ARCH_ALIASES: dict[str, Arch] = {
    "amd64": Arch.X86_64,
    "x64": Arch.X86_64,
    "arm64": Arch.AARCH64,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "armv7": Arch.ARM,
    "ppc64le": Arch.POWERPC64LE,
}

_OS_ALIASES: dict[str, Os] = {
    "darwin": Os.MACOS,
    "win32": Os.WINDOWS,
}


@dataclass(frozen=True)
class TargetTriple:
    """An immutable (arch, os, abi) compilation target.

    Example:
        >>> TargetTriple.parse("x86_64-linux-gnu").abi is Abi.GNU
        True
        >>> str(TargetTriple(Arch.AARCH64, Os.MACOS))
        'aarch64-macos-none'
    """

    arch: Arch
    os: Os
    abi: Abi = Abi.NONE

    @classmethod
    def parse(cls, text: str) -> TargetTriple:
        """Parse an ``arch-os[-abi]`` string.

        A two-part ``arch-os`` string always means ``abi=none``; no
        per-OS default ABI is filled in. ``x86_64-linux`` is therefore
        a different target from ``x86_64-linux-gnu``, and only the
        latter has a wasmtime bundle. Spell the ABI out for targets
        that need one.

        Args:
            text: The triple string. Matching is case-insensitive.

        Returns:
            The parsed TargetTriple.

        Raises:
            TripleParseError: If the string is malformed or names an
                unknown component.
        """
        parts = text.strip().lower().split("-")
        if len(parts) not in (2, 3) or not all(parts):
            raise TripleParseError(text, "expected arch-os or arch-os-abi")

        arch_name, os_name = parts[0], parts[1]
        abi_name = parts[2] if len(parts) == 3 else Abi.NONE.value

        arch = _ARCH_ALIASES.get(arch_name)
        if arch is None:
            try:
                arch = Arch(arch_name)
            except ValueError:
                raise TripleParseError(
                    text, f"unknown architecture {arch_name!r}"
                ) from None

        os_ = _OS_ALIASES.get(os_name)
        if os_ is None:
            try:
                os_ = Os(os_name)
            except ValueError:
                raise TripleParseError(
                    text, f"unknown operating system {os_name!r}"
                ) from None

        try:
            abi = Abi(abi_name)
        except ValueError:
            raise TripleParseError(text, f"unknown ABI {abi_name!r}") from None

        return cls(arch, os_, abi)

    @property
    def is_windows(self) -> bool:
        return self.os is Os.WINDOWS

    @property
    def is_macos(self) -> bool:
        return self.os is Os.MACOS

    def __str__(self) -> str:
        return f"{self.arch.value}-{self.os.value}-{self.abi.value}"
