# SPDX-License-Identifier: MIT
"""Host platform detection.

Used when no --target is given: the plan is then made for the machine
tsplan runs on.
"""

from __future__ import annotations

import logging
import platform
import sys
import sysconfig

from tsplan.core.errors import ConfigureError
from tsplan.core.triple import Abi, Arch, Os, TargetTriple

logger = logging.getLogger(__name__)

# platform.machine() values, lower-cased
_MACHINE_MAP: dict[str, Arch] = {
    "x86_64": Arch.X86_64,
    "amd64": Arch.X86_64,
    "aarch64": Arch.AARCH64,
    "arm64": Arch.AARCH64,
    "i386": Arch.X86,
    "i686": Arch.X86,
    "x86": Arch.X86,
    "armv7l": Arch.ARM,
    "armv6l": Arch.ARM,
    "s390x": Arch.S390X,
    "riscv64": Arch.RISCV64,
    "ppc64le": Arch.POWERPC64LE,
    "loongarch64": Arch.LOONGARCH64,
    "mips": Arch.MIPS,
    "mips64": Arch.MIPS64,
}

# platform.system() values, lower-cased
_SYSTEM_MAP: dict[str, Os] = {
    "linux": Os.LINUX,
    "android": Os.LINUX,
    "windows": Os.WINDOWS,
    "darwin": Os.MACOS,
    "freebsd": Os.FREEBSD,
    "netbsd": Os.NETBSD,
    "openbsd": Os.OPENBSD,
}


def _is_android() -> bool:
    return sys.platform == "android" or hasattr(sys, "getandroidapilevel")


def _default_abi(system: str, os_: Os, arch: Arch, libc: str) -> Abi:
    if os_ is Os.LINUX:
        if system == "android" or _is_android():
            return Abi.ANDROID
        if libc == "glibc":
            return Abi.GNUEABIHF if arch is Arch.ARM else Abi.GNU
        return Abi.MUSLEABIHF if arch is Arch.ARM else Abi.MUSL
    if os_ is Os.WINDOWS:
        if sysconfig.get_platform().startswith("mingw"):
            return Abi.GNU
        return Abi.MSVC
    return Abi.NONE


def get_host_triple(
    *,
    system: str | None = None,
    machine: str | None = None,
    libc: str | None = None,
) -> TargetTriple:
    """Detect the target triple of the running machine.

    Args:
        system: Override for platform.system().
        machine: Override for platform.machine().
        libc: Override for platform.libc_ver()[0] ("glibc" or "").

    Returns:
        The host TargetTriple.

    Raises:
        ConfigureError: If the host is not one tsplan can name.
    """
    system = (system if system is not None else platform.system()).lower()
    machine = (machine if machine is not None else platform.machine()).lower()
    if libc is None:
        libc = platform.libc_ver()[0]

    os_ = _SYSTEM_MAP.get(system)
    if os_ is None:
        raise ConfigureError(f"unsupported host operating system: {system!r}")
    arch = _MACHINE_MAP.get(machine)
    if arch is None:
        raise ConfigureError(f"unsupported host architecture: {machine!r}")

    triple = TargetTriple(arch, os_, _default_abi(system, os_, arch, libc))
    logger.debug("Detected host triple %s", triple)
    return triple
