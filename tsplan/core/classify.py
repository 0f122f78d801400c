# SPDX-License-Identifier: MIT
"""Target classification for the wasmtime C API bundle.

Wasm support links against a prebuilt wasmtime C API bundle, and each
supported target has its own bundle. classify() maps a TargetTriple to
the bundle's identifier with a three-level lookup (os, then arch, then
ABI). The same architecture maps to different bundles under different
ABIs, so a flat (arch, os) table is not enough.

Every lookup ends in either an identifier or a ClassificationError;
there is no fallback bundle.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tsplan.core.errors import ClassificationError
from tsplan.core.triple import Abi, Arch, Os, TargetTriple

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

# ABI key for platforms where any ABI maps to the same bundle.
ANY_ABI = None

# os -> arch -> abi -> bundle identifier
WASMTIME_TARGETS: Mapping[Os, Mapping[Arch, Mapping[Abi | None, str]]] = {
    Os.LINUX: {
        Arch.X86_64: {
            Abi.GNU: "wasmtime_c_api_x86_64_linux",
            Abi.MUSL: "wasmtime_c_api_x86_64_musl",
            Abi.ANDROID: "wasmtime_c_api_x86_64_android",
        },
        Arch.AARCH64: {
            Abi.GNU: "wasmtime_c_api_aarch64_linux",
            Abi.MUSL: "wasmtime_c_api_aarch64_musl",
            Abi.ANDROID: "wasmtime_c_api_aarch64_android",
        },
        Arch.X86: {
            Abi.GNU: "wasmtime_c_api_i686_linux",
        },
        Arch.ARM: {
            Abi.GNUEABI: "wasmtime_c_api_armv7_linux",
        },
        Arch.S390X: {
            Abi.GNU: "wasmtime_c_api_s390x_linux",
        },
        Arch.RISCV64: {
            Abi.GNU: "wasmtime_c_api_riscv64gc_linux",
        },
    },
    Os.WINDOWS: {
        Arch.X86_64: {
            Abi.GNU: "wasmtime_c_api_x86_64_mingw",
            Abi.MSVC: "wasmtime_c_api_x86_64_windows",
        },
        Arch.AARCH64: {
            Abi.MSVC: "wasmtime_c_api_aarch64_windows",
        },
        Arch.X86: {
            Abi.MSVC: "wasmtime_c_api_i686_windows",
        },
    },
    Os.MACOS: {
        Arch.X86_64: {ANY_ABI: "wasmtime_c_api_x86_64_macos"},
        Arch.AARCH64: {ANY_ABI: "wasmtime_c_api_aarch64_macos"},
    },
}


def validate_table(
    table: Mapping[Os, Mapping[Arch, Mapping[Abi | None, str]]],
) -> None:
    """Check that a classification table maps to unique identifiers.

    An "any ABI" leaf must be the only leaf for its (os, arch) pair,
    otherwise the explicit ABI entries beside it would be unreachable.

    Args:
        table: Table in the WASMTIME_TARGETS shape.

    Raises:
        ValueError: If an identifier repeats or an "any ABI" leaf is
            mixed with explicit ABIs.
    """
    seen: dict[str, tuple[Os, Arch, Abi | None]] = {}
    for os_, arches in table.items():
        for arch, abis in arches.items():
            if ANY_ABI in abis and len(abis) > 1:
                raise ValueError(
                    f"{arch.value}-{os_.value}: 'any ABI' entry mixed with "
                    "explicit ABI entries"
                )
            for abi, identifier in abis.items():
                if identifier in seen:
                    raise ValueError(
                        f"duplicate identifier {identifier!r} for "
                        f"{seen[identifier]} and {(os_, arch, abi)}"
                    )
                seen[identifier] = (os_, arch, abi)


validate_table(WASMTIME_TARGETS)


def classify(triple: TargetTriple) -> str:
    """Get the wasmtime bundle identifier for a target.

    Args:
        triple: The target to classify.

    Returns:
        The bundle identifier, e.g. ``wasmtime_c_api_x86_64_linux``.

    Raises:
        ClassificationError: If the target has no bundle. The error
            carries the triple's three fields.
    """
    arches = WASMTIME_TARGETS.get(triple.os)
    if arches is None:
        raise _unsupported(triple)

    abis = arches.get(triple.arch)
    if abis is None:
        raise _unsupported(triple)

    identifier = abis.get(ANY_ABI) or abis.get(triple.abi)
    if identifier is None:
        raise _unsupported(triple)

    logger.debug("Classified %s as %s", triple, identifier)
    return identifier


def _unsupported(triple: TargetTriple) -> ClassificationError:
    return ClassificationError(
        triple.arch.value, triple.os.value, triple.abi.value
    )


def supported_triples() -> list[tuple[TargetTriple, str]]:
    """List every supported target with its bundle identifier.

    "Any ABI" entries are listed once, with ``Abi.NONE``.

    Returns:
        (triple, identifier) pairs in table order.
    """
    result: list[tuple[TargetTriple, str]] = []
    for os_, arches in WASMTIME_TARGETS.items():
        for arch, abis in arches.items():
            for abi, identifier in abis.items():
                triple = TargetTriple(arch, os_, abi or Abi.NONE)
                result.append((triple, identifier))
    return result
