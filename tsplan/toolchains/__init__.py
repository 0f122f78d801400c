# SPDX-License-Identifier: MIT
"""Toolchain definitions (GCC-style, MSVC)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from tsplan.core.triple import Abi
from tsplan.toolchains.gcc import GccToolchain
from tsplan.toolchains.msvc import MsvcToolchain

if TYPE_CHECKING:
    from tsplan.core.triple import TargetTriple
    from tsplan.tools.toolchain import BaseToolchain


def find_toolchain(triple: TargetTriple) -> BaseToolchain:
    """Pick the toolchain family that builds for a target.

    Args:
        triple: Target being built for.

    Returns:
        MsvcToolchain for ``*-msvc`` targets, GccToolchain otherwise.
    """
    if triple.abi is Abi.MSVC:
        return MsvcToolchain()
    return GccToolchain()


__all__ = [
    "GccToolchain",
    "MsvcToolchain",
    "find_toolchain",
]
