# SPDX-License-Identifier: MIT
"""
tsplan: a platform-aware build planner for the tree-sitter library.

Given a target triple and three build switches (wasm support, shared
library, amalgamated source), tsplan decides which sources are compiled,
which macros and include paths apply, whether the prebuilt wasmtime
bundle is linked, and what library is produced. Compiling is left to an
external emitter that reads the resulting BuildPlan.
"""

from __future__ import annotations

from tsplan.core.classify import classify, supported_triples
from tsplan.core.errors import (
    ClassificationError,
    ConfigureError,
    InvariantViolation,
    SourceScanError,
    TsplanError,
)
from tsplan.core.layout import ProjectLayout
from tsplan.core.options import (
    BuildOptions,
    Linkage,
    Optimize,
    build_option_plan,
)
from tsplan.core.plan import BuildPlan, assemble
from tsplan.core.project import plan_build
from tsplan.core.sources import SourceMode, resolve_sources
from tsplan.core.triple import Abi, Arch, Os, TargetTriple

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Model
    "Abi",
    "Arch",
    "Os",
    "TargetTriple",
    "BuildOptions",
    "BuildPlan",
    "Linkage",
    "Optimize",
    "ProjectLayout",
    "SourceMode",
    # Planning
    "assemble",
    "build_option_plan",
    "classify",
    "plan_build",
    "resolve_sources",
    "supported_triples",
    # Errors
    "ClassificationError",
    "ConfigureError",
    "InvariantViolation",
    "SourceScanError",
    "TsplanError",
]
