# SPDX-License-Identifier: MIT
"""The planning pipeline.

plan_build() is the one entry point that runs a full planning pass:
option plan (which classifies the target when wasm is enabled), source
resolution, then assembly. Any error aborts the pass; no partial plan
is ever returned.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tsplan.core.layout import ProjectLayout
from tsplan.core.options import build_option_plan
from tsplan.core.plan import assemble
from tsplan.core.sources import SourceMode, resolve_sources

if TYPE_CHECKING:
    from tsplan.core.options import BuildOptions
    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple
    from tsplan.packages.imported import DependencyLocator

logger = logging.getLogger(__name__)


def plan_build(
    options: BuildOptions,
    triple: TargetTriple,
    *,
    layout: ProjectLayout | None = None,
    locator: DependencyLocator | None = None,
) -> BuildPlan:
    """Plan a library build.

    The target is classified before the source directory is scanned,
    so an unsupported target fails without any I/O.

    Args:
        options: Build switches.
        triple: Target being built for.
        layout: Project layout (defaults to the standard layout).
        locator: Finds the wasmtime bundle root.

    Returns:
        The BuildPlan.

    Raises:
        ClassificationError: Wasm enabled on an unsupported target.
        SourceScanError: The source directory cannot be listed.
        InvariantViolation: Internal inconsistency.
    """
    layout = layout or ProjectLayout()
    logger.info("Planning %s for %s", layout.library_name, triple)

    option_plan = build_option_plan(options, triple, layout=layout, locator=locator)
    sources = resolve_sources(
        SourceMode.from_options(options),
        layout.source_path,
        amalgamated_source=layout.amalgamated_source,
    )
    plan = assemble(sources, option_plan, layout=layout)

    logger.info(
        "Planned %s library from %d source(s)", plan.linkage, len(plan.sources)
    )
    return plan
