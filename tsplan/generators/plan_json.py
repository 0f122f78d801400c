# SPDX-License-Identifier: MIT
"""build_plan.json generator.

Writes the plan in the form the artifact emitter reads: the plan
itself plus the target, the library file name and the arguments
rendered for the target's toolchain.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tsplan.generators.generator import BaseGenerator
from tsplan.toolchains import find_toolchain

if TYPE_CHECKING:
    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple


def describe_plan(plan: BuildPlan, triple: TargetTriple) -> dict[str, Any]:
    """Describe a plan together with its toolchain rendering.

    Args:
        plan: The plan.
        triple: Target the plan was made for.

    Returns:
        A JSON-compatible dict with the keys ``target``, ``toolchain``,
        ``artifact``, ``compile_args``, ``link_args`` and ``plan``.
    """
    toolchain = find_toolchain(triple)
    return {
        "target": str(triple),
        "toolchain": toolchain.name,
        "artifact": toolchain.artifact_name(plan, triple),
        "compile_args": toolchain.compile_args(plan, triple),
        "link_args": toolchain.link_args(plan, triple),
        "plan": plan.to_dict(),
    }


class PlanJsonGenerator(BaseGenerator):
    """Generator for build_plan.json.

    Example:
        generator = PlanJsonGenerator()
        generator.generate(plan, triple, build_dir)
        # Creates <build_dir>/build_plan.json
    """

    filename = "build_plan.json"

    def __init__(self) -> None:
        super().__init__("build_plan")

    def _build_content(self, plan: BuildPlan, triple: TargetTriple) -> Any:
        return describe_plan(plan, triple)
