# SPDX-License-Identifier: MIT
"""Plan file generators for tsplan."""

from tsplan.generators.compile_commands import CompileCommandsGenerator
from tsplan.generators.generator import BaseGenerator, Generator
from tsplan.generators.plan_json import PlanJsonGenerator, describe_plan

__all__ = [
    "BaseGenerator",
    "CompileCommandsGenerator",
    "Generator",
    "PlanJsonGenerator",
    "describe_plan",
]
