# SPDX-License-Identifier: MIT
"""Generator protocol for writing plan files.

Generators take a finished BuildPlan and write files for the tools
that consume it (the artifact emitter, IDEs, language servers).
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple

logger = logging.getLogger(__name__)


@runtime_checkable
class Generator(Protocol):
    """Protocol for plan file generators."""

    @property
    def name(self) -> str:
        """Generator name (e.g., 'build_plan', 'compile_commands')."""
        ...

    def generate(
        self, plan: BuildPlan, triple: TargetTriple, output_dir: Path
    ) -> Path:
        """Write the generator's file for a plan.

        Args:
            plan: The plan to write.
            triple: Target the plan was made for.
            output_dir: Directory to write to (created if needed).

        Returns:
            Path of the written file.
        """
        ...


class BaseGenerator:
    """Base class for generators that write a single JSON file."""

    filename = ""

    def __init__(self, name: str) -> None:
        """Initialize a generator.

        Args:
            name: Generator name.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(
        self, plan: BuildPlan, triple: TargetTriple, output_dir: Path | str
    ) -> Path:
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        output_file = output_dir / self.filename

        with open(output_file, "w") as f:
            json.dump(self._build_content(plan, triple), f, indent=2)
            f.write("\n")

        logger.info("Wrote %s", output_file)
        return output_file

    def _build_content(self, plan: BuildPlan, triple: TargetTriple) -> Any:
        """Build the JSON content. Subclasses must implement."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
