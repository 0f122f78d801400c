# SPDX-License-Identifier: MIT
"""compile_commands.json generator for IDE integration.

Generates a compile_commands.json file that IDEs and tools like
clang-tidy can use for code intelligence.
"""

from __future__ import annotations

import shlex
from pathlib import Path
from typing import TYPE_CHECKING, Any

from tsplan.generators.generator import BaseGenerator
from tsplan.toolchains import find_toolchain

if TYPE_CHECKING:
    from tsplan.core.plan import BuildPlan
    from tsplan.core.triple import TargetTriple


class CompileCommandsGenerator(BaseGenerator):
    """Generator for compile_commands.json.

    Creates a JSON compilation database in the format expected by
    clang tools, IDEs, and language servers.

    Format:
        [
            {
                "directory": "/path/to/project",
                "file": "lib/src/parser.c",
                "command": "cc -std=c11 ... -c -o obj/parser.o lib/src/parser.c",
                "output": "obj/parser.o"
            },
            ...
        ]

    Object files are named after their source under ``object_dir``.
    """

    filename = "compile_commands.json"

    def __init__(
        self,
        *,
        directory: Path | str = ".",
        object_dir: Path | str = "obj",
    ) -> None:
        """Create a generator.

        Args:
            directory: Working directory recorded in each entry; made
                absolute.
            object_dir: Directory object files are written to.
        """
        super().__init__("compile_commands")
        self.directory = Path(directory)
        self.object_dir = Path(object_dir)

    def _build_content(
        self, plan: BuildPlan, triple: TargetTriple
    ) -> list[dict[str, Any]]:
        toolchain = find_toolchain(triple)
        directory = str(self.directory.absolute())

        commands: list[dict[str, Any]] = []
        for source in plan.sources:
            output = self.object_dir / toolchain.object_name(source)
            cmd = toolchain.compile_command(plan, triple, source, output)
            commands.append(
                {
                    "directory": directory,
                    "file": source.as_posix(),
                    "command": " ".join(shlex.quote(p) for p in cmd),
                    "output": output.as_posix(),
                }
            )
        return commands
