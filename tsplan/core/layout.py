# SPDX-License-Identifier: MIT
"""Project layout of the library being planned."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path


@dataclass(frozen=True)
class ProjectLayout:
    """Where the library's files live, relative to the project root.

    Attributes:
        root: Project root directory.
        source_dir: Library sources.
        include_dir: Public headers; also installed with the artifact.
        header_install_dir: Where the public headers are installed,
            relative to the include prefix.
        extra_include_dirs: Private include directories.
        amalgamated_source: File name of the amalgamated source.
        library_name: Base name of the produced library.
        c_standard: C language standard the sources are written to.
    """

    root: Path = Path(".")
    source_dir: Path = Path("lib/src")
    include_dir: Path = Path("lib/include")
    header_install_dir: Path = Path(".")
    extra_include_dirs: tuple[Path, ...] = (Path("lib/src/wasm"),)
    amalgamated_source: str = "lib.c"
    library_name: str = "tree-sitter"
    c_standard: str = "c11"

    def path(self, relative: Path) -> Path:
        """Resolve a layout path against the project root."""
        return self.root / relative

    @property
    def source_path(self) -> Path:
        return self.path(self.source_dir)

    @property
    def include_paths(self) -> list[Path]:
        """Include directories every compilation uses, in order."""
        dirs = [self.include_dir, self.source_dir, *self.extra_include_dirs]
        return [self.path(d) for d in dirs]

    @property
    def header_dir(self) -> Path:
        return self.path(self.include_dir)

    def with_root(self, root: Path | str) -> ProjectLayout:
        return replace(self, root=Path(root))
