# SPDX-License-Identifier: MIT
"""Shared fixtures for tsplan tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from tsplan.core.layout import ProjectLayout

SPLIT_SOURCES = ["alloc.c", "get_changed_ranges.c", "language.c", "lexer.c", "parser.c"]


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """A minimal tree-sitter checkout: lib/src, lib/include, lib/src/wasm."""
    src = tmp_path / "lib" / "src"
    (src / "wasm").mkdir(parents=True)
    (tmp_path / "lib" / "include" / "tree_sitter").mkdir(parents=True)
    (tmp_path / "lib" / "include" / "tree_sitter" / "api.h").write_text("")

    # Written out of order on purpose
    for name in reversed(SPLIT_SOURCES):
        (src / name).write_text(f"/* {name} */\n")
    (src / "lib.c").write_text('#include "alloc.c"\n')
    (src / "parser.h").write_text("")
    (src / "README.md").write_text("")
    (src / "unicode").mkdir()
    (src / "wasm" / "stdlib.c").write_text("")
    return tmp_path


@pytest.fixture
def layout(project_root: Path) -> ProjectLayout:
    return ProjectLayout(root=project_root)


@pytest.fixture
def split_sources() -> list[str]:
    """Names of the split sources written by project_root, sorted."""
    return sorted(SPLIT_SOURCES)
