# SPDX-License-Identifier: MIT
"""Source set resolution.

The library can be compiled either from its amalgamated source (one
pre-merged ``lib.c`` that includes every other file) or from the split
sources it stands in for. Never both: compiling ``lib.c`` next to the
split sources defines every symbol twice.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from tsplan.core.errors import SourceScanError

if TYPE_CHECKING:
    from tsplan.core.options import BuildOptions

logger = logging.getLogger(__name__)

AMALGAMATED_SOURCE = "lib.c"
SOURCE_SUFFIX = ".c"


class SourceMode(str, Enum):
    """How the library sources are fed to the compiler."""

    AMALGAMATED = "amalgamated"
    SPLIT = "split"

    @classmethod
    def from_options(cls, options: BuildOptions) -> SourceMode:
        return cls.AMALGAMATED if options.amalgamated else cls.SPLIT


def resolve_sources(
    mode: SourceMode,
    source_dir: Path | str,
    *,
    amalgamated_source: str = AMALGAMATED_SOURCE,
) -> list[Path]:
    """Resolve the source files to compile.

    Args:
        mode: Amalgamated or split sources.
        source_dir: Directory holding the library sources.
        amalgamated_source: File name of the amalgamated source.

    Returns:
        In amalgamated mode, ``[source_dir / amalgamated_source]``
        without looking at the directory. In split mode, every regular
        ``.c`` file directly inside source_dir except the amalgamated
        source, sorted by name. Symbolic links are skipped even when
        they point at a regular file.

    Raises:
        SourceScanError: If source_dir cannot be listed.
    """
    source_dir = Path(source_dir)

    if mode is SourceMode.AMALGAMATED:
        return [source_dir / amalgamated_source]

    logger.debug("Scanning %s for %s sources", source_dir, SOURCE_SUFFIX)
    try:
        names = [
            entry.name
            for entry in source_dir.iterdir()
            if entry.is_file()
            and not entry.is_symlink()
            and entry.suffix == SOURCE_SUFFIX
            and entry.name != amalgamated_source
        ]
    except OSError as e:
        raise SourceScanError(source_dir, e) from e

    # Directory order is filesystem-dependent
    sources = [source_dir / name for name in sorted(names)]
    logger.debug("Found %d split sources in %s", len(sources), source_dir)
    return sources
