# SPDX-License-Identifier: MIT
"""Prebuilt external dependencies.

An ExternalDependency represents a prebuilt bundle (headers plus
library) that the build links against instead of compiling. Bundles use
a fixed layout relative to their root::

    <root>/include/   headers
    <root>/lib/       libraries

Where the root lives is decided by the host's dependency resolution
(a download cache, a vendored directory, ...). tsplan only asks a
DependencyLocator for it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

WASMTIME_LIBRARY = "wasmtime"


@dataclass(frozen=True)
class ExternalDependency:
    """A prebuilt bundle required by the build.

    Attributes:
        identifier: Bundle identifier from the classifier.
        root: Root directory of the fetched bundle.
        include_dir: Header directory (``root/include``).
        lib_dir: Library directory (``root/lib``).
        library: Library name to link, without prefix or suffix.
        needed: Whether the library must be recorded as a link
            dependency of the produced artifact.
    """

    identifier: str
    root: Path
    include_dir: Path
    lib_dir: Path
    library: str = WASMTIME_LIBRARY
    needed: bool = False

    @classmethod
    def for_root(
        cls,
        identifier: str,
        root: Path | str,
        *,
        library: str = WASMTIME_LIBRARY,
        needed: bool = False,
    ) -> ExternalDependency:
        """Create a dependency using the standard bundle layout.

        Args:
            identifier: Bundle identifier.
            root: Bundle root directory.
            library: Library name to link.
            needed: Whether the library is a required link dependency.

        Returns:
            ExternalDependency with include/ and lib/ under root.
        """
        root = Path(root)
        return cls(
            identifier=identifier,
            root=root,
            include_dir=root / "include",
            lib_dir=root / "lib",
            library=library,
            needed=needed,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "identifier": self.identifier,
            "root": self.root.as_posix(),
            "include_dir": self.include_dir.as_posix(),
            "lib_dir": self.lib_dir.as_posix(),
            "library": self.library,
            "needed": self.needed,
        }


@runtime_checkable
class DependencyLocator(Protocol):
    """Protocol for finding the root of a fetched bundle."""

    def locate(self, identifier: str) -> Path:
        """Return the bundle root for an identifier.

        Args:
            identifier: Bundle identifier from the classifier.

        Returns:
            Root directory of the bundle.
        """
        ...


class CacheDirLocator:
    """Locate bundles as subdirectories of a cache directory.

    The locator does not touch the filesystem, so a missing bundle
    surfaces when the emitter compiles against it.

    Example:
        locator = CacheDirLocator("deps")
        locator.locate("wasmtime_c_api_x86_64_linux")
        # -> Path("deps/wasmtime_c_api_x86_64_linux")
    """

    def __init__(self, cache_root: Path | str) -> None:
        self.cache_root = Path(cache_root)

    def locate(self, identifier: str) -> Path:
        return self.cache_root / identifier

    def __repr__(self) -> str:
        return f"CacheDirLocator({self.cache_root.as_posix()!r})"
