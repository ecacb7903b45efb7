"""Asset providers: where raw FTL text comes from.

The cache only needs ``lookup(physical_path)``. It may return the text,
None when the asset does not exist, or an awaitable of either (a bundler
that loads chunks lazily). Two concrete providers are included: an
in-memory mapping and a directory on disk laid out like the physical
paths.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Protocol

from ftlpreview.localization.types import FTLSource, PhysicalPath

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "AssetProvider",
    # Concrete providers
    "MappingAssetProvider",
    "DirectoryAssetProvider",
]

logger = logging.getLogger(__name__)

type LookupResult = FTLSource | None | Awaitable[FTLSource | None]


class AssetProvider(Protocol):
    """Protocol for fetching raw FTL text by physical path.

    Example:
        >>> class LazyBundler:
        ...     async def lookup(self, physical_path: str) -> str | None:
        ...         chunk = await import_chunk(physical_path)
        ...         return chunk.text if chunk else None
    """

    def lookup(self, physical_path: PhysicalPath) -> LookupResult:
        """Return the FTL text at physical_path, or None if there is none.

        Raises:
            OSError: If the asset exists but cannot be read
        """
        ...


@dataclass(frozen=True, slots=True)
class MappingAssetProvider:
    """Serves assets from an in-memory mapping of physical path -> text.

    Example:
        >>> provider = MappingAssetProvider({"/firefox/x.ftl": "x = X"})
        >>> provider.lookup("/firefox/x.ftl")
        'x = X'
        >>> provider.lookup("/firefox/y.ftl") is None
        True
    """

    assets: Mapping[PhysicalPath, FTLSource] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "assets", MappingProxyType(dict(self.assets)))

    def lookup(self, physical_path: PhysicalPath) -> FTLSource | None:
        return self.assets.get(physical_path)

    def __len__(self) -> int:
        return len(self.assets)


@dataclass(frozen=True, slots=True)
class DirectoryAssetProvider:
    """Serves assets from a source checkout on disk.

    A physical path such as "/firefox/browser/locales/en-US/browser/a.ftl"
    is read from "<root_dir>/firefox/browser/locales/en-US/browser/a.ftl".

    Security:
        Resolved paths must stay inside root_dir; anything else raises
        ValueError before the filesystem is touched.

    Attributes:
        root_dir: Directory that physical paths are relative to
    """

    root_dir: str
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def describe_path(self, physical_path: PhysicalPath) -> str:
        return str(self._resolved_root / physical_path.lstrip("/"))

    def lookup(self, physical_path: PhysicalPath) -> FTLSource | None:
        """Read the file behind physical_path.

        Returns:
            File content, or None if the file does not exist

        Raises:
            ValueError: If the path escapes root_dir
            OSError: If the file exists but cannot be read
        """
        full_path = (self._resolved_root / physical_path.lstrip("/")).resolve()
        if not self._is_safe_path(self._resolved_root, full_path):
            msg = f"Path traversal detected: {physical_path!r} escapes {self.root_dir!r}"
            raise ValueError(msg)
        try:
            return full_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No asset at %s", full_path)
            return None

    def discover(self, pattern: str = "**/*.ftl") -> MappingAssetProvider:
        """Snapshot every matching file into a MappingAssetProvider.

        Keys are physical paths ("/" + path relative to root_dir).
        """
        assets = {
            "/" + path.relative_to(self._resolved_root).as_posix(): path.read_text(encoding="utf-8")
            for path in sorted(self._resolved_root.glob(pattern))
            if path.is_file()
        }
        logger.info("Discovered %d FTL assets under %s", len(assets), self._resolved_root)
        return MappingAssetProvider(assets)
