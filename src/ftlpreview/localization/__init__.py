"""On-demand localization package for component previews.

Submodules:
    types      - PEP 695 type aliases (LogicalIdentifier, PhysicalPath, ...)
    paths      - Logical identifier -> physical path resolution
    providers  - AssetProvider protocol, in-memory and directory providers
    registry   - Loaded/in-flight resource registry
    cache      - ResourceCache, ResourceLoadResult, LoadSummary
    controller - LocalizationController and LocalizationContext

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from ftlpreview.enums import LoadStatus
from ftlpreview.localization.cache import LoadSummary, ResourceCache, ResourceLoadResult
from ftlpreview.localization.controller import LocalizationContext, LocalizationController
from ftlpreview.localization.paths import PathResolver, resolve, split_identifier
from ftlpreview.localization.providers import (
    AssetProvider,
    DirectoryAssetProvider,
    MappingAssetProvider,
)
from ftlpreview.localization.registry import IN_FLIGHT, LoadedResourceRegistry
from ftlpreview.localization.types import FTLSource, LogicalIdentifier, MessageId, PhysicalPath

__all__ = [
    # Controller
    "LocalizationController",
    "LocalizationContext",
    # Path resolution
    "PathResolver",
    "resolve",
    "split_identifier",
    # Asset providers
    "AssetProvider",
    "MappingAssetProvider",
    "DirectoryAssetProvider",
    # Loading
    "ResourceCache",
    "LoadedResourceRegistry",
    "IN_FLIGHT",
    "LoadStatus",
    "LoadSummary",
    "ResourceLoadResult",
    # Type aliases
    "FTLSource",
    "LogicalIdentifier",
    "MessageId",
    "PhysicalPath",
]
