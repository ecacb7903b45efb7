"""ftlpreview - on-demand Fluent (FTL) localization for component previews.

Resolves logical resource identifiers to physical asset paths, loads each
resource at most once into a single translation bundle, applies a
selectable pseudo-localization transform at render time, and applies live
edits pushed over the preview control channel.

Public API:
    LocalizationController - Lifecycle, loading, rendering and live updates
    LoaderConfig - Locale, root category table and loading policy
    TranslationBundle - Merged messages with a read-time transform
    EventChannel - Control channel carrying SyncEvent messages
    MappingAssetProvider / DirectoryAssetProvider - Asset sources
    LocalizableElement / RootTranslator - Reference binding layer
    parse_ftl - Parse FTL source to AST

Exceptions:
    FtlPreviewError - Base exception class
    UnknownCategoryError / InvalidIdentifierError - Path resolution failures
    ResourceAbsentError - Provider had no content
    MalformedResourceError - Resource did not parse cleanly
    OverrideTargetMissingError - Live override for an absent message

Submodules:
    ftlpreview.syntax - AST node types and parser
    ftlpreview.runtime - Bundle, resolver and pseudo transforms
    ftlpreview.localization - Paths, providers, cache and controller
    ftlpreview.diagnostics - Diagnostic codes and error types
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

from .binding import LocalizableElement, RootTranslator
from .config import DEFAULT_ROOT_TABLE, CategoryRule, LoaderConfig
from .diagnostics import (
    FtlPreviewError,
    InvalidIdentifierError,
    MalformedResourceError,
    OverrideTargetMissingError,
    ResourceAbsentError,
    UnknownCategoryError,
)
from .enums import LoadStatus, RootCategory, Strategy, SyncEvent
from .localization import (
    DirectoryAssetProvider,
    LocalizationController,
    MappingAssetProvider,
    ResourceLoadResult,
)
from .runtime import FluentValue, TranslationBundle
from .sync import EventChannel, SyncChannelAdapter
from .syntax import parse as parse_ftl

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
try:
    __version__ = _get_version("ftlpreview")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "DEFAULT_ROOT_TABLE",
    "CategoryRule",
    "DirectoryAssetProvider",
    "EventChannel",
    "FluentValue",
    "FtlPreviewError",
    "InvalidIdentifierError",
    "LoadStatus",
    "LoaderConfig",
    "LocalizableElement",
    "LocalizationController",
    "MalformedResourceError",
    "MappingAssetProvider",
    "OverrideTargetMissingError",
    "ResourceAbsentError",
    "ResourceLoadResult",
    "RootCategory",
    "RootTranslator",
    "Strategy",
    "SyncChannelAdapter",
    "SyncEvent",
    "TranslationBundle",
    "UnknownCategoryError",
    "__version__",
    "parse_ftl",
]
