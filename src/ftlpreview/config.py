"""Loader configuration.

The root category table maps the first segment of a logical identifier to
the physical prefix its files live under. LoaderConfig bundles the table
with the remaining knobs of the loading pipeline.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ftlpreview.constants import DEFAULT_LOCALE, MAX_SOURCE_SIZE
from ftlpreview.enums import RootCategory, Strategy

__all__ = ["DEFAULT_ROOT_TABLE", "CategoryRule", "LoaderConfig"]


@dataclass(frozen=True, slots=True)
class CategoryRule:
    """Physical location of one root category.

    Attributes:
        prefix: Absolute path prefix, ending in '/'
        drop_first_segment: Discard the first segment of the relative path
            before appending it (the segment only names the category's
            namespace and is not part of the on-disk layout)
    """

    prefix: str
    drop_first_segment: bool = False

    def __post_init__(self) -> None:
        if not self.prefix.endswith("/"):
            msg = f"prefix must end with '/': {self.prefix!r}"
            raise ValueError(msg)


DEFAULT_ROOT_TABLE: Mapping[str, CategoryRule] = MappingProxyType({
    RootCategory.TOOLKIT: CategoryRule("/firefox/toolkit/locales/en-US/toolkit/"),
    RootCategory.BROWSER: CategoryRule("/firefox/browser/locales/en-US/browser/"),
    RootCategory.LOCALES_PREVIEW: CategoryRule(
        "/firefox/browser/locales-preview/", drop_first_segment=True
    ),
    RootCategory.BRANDING: CategoryRule(
        "/firefox/browser/branding/nightly/locales/en-US/", drop_first_segment=True
    ),
    RootCategory.PREVIEW: CategoryRule(
        "/firefox/toolkit/components/satchel/megalist/content/", drop_first_segment=True
    ),
})


@dataclass(frozen=True, slots=True)
class LoaderConfig:
    """Immutable configuration for the localization pipeline.

    Attributes:
        locale: Locale of the single active bundle (default: "en-US")
        root_table: Category -> CategoryRule table used by the path resolver
        default_strategy: Strategy active after initialize() and reset(); must be
            registered in the controller's strategy registry
        reject_junk: Treat any unparseable entry as a malformed resource and
            skip its merge (default: True). When False, valid entries are
            merged and junk is only logged.
        use_isolating: Wrap placeables in Unicode bidi isolation marks
        max_source_size: Largest resource accepted by the parser, in characters

    Example:
        >>> config = LoaderConfig(default_strategy=Strategy.ACCENTED)
        >>> config.locale
        'en-US'
    """

    locale: str = DEFAULT_LOCALE
    root_table: Mapping[str, CategoryRule] = field(default_factory=lambda: DEFAULT_ROOT_TABLE)
    default_strategy: str = Strategy.DEFAULT
    reject_junk: bool = True
    use_isolating: bool = True
    max_source_size: int = MAX_SOURCE_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If locale or root_table is empty, a table key contains
                '/', or max_source_size is negative
        """
        if not self.locale:
            msg = "locale cannot be empty"
            raise ValueError(msg)
        if not self.root_table:
            msg = "root_table cannot be empty"
            raise ValueError(msg)
        for category in self.root_table:
            if not category or "/" in category:
                msg = f"Invalid root category: {category!r}"
                raise ValueError(msg)
        if self.max_source_size < 0:
            msg = "max_source_size cannot be negative"
            raise ValueError(msg)
