"""Logical identifier -> physical asset path.

An identifier is "<category>/<relative path>". The category selects a
CategoryRule from the root table; the relative path is appended to the
rule's prefix, minus its first segment for categories that namespace
their files.

    >>> resolve("toolkit/global/commands.ftl")
    '/firefox/toolkit/locales/en-US/toolkit/global/commands.ftl'
    >>> resolve("branding/brand/brand.ftl")
    '/firefox/browser/branding/nightly/locales/en-US/brand.ftl'

Python 3.13+. Zero external dependencies.
"""

import logging
from collections.abc import Mapping

from ftlpreview.config import DEFAULT_ROOT_TABLE, CategoryRule
from ftlpreview.diagnostics import ErrorTemplate, InvalidIdentifierError, UnknownCategoryError
from ftlpreview.localization.types import LogicalIdentifier, PhysicalPath

__all__ = ["PathResolver", "resolve", "split_identifier"]

logger = logging.getLogger(__name__)

_FORBIDDEN_SEGMENTS = frozenset({"", ".", ".."})


def _invalid(identifier: str, reason: str) -> InvalidIdentifierError:
    return InvalidIdentifierError(
        ErrorTemplate.invalid_identifier(identifier, reason), identifier=identifier
    )


def split_identifier(identifier: LogicalIdentifier) -> tuple[str, str]:
    """Split on the first '/' into (category, relative path).

    Raises:
        InvalidIdentifierError: If there is no '/'
    """
    category, separator, rest = identifier.partition("/")
    if not separator:
        raise _invalid(identifier, "missing '/' after the root category")
    return category, rest


class PathResolver:
    """Resolves identifiers against a root category table.

    Pure: the same identifier always yields the same path, and nothing is
    cached or fetched.
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, CategoryRule] = DEFAULT_ROOT_TABLE) -> None:
        self._table = table

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._table)

    def resolve(self, identifier: LogicalIdentifier) -> PhysicalPath:
        """Map a logical identifier to its physical path.

        Raises:
            UnknownCategoryError: If the first segment is not in the table
            InvalidIdentifierError: If the relative path is empty, contains
                empty, '.' or '..' segments, or is only a namespace segment
        """
        category, rest = split_identifier(identifier)
        rule = self._table.get(category)
        if rule is None:
            raise UnknownCategoryError(
                ErrorTemplate.unknown_category(category, identifier, self._table),
                identifier=identifier,
                category=category,
            )

        segments = rest.split("/")
        if any(segment in _FORBIDDEN_SEGMENTS for segment in segments):
            raise _invalid(identifier, "empty, '.' or '..' path segment")
        if rule.drop_first_segment:
            segments = segments[1:]
            if not segments:
                raise _invalid(identifier, f"'{category}' paths need a file after the namespace")

        physical = rule.prefix + "/".join(segments)
        logger.debug("Resolved %s -> %s", identifier, physical)
        return physical


_DEFAULT_RESOLVER = PathResolver()


def resolve(identifier: LogicalIdentifier) -> PhysicalPath:
    """Resolve against DEFAULT_ROOT_TABLE."""
    return _DEFAULT_RESOLVER.resolve(identifier)
