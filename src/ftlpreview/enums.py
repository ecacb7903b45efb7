"""Enumerations for ftlpreview type-safe constants.

Uses StrEnum so members compare equal to the plain strings that arrive from
identifiers and from the sync channel.

Python 3.13+.
"""

from enum import StrEnum

__all__ = [
    "CommentType",
    "LoadStatus",
    "RootCategory",
    "Strategy",
    "SyncEvent",
]


class RootCategory(StrEnum):
    """First segment of a logical identifier.

    Selects which physical prefix (and path rule) applies to the rest of
    the identifier.
    """

    TOOLKIT = "toolkit"
    BROWSER = "browser"
    LOCALES_PREVIEW = "locales-preview"
    BRANDING = "branding"
    PREVIEW = "preview"


class Strategy(StrEnum):
    """Pseudo-localization strategy selectable from the preview toolbar."""

    DEFAULT = "default"
    """No transform."""

    ACCENTED = "accented"
    """Accented look-alike letters with elongated vowels."""

    BIDI = "bidi"
    """Flipped look-alike letters in a right-to-left override."""


class SyncEvent(StrEnum):
    """Inbound events on the preview control channel."""

    STRATEGY_CHANGED = "fluent:update-strategy"
    """Payload: strategy name."""

    STRINGS_OVERRIDDEN = "fluent:set-strings"
    """Payload: raw FTL text with replacement messages."""


class LoadStatus(StrEnum):
    """Outcome of a single ensure_loaded() call."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    MALFORMED = "malformed"
    ERROR = "error"


class CommentType(StrEnum):
    """Type of FTL comment.

    StrEnum provides automatic string conversion: str(CommentType.COMMENT) == "comment"
    """

    COMMENT = "comment"
    """Standalone comment: # This is a comment"""

    GROUP = "group"
    """Group comment: ## Group Title"""

    RESOURCE = "resource"
    """Resource comment: ### Resource Description"""
