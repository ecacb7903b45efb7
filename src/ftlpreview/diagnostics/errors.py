"""ftlpreview exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic for rich error information.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from ftlpreview.syntax.ast import Junk

__all__ = [
    "FluentReferenceError",
    "FluentResolutionError",
    "FtlPreviewError",
    "InvalidIdentifierError",
    "MalformedResourceError",
    "OverrideTargetMissingError",
    "ResolutionError",
    "ResourceAbsentError",
    "UnknownCategoryError",
]


class FtlPreviewError(Exception):
    """Base exception for all ftlpreview errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize FtlPreviewError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.format_error())
        else:
            self.diagnostic = None
            super().__init__(message)


# ============================================================================
# PATH RESOLUTION
# ============================================================================


class ResolutionError(FtlPreviewError):
    """Logical identifier cannot be mapped to a physical path.

    Fatal for the single load that triggered it; raised to the caller.
    """

    def __init__(self, message: str | Diagnostic, *, identifier: str) -> None:
        super().__init__(message)
        self.identifier = identifier


class UnknownCategoryError(ResolutionError):
    """Identifier's first segment is not in the root category table.

    Attributes:
        category: The unrecognized first segment
    """

    def __init__(self, message: str | Diagnostic, *, identifier: str, category: str) -> None:
        super().__init__(message, identifier=identifier)
        self.category = category


class InvalidIdentifierError(ResolutionError):
    """Identifier is structurally unusable (no path, empty or '..' segments)."""


# ============================================================================
# LOADING
# ============================================================================


class ResourceAbsentError(FtlPreviewError):
    """Asset provider returned nothing for a resolved path.

    Recovered locally: reported in the load result, never cached.
    """

    def __init__(self, message: str | Diagnostic, *, identifier: str, physical_path: str) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.physical_path = physical_path


class MalformedResourceError(FtlPreviewError):
    """Resource text failed to parse cleanly; its merge was skipped.

    Attributes:
        identifier: Logical identifier, or "<override>" for live edits
        junk_entries: Unparseable fragments reported by the parser
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        identifier: str,
        junk_entries: tuple[Junk, ...] = (),
    ) -> None:
        super().__init__(message)
        self.identifier = identifier
        self.junk_entries = junk_entries


class OverrideTargetMissingError(FtlPreviewError):
    """Live override references messages absent from the bundle.

    Distinct from ResourceAbsentError: nothing is fetched on this path, and
    the bundle is left untouched.

    Attributes:
        missing_ids: Every override id with no existing target
    """

    def __init__(self, message: str | Diagnostic, *, missing_ids: tuple[str, ...]) -> None:
        super().__init__(message)
        self.missing_ids = missing_ids


# ============================================================================
# RUNTIME
# ============================================================================


class FluentReferenceError(FtlPreviewError):
    """Unknown message, term, attribute or variable reference.

    Collected during formatting and returned, never raised.
    Fallback: the reference in braces, e.g. {$name}.
    """


class FluentResolutionError(FtlPreviewError):
    """Runtime error during pattern resolution.

    Examples:
    - Cyclic reference
    - Unknown function or function failure
    - Depth limit exceeded
    """
