"""Diagnostic system for ftlpreview errors.

Provides structured error diagnostics with codes, hints, and help URLs.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    FluentReferenceError,
    FluentResolutionError,
    FtlPreviewError,
    InvalidIdentifierError,
    MalformedResourceError,
    OverrideTargetMissingError,
    ResolutionError,
    ResourceAbsentError,
    UnknownCategoryError,
)
from .templates import ErrorTemplate

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "ErrorTemplate",
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
