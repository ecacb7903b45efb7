"""Diagnostic codes and data structures.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Reference errors (missing messages, terms, variables)
        2000-2999: Resolution errors (runtime evaluation failures)
        3000-3999: Syntax errors (parser failures)
        6000-6999: Loading errors (identifiers, providers, live overrides)
    """

    # Reference errors (1000-1999)
    MESSAGE_NOT_FOUND = 1001
    ATTRIBUTE_NOT_FOUND = 1002
    TERM_NOT_FOUND = 1003
    TERM_ATTRIBUTE_NOT_FOUND = 1004
    VARIABLE_NOT_PROVIDED = 1005
    MESSAGE_NO_VALUE = 1006

    # Resolution errors (2000-2999)
    CYCLIC_REFERENCE = 2001
    NO_VARIANTS = 2002
    FUNCTION_NOT_FOUND = 2003
    FUNCTION_FAILED = 2004
    MAX_DEPTH_EXCEEDED = 2010

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    PARSE_JUNK = 3004

    # Loading errors (6000-6999)
    UNKNOWN_CATEGORY = 6001
    INVALID_IDENTIFIER = 6002
    RESOURCE_ABSENT = 6003
    RESOURCE_MALFORMED = 6004
    OVERRIDE_TARGET_MISSING = 6005


def _escape(text: str) -> str:
    """Escape control characters so diagnostics cannot inject terminal codes."""
    return "".join(ch if ch.isprintable() or ch == "\n" else repr(ch)[1:-1] for ch in text)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        help_url: Documentation URL for this error
        ftl_location: Logical identifier or physical path involved
        severity: Error severity level
        resolution_path: Reference chain at time of error (nested references)
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    help_url: str | None = None
    ftl_location: str | None = None
    severity: Literal["error", "warning"] = "error"
    resolution_path: tuple[str, ...] | None = None

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Example output:
            error[UNKNOWN_CATEGORY]: Unknown root category 'shared' in 'shared/a.ftl'
              --> shared/a.ftl
              = help: Use one of: toolkit, browser, locales-preview, branding, preview

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity}[{self.code.name}]: {_escape(self.message)}"]
        if self.ftl_location:
            lines.append(f"  --> {_escape(self.ftl_location)}")
        if self.resolution_path:
            lines.append(f"  = resolution path: {' -> '.join(self.resolution_path)}")
        if self.hint:
            lines.append(f"  = help: {_escape(self.hint)}")
        if self.help_url:
            lines.append(f"  = note: see {self.help_url}")
        return "\n".join(lines)
