"""Shared constants for ftlpreview.

Constants are grouped by domain:
- Input limits: size and depth bounds for parsing and resolution
- Locale defaults: the single locale previews render in
- Fallback strings: what consumers see when a lookup fails
- Logging: truncation limits for source excerpts in log records

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Input limits
    "MAX_DEPTH",
    "MAX_SOURCE_SIZE",
    # Locale defaults
    "DEFAULT_LOCALE",
    # Fallback strings
    "FALLBACK_INVALID",
    "FALLBACK_MISSING_MESSAGE",
    "FALLBACK_MISSING_VARIABLE",
    "FALLBACK_MISSING_TERM",
    "FALLBACK_FUNCTION_ERROR",
    # Logging
    "LOG_TRUNCATE_WARNING",
    "LOG_TRUNCATE_DEBUG",
]

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum nesting of placeables while parsing, and of message/term references
# while resolving. Preview resources rarely nest beyond 3 levels.
MAX_DEPTH: int = 100

# Maximum FTL source size in characters (10 MB).
MAX_SOURCE_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Previews render the source-language strings only.
DEFAULT_LOCALE: str = "en-US"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

FALLBACK_INVALID: str = "{???}"

# Format strings - use .format(...)
FALLBACK_MISSING_MESSAGE: str = "{{{id}}}"  # e.g., {my-message}
FALLBACK_MISSING_VARIABLE: str = "{{${name}}}"  # e.g., {$username}
FALLBACK_MISSING_TERM: str = "{{-{name}}}"  # e.g., {-brand}
FALLBACK_FUNCTION_ERROR: str = "{{!{name}}}"  # e.g., {!NUMBER}

# ============================================================================
# LOGGING
# ============================================================================

# Warnings are read by people; debug records are high-volume.
LOG_TRUNCATE_WARNING: int = 100
LOG_TRUNCATE_DEBUG: int = 50
