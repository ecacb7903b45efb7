"""Type aliases for the localization domain.

Python 3.13+. Zero external dependencies.
"""

__all__ = [
    "FTLSource",
    "LogicalIdentifier",
    "MessageId",
    "PhysicalPath",
]

type LogicalIdentifier = str
"""Resource key as components declare it (e.g., 'browser/preferences.ftl')."""

type PhysicalPath = str
"""Absolute asset path an identifier resolves to (e.g., '/firefox/browser/...')."""

type FTLSource = str
"""Raw FTL source text as a Python string."""

type MessageId = str
"""Identifier for a Fluent message (e.g., 'save-button')."""
