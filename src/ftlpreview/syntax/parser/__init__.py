"""FTL parser: entry loop plus grammar rules."""

from .core import FluentParser
from .rules import ParseContext

__all__ = ["FluentParser", "ParseContext"]
