"""Runtime package: translation bundle, pattern resolver, pseudo transforms.

Depends on the syntax package for AST types.

Python 3.13+.
"""

from .bundle import TranslationBundle
from .pseudo import (
    PseudoTransformRegistry,
    TextTransform,
    accented,
    bidi,
    create_default_registry,
    get_shared_registry,
    identity,
    transform,
)
from .resolver import FluentNumber, FluentValue, PatternResolver, ResolutionContext, number_format

__all__ = [
    "FluentNumber",
    "FluentValue",
    "PatternResolver",
    "PseudoTransformRegistry",
    "ResolutionContext",
    "TextTransform",
    "TranslationBundle",
    "accented",
    "bidi",
    "create_default_registry",
    "get_shared_registry",
    "identity",
    "number_format",
    "transform",
]
