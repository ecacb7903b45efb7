"""Fluent syntax package: AST definitions and the resource parser.

Kept separate from runtime so resources can be parsed and inspected
without a bundle.

Python 3.13+.
"""

from .ast import (
    Attribute,
    CallArguments,
    Comment,
    Entry,
    Expression,
    FunctionReference,
    InlineExpression,
    Junk,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    Resource,
    SelectExpression,
    Span,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    VariantKey,
)
from .cursor import Cursor, ParseResult
from .parser import FluentParser

__all__ = [
    "Attribute",
    "CallArguments",
    "Comment",
    "Cursor",
    "Entry",
    "Expression",
    "FluentParser",
    "FunctionReference",
    "InlineExpression",
    "Junk",
    "Message",
    "MessageReference",
    "NamedArgument",
    "NumberLiteral",
    "ParseResult",
    "Pattern",
    "PatternElement",
    "Placeable",
    "Resource",
    "SelectExpression",
    "Span",
    "StringLiteral",
    "Term",
    "TermReference",
    "TextElement",
    "VariableReference",
    "Variant",
    "VariantKey",
    "parse",
]


def parse(source: str) -> Resource:
    """Parse FTL source with default limits.

    Example:
        >>> from ftlpreview.syntax import parse
        >>> parse("hello = Hello, world!").entries[0].id
        'hello'
    """
    return FluentParser().parse(source)
