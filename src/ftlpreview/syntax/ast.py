"""Fluent AST node definitions for the subset previews use.

Identifiers are plain strings; nodes are frozen so a parsed resource can be
shared between the loaded-resource registry and the bundle. Replacing a
message means storing a new node under the same id.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from ftlpreview.enums import CommentType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    "Span",
    # Resource structure
    "Resource",
    "Message",
    "Term",
    "Attribute",
    "Comment",
    "Junk",
    # Pattern elements
    "Pattern",
    "TextElement",
    "Placeable",
    # Expressions
    "SelectExpression",
    "Variant",
    "StringLiteral",
    "NumberLiteral",
    "VariableReference",
    "MessageReference",
    "TermReference",
    "FunctionReference",
    "CallArguments",
    "NamedArgument",
    # Type aliases
    "Entry",
    "PatternElement",
    "Expression",
    "InlineExpression",
    "VariantKey",
]


@dataclass(frozen=True, slots=True)
class Span:
    """Character offsets of a node in its source (end exclusive)."""

    start: int
    end: int


# ============================================================================
# TOP-LEVEL ENTRIES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Resource:
    """Parsed FTL file: entries in source order."""

    entries: tuple["Entry", ...]

    @property
    def messages(self) -> tuple["Message", ...]:
        return tuple(entry for entry in self.entries if Message.guard(entry))

    @property
    def terms(self) -> tuple["Term", ...]:
        return tuple(entry for entry in self.entries if Term.guard(entry))

    @property
    def junk(self) -> tuple["Junk", ...]:
        return tuple(entry for entry in self.entries if Junk.guard(entry))


@dataclass(frozen=True, slots=True)
class Attribute:
    """Named sub-pattern of a message or term.

    Example:
        login = Sign In
            .title = Click here to sign in  <- attribute "title"
    """

    id: str
    value: "Pattern"


@dataclass(frozen=True, slots=True)
class Message:
    """Message definition.

    Examples:
        hello = Hello, world!
        welcome = Welcome, { $name }!
        button =
            .label = Save
            .accesskey = S
    """

    id: str
    value: "Pattern | None"
    attributes: tuple[Attribute, ...] = ()
    comment: str | None = None

    def get_attribute(self, name: str) -> Attribute | None:
        """Return the attribute called name, or None."""
        for attribute in self.attributes:
            if attribute.id == name:
                return attribute
        return None

    @staticmethod
    def guard(entry: object) -> TypeIs["Message"]:
        """Type guard for Message (used in entry filtering)."""
        return isinstance(entry, Message)


@dataclass(frozen=True, slots=True)
class Term:
    """Term definition; id is stored without the leading '-'.

    Example:
        -brand-short-name = Nightly
    """

    id: str
    value: "Pattern"
    attributes: tuple[Attribute, ...] = ()
    comment: str | None = None

    def get_attribute(self, name: str) -> Attribute | None:
        """Return the attribute called name, or None."""
        for attribute in self.attributes:
            if attribute.id == name:
                return attribute
        return None

    @staticmethod
    def guard(entry: object) -> TypeIs["Term"]:
        """Type guard for Term (used in entry filtering)."""
        return isinstance(entry, Term)


@dataclass(frozen=True, slots=True)
class Comment:
    """Standalone comment (# single, ## group, ### resource)."""

    content: str
    type: CommentType


@dataclass(frozen=True, slots=True)
class Junk:
    """Unparseable content kept for diagnostics.

    Attributes:
        content: The unparseable source text
        annotations: Parser messages describing the failure
        span: Location of the junk in the source
    """

    content: str
    annotations: tuple[str, ...] = ()
    span: Span | None = None

    @staticmethod
    def guard(entry: object) -> TypeIs["Junk"]:
        """Type guard for Junk (used in entry filtering)."""
        return isinstance(entry, Junk)


# ============================================================================
# PATTERNS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Pattern:
    """Text pattern with optional placeables."""

    elements: tuple["PatternElement", ...]

    @classmethod
    def from_text(cls, text: str) -> "Pattern":
        """Build a pattern holding a single literal text element."""
        return cls(elements=(TextElement(text),))


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text; the only part of a pattern the pseudo transform touches."""

    value: str


@dataclass(frozen=True, slots=True)
class Placeable:
    """Dynamic content: { expression }"""

    expression: "Expression"


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Variant:
    """One branch of a select expression."""

    key: "VariantKey"
    value: Pattern
    default: bool = False


@dataclass(frozen=True, slots=True)
class SelectExpression:
    """Conditional expression with variants.

    Example:
        { $count ->
            [one] 1 item
           *[other] { $count } items
        }
    """

    selector: "InlineExpression"
    variants: tuple[Variant, ...]

    @property
    def default_variant(self) -> Variant:
        for variant in self.variants:
            if variant.default:
                return variant
        # Parser guarantees exactly one default variant.
        return self.variants[-1]


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """Quoted literal; escapes are already decoded in value."""

    value: str


@dataclass(frozen=True, slots=True)
class NumberLiteral:
    """Number literal: 42 or 3.14 (raw keeps the source spelling)."""

    value: int | float
    raw: str


@dataclass(frozen=True, slots=True)
class VariableReference:
    """Variable reference: $name"""

    name: str


@dataclass(frozen=True, slots=True)
class MessageReference:
    """Message reference: message-id or message-id.attribute"""

    id: str
    attribute: str | None = None


@dataclass(frozen=True, slots=True)
class NamedArgument:
    """Named argument: name: value"""

    name: str
    value: "StringLiteral | NumberLiteral"


@dataclass(frozen=True, slots=True)
class CallArguments:
    """Arguments of a function call or parameterized term."""

    positional: tuple["InlineExpression", ...] = ()
    named: tuple[NamedArgument, ...] = ()


@dataclass(frozen=True, slots=True)
class TermReference:
    """Term reference: -term-id, -term-id.attr or -term-id(case: "x")"""

    id: str
    attribute: str | None = None
    arguments: CallArguments | None = None


@dataclass(frozen=True, slots=True)
class FunctionReference:
    """Function call: NUMBER($count, minimumFractionDigits: 2)"""

    name: str
    arguments: CallArguments


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Entry = Message | Term | Comment | Junk
type PatternElement = TextElement | Placeable
type Expression = SelectExpression | InlineExpression
type InlineExpression = (
    StringLiteral
    | NumberLiteral
    | VariableReference
    | MessageReference
    | TermReference
    | FunctionReference
    | Placeable
)
type VariantKey = str | NumberLiteral
