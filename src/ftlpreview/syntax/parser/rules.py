"""Grammar rules for the FTL subset used by preview resources.

Every rule takes an immutable Cursor and returns ParseResult[T] on success
or None on failure; the entry loop in core.py turns failures into Junk.
Line endings are normalized to LF before any rule runs.

Supported: messages and terms with attributes, multiline indented
patterns, placeables with literals, variable/message/term references,
function calls and select expressions.

Python 3.13+. Zero external dependencies.
"""

import string
from dataclasses import dataclass

from ftlpreview.constants import MAX_DEPTH
from ftlpreview.enums import CommentType
from ftlpreview.syntax.ast import (
    Attribute,
    CallArguments,
    Comment,
    FunctionReference,
    InlineExpression,
    Message,
    MessageReference,
    NamedArgument,
    NumberLiteral,
    Pattern,
    PatternElement,
    Placeable,
    SelectExpression,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    Variant,
    VariantKey,
)
from ftlpreview.syntax.cursor import Cursor, ParseResult

__all__ = [
    "ParseContext",
    "is_identifier_start",
    "parse_comment",
    "parse_identifier",
    "parse_inline_expression",
    "parse_message",
    "parse_pattern",
    "parse_placeable",
    "parse_string_literal",
    "parse_term",
]

_ASCII_LETTERS = frozenset(string.ascii_letters)
_ASCII_DIGITS = frozenset(string.digits)
_HEX_DIGITS = frozenset(string.hexdigits)
_IDENTIFIER_CHARS = _ASCII_LETTERS | _ASCII_DIGITS | {"_", "-"}
_FUNCTION_CHARS = frozenset(string.ascii_uppercase + string.digits + "_-")

# First non-blank characters that end a pattern block instead of continuing it.
_CONTINUATION_STOPS = ("[", "*", ".", "}")

_TEXT_STOPS = ("{", "}", "\n")

_SIMPLE_ESCAPES = {'"': '"', "\\": "\\"}

_COMMENT_TYPES = {
    1: CommentType.COMMENT,
    2: CommentType.GROUP,
    3: CommentType.RESOURCE,
}


@dataclass(slots=True)
class ParseContext:
    """Placeable nesting depth, passed explicitly through the rules.

    Attributes:
        max_nesting_depth: Maximum allowed nesting depth for placeables
        current_depth: Current nesting depth (0 = top level)
    """

    max_nesting_depth: int = MAX_DEPTH
    current_depth: int = 0

    def is_depth_exceeded(self) -> bool:
        return self.current_depth >= self.max_nesting_depth

    def enter_placeable(self) -> "ParseContext":
        return ParseContext(
            max_nesting_depth=self.max_nesting_depth,
            current_depth=self.current_depth + 1,
        )


# =============================================================================
# Primitives
# =============================================================================


def is_identifier_start(ch: str) -> bool:
    """ASCII letter check: Identifier ::= [a-zA-Z] [a-zA-Z0-9_-]*"""
    return ch in _ASCII_LETTERS


def parse_identifier(cursor: Cursor) -> ParseResult[str] | None:
    if cursor.is_eof or not is_identifier_start(cursor.current):
        return None
    end = cursor.advance()
    while not end.is_eof and end.current in _IDENTIFIER_CHARS:
        end = end.advance()
    return ParseResult(cursor.slice_to(end.pos), end)


def parse_number_literal(cursor: Cursor) -> ParseResult[NumberLiteral] | None:
    """NumberLiteral ::= "-"? digits ("." digits)?"""
    end = cursor.expect("-") or cursor
    digits_start = end.pos
    while not end.is_eof and end.current in _ASCII_DIGITS:
        end = end.advance()
    if end.pos == digits_start:
        return None

    is_float = False
    fraction = end.peek(1)
    if end.at(".") and fraction is not None and fraction in _ASCII_DIGITS:
        is_float = True
        end = end.advance()
        while not end.is_eof and end.current in _ASCII_DIGITS:
            end = end.advance()

    raw = cursor.slice_to(end.pos)
    value: int | float = float(raw) if is_float else int(raw)
    return ParseResult(NumberLiteral(value=value, raw=raw), end)


def _parse_escape(cursor: Cursor) -> tuple[str, Cursor] | None:
    """Decode the escape whose backslash has already been consumed."""
    if cursor.is_eof:
        return None
    ch = cursor.current
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch], cursor.advance()
    if ch in ("u", "U"):
        width = 4 if ch == "u" else 6
        digits = cursor.advance().slice_to(cursor.pos + 1 + width)
        if len(digits) != width or any(d not in _HEX_DIGITS for d in digits):
            return None
        code_point = int(digits, 16)
        if code_point > 0x10FFFF or 0xD800 <= code_point <= 0xDFFF:
            return None
        return chr(code_point), cursor.advance(1 + width)
    return None


def parse_string_literal(cursor: Cursor) -> ParseResult[StringLiteral] | None:
    """StringLiteral ::= '"' (char | escape)* '"' on a single line."""
    if not cursor.at('"'):
        return None
    cursor = cursor.advance()
    chars: list[str] = []
    while not cursor.is_eof:
        ch = cursor.current
        if ch == "\n":
            return None
        if ch == '"':
            return ParseResult(StringLiteral("".join(chars)), cursor.advance())
        if ch == "\\":
            escaped = _parse_escape(cursor.advance())
            if escaped is None:
                return None
            value, cursor = escaped
            chars.append(value)
            continue
        chars.append(ch)
        cursor = cursor.advance()
    return None


def _parse_attribute_accessor(cursor: Cursor) -> ParseResult[str | None] | None:
    """Optional ".attr" after a message or term identifier."""
    if not cursor.at("."):
        return ParseResult(None, cursor)
    ident = parse_identifier(cursor.advance())
    if ident is None:
        return None
    return ParseResult(ident.value, ident.cursor)


def _is_function_name(name: str) -> bool:
    return name[0] in string.ascii_uppercase and all(ch in _FUNCTION_CHARS for ch in name)


# =============================================================================
# Expressions
# =============================================================================


def parse_call_arguments(cursor: Cursor, context: ParseContext) -> ParseResult[CallArguments] | None:
    """CallArguments ::= "(" (argument ("," argument)* ","?)? ")"

    Named arguments take literal values and must follow positional ones.
    """
    cursor = cursor.advance().skip_blank()
    positional: list[InlineExpression] = []
    named: list[NamedArgument] = []
    seen: set[str] = set()

    while not cursor.at(")"):
        if cursor.is_eof:
            return None
        argument = parse_inline_expression(cursor, context)
        if argument is None:
            return None
        cursor = argument.cursor.skip_blank()

        if cursor.at(":"):
            key = argument.value
            if not isinstance(key, MessageReference) or key.attribute is not None:
                return None
            if key.id in seen:
                return None
            cursor = cursor.advance().skip_blank()
            literal: ParseResult[StringLiteral] | ParseResult[NumberLiteral] | None
            if cursor.at('"'):
                literal = parse_string_literal(cursor)
            else:
                literal = parse_number_literal(cursor)
            if literal is None:
                return None
            seen.add(key.id)
            named.append(NamedArgument(name=key.id, value=literal.value))
            cursor = literal.cursor.skip_blank()
        else:
            if named:
                return None
            positional.append(argument.value)

        if cursor.at(","):
            cursor = cursor.advance().skip_blank()
        elif not cursor.at(")"):
            return None

    return ParseResult(CallArguments(tuple(positional), tuple(named)), cursor.advance())


def parse_term_reference(cursor: Cursor, context: ParseContext) -> ParseResult[TermReference] | None:
    """TermReference ::= "-" Identifier AttributeAccessor? CallArguments?"""
    ident = parse_identifier(cursor.advance())
    if ident is None:
        return None
    accessor = _parse_attribute_accessor(ident.cursor)
    if accessor is None:
        return None
    cursor = accessor.cursor

    arguments: CallArguments | None = None
    if cursor.at("("):
        call = parse_call_arguments(cursor, context)
        if call is None:
            return None
        arguments, cursor = call.value, call.cursor

    return ParseResult(TermReference(ident.value, accessor.value, arguments), cursor)


def parse_inline_expression(
    cursor: Cursor, context: ParseContext
) -> ParseResult[InlineExpression] | None:
    if cursor.is_eof:
        return None
    ch = cursor.current

    if ch == '"':
        return parse_string_literal(cursor)
    if ch in _ASCII_DIGITS:
        return parse_number_literal(cursor)
    if ch == "-":
        following = cursor.peek(1)
        if following is not None and following in _ASCII_DIGITS:
            return parse_number_literal(cursor)
        return parse_term_reference(cursor, context)
    if ch == "$":
        variable = parse_identifier(cursor.advance())
        if variable is None:
            return None
        return ParseResult(VariableReference(variable.value), variable.cursor)
    if ch == "{":
        return parse_placeable(cursor.advance(), context)

    ident = parse_identifier(cursor)
    if ident is None:
        return None
    if ident.cursor.at("("):
        if not _is_function_name(ident.value):
            return None
        call = parse_call_arguments(ident.cursor, context)
        if call is None:
            return None
        return ParseResult(FunctionReference(ident.value, call.value), call.cursor)

    accessor = _parse_attribute_accessor(ident.cursor)
    if accessor is None:
        return None
    return ParseResult(MessageReference(ident.value, accessor.value), accessor.cursor)


def _is_valid_selector(expression: InlineExpression) -> bool:
    match expression:
        case MessageReference() | Placeable():
            return False
        case TermReference(attribute=None):
            return False
        case _:
            return True


def parse_variant_key(cursor: Cursor) -> ParseResult[VariantKey] | None:
    if cursor.is_eof:
        return None
    if cursor.current in _ASCII_DIGITS or cursor.current == "-":
        return parse_number_literal(cursor)
    return parse_identifier(cursor)


def parse_variants(cursor: Cursor, context: ParseContext) -> ParseResult[tuple[Variant, ...]] | None:
    """Variant list after "->": each variant on its own line, one default."""
    cursor = cursor.skip_spaces()
    if not cursor.at("\n"):
        return None

    variants: list[Variant] = []
    while True:
        line = cursor.skip_blank()
        default = line.at("*")
        if default:
            line = line.advance()
        if not line.at("["):
            if default:
                return None
            break

        key = parse_variant_key(line.advance().skip_blank())
        if key is None:
            return None
        close = key.cursor.skip_blank()
        if not close.at("]"):
            return None

        pattern = parse_pattern(close.advance(), context, in_select=True)
        if pattern is None or pattern.value is None:
            return None
        variants.append(Variant(key=key.value, value=pattern.value, default=default))
        cursor = pattern.cursor

    if sum(1 for variant in variants if variant.default) != 1:
        return None
    return ParseResult(tuple(variants), cursor)


def parse_placeable(cursor: Cursor, context: ParseContext) -> ParseResult[Placeable] | None:
    """Placeable body; cursor is just past the opening brace."""
    if context.is_depth_exceeded():
        return None
    inner = context.enter_placeable()

    expression = parse_inline_expression(cursor.skip_blank(), inner)
    if expression is None:
        return None
    cursor = expression.cursor.skip_blank()

    if cursor.at("-") and cursor.peek(1) == ">":
        if not _is_valid_selector(expression.value):
            return None
        variants = parse_variants(cursor.advance(2), inner)
        if variants is None:
            return None
        cursor = variants.cursor.skip_blank()
        if not cursor.at("}"):
            return None
        select = SelectExpression(selector=expression.value, variants=variants.value)
        return ParseResult(Placeable(select), cursor.advance())

    if not cursor.at("}"):
        return None
    return ParseResult(Placeable(expression.value), cursor.advance())


# =============================================================================
# Patterns
# =============================================================================


@dataclass(frozen=True, slots=True)
class _Indent:
    """Line break(s) plus the indentation of the continuation line."""

    newlines: int
    width: int


def _scan_continuation(cursor: Cursor) -> tuple[int, int, Cursor] | None:
    """Measure the next non-blank line if it continues the current pattern.

    Args:
        cursor: Positioned at a newline

    Returns:
        (newlines consumed, indentation width, cursor at first content
        character), or None when the next line does not continue the block
    """
    newlines = 0
    line = cursor
    while line.at("\n"):
        newlines += 1
        line = line.advance()
        indented = line.skip_spaces()
        if indented.at("\n"):
            line = indented
            continue
        width = indented.pos - line.pos
        if width == 0 or indented.is_eof or indented.current in _CONTINUATION_STOPS:
            return None
        return newlines, width, indented
    return None


def _dedent(parts: list[PatternElement | _Indent]) -> tuple[PatternElement, ...]:
    """Strip the common indent, join adjacent text and trim trailing blank."""
    common = min((part.width for part in parts if isinstance(part, _Indent)), default=0)

    elements: list[PatternElement] = []
    for part in parts:
        element: PatternElement
        if isinstance(part, _Indent):
            element = TextElement("\n" * part.newlines + " " * (part.width - common))
        else:
            element = part
        if isinstance(element, TextElement):
            if not element.value:
                continue
            if elements and isinstance(elements[-1], TextElement):
                elements[-1] = TextElement(elements[-1].value + element.value)
                continue
        elements.append(element)

    if elements and isinstance(elements[-1], TextElement):
        trimmed = elements[-1].value.rstrip(" \n")
        if trimmed:
            elements[-1] = TextElement(trimmed)
        else:
            elements.pop()
    return tuple(elements)


def parse_pattern(
    cursor: Cursor,
    context: ParseContext,
    *,
    in_select: bool = False,
) -> ParseResult[Pattern | None] | None:
    """Parse an inline and/or indented block pattern.

    Args:
        cursor: Positioned right after "=" (or after a variant key)
        context: Parse context for depth tracking
        in_select: A bare "}" ends the pattern instead of being an error

    Returns:
        ParseResult holding the Pattern, or None as value when the pattern
        is empty; None on a syntax error
    """
    cursor = cursor.skip_spaces()
    parts: list[PatternElement | _Indent] = []

    if cursor.at("\n"):
        block = _scan_continuation(cursor)
        if block is None:
            return ParseResult(None, cursor)
        _, width, cursor = block
        parts.append(_Indent(newlines=0, width=width))

    while not cursor.is_eof:
        ch = cursor.current
        if ch == "{":
            placeable = parse_placeable(cursor.advance(), context)
            if placeable is None:
                return None
            parts.append(placeable.value)
            cursor = placeable.cursor
        elif ch == "}":
            if in_select:
                break
            return None
        elif ch == "\n":
            block = _scan_continuation(cursor)
            if block is None:
                break
            newlines, width, cursor = block
            parts.append(_Indent(newlines=newlines, width=width))
        else:
            end = cursor
            while not end.is_eof and end.current not in _TEXT_STOPS:
                end = end.advance()
            parts.append(TextElement(cursor.slice_to(end.pos)))
            cursor = end

    elements = _dedent(parts)
    return ParseResult(Pattern(elements) if elements else None, cursor)


# =============================================================================
# Entries
# =============================================================================


def parse_attributes(cursor: Cursor, context: ParseContext) -> ParseResult[tuple[Attribute, ...]] | None:
    """Zero or more attributes, each on its own line starting with '.'."""
    attributes: list[Attribute] = []
    while cursor.at("\n"):
        line = cursor.advance().skip_blank()
        if not line.at("."):
            break
        ident = parse_identifier(line.advance())
        if ident is None:
            return None
        equals = ident.cursor.skip_spaces()
        if not equals.at("="):
            return None
        pattern = parse_pattern(equals.advance(), context)
        if pattern is None or pattern.value is None:
            return None
        attributes.append(Attribute(id=ident.value, value=pattern.value))
        cursor = pattern.cursor
    return ParseResult(tuple(attributes), cursor)


def parse_message(cursor: Cursor, context: ParseContext) -> ParseResult[Message] | None:
    """Message ::= Identifier "=" ((Pattern Attribute*) | Attribute+)

    Examples:
        "hello = World"
        "welcome = Hello, {$name}!"
        "button =\\n    .label = Save"
    """
    ident = parse_identifier(cursor)
    if ident is None:
        return None
    equals = ident.cursor.skip_spaces()
    if not equals.at("="):
        return None

    pattern = parse_pattern(equals.advance(), context)
    if pattern is None:
        return None
    attributes = parse_attributes(pattern.cursor, context)
    if attributes is None:
        return None
    if pattern.value is None and not attributes.value:
        return None

    message = Message(id=ident.value, value=pattern.value, attributes=attributes.value)
    return ParseResult(message, attributes.cursor)


def parse_term(cursor: Cursor, context: ParseContext) -> ParseResult[Term] | None:
    """Term ::= "-" Identifier "=" Pattern Attribute*  (value required)"""
    ident = parse_identifier(cursor.advance())
    if ident is None:
        return None
    equals = ident.cursor.skip_spaces()
    if not equals.at("="):
        return None

    pattern = parse_pattern(equals.advance(), context)
    if pattern is None or pattern.value is None:
        return None
    attributes = parse_attributes(pattern.cursor, context)
    if attributes is None:
        return None

    term = Term(id=ident.value, value=pattern.value, attributes=attributes.value)
    return ParseResult(term, attributes.cursor)


def parse_comment(cursor: Cursor) -> ParseResult[Comment] | None:
    """One comment line: "#", "##" or "###", then a space or line end."""
    level = 0
    body = cursor
    while body.at("#") and level < 3:
        level += 1
        body = body.advance()
    if body.at("#"):
        return None
    if body.at(" "):
        body = body.advance()
    elif not (body.is_eof or body.at("\n")):
        return None

    end = body.skip_to_line_end()
    comment = Comment(content=body.slice_to(end.pos), type=_COMMENT_TYPES[level])
    return ParseResult(comment, end.skip_line_end())
