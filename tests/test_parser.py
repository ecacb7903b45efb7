"""FTL parser tests: entries, patterns, expressions and junk recovery."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlpreview.enums import CommentType
from ftlpreview.syntax import (
    Comment,
    Cursor,
    FluentParser,
    FunctionReference,
    Junk,
    Message,
    MessageReference,
    NumberLiteral,
    Placeable,
    SelectExpression,
    StringLiteral,
    Term,
    TermReference,
    TextElement,
    VariableReference,
    parse,
)

_IDENTIFIERS = st.from_regex(r"[a-z][a-z0-9-]{0,15}", fullmatch=True)
_PLAIN_TEXT = st.text(
    alphabet=st.characters(
        min_codepoint=0x20, max_codepoint=0x7E, exclude_characters="{}[]*.#-\\"
    ),
    min_size=1,
    max_size=40,
).map(str.strip).filter(bool)


def only(source: str) -> Message | Term:
    entries = parse(source).entries
    assert len(entries) == 1, entries
    entry = entries[0]
    assert isinstance(entry, (Message, Term))
    return entry


class TestEntries:
    def test_simple_message(self) -> None:
        message = only("hello = Hello, world!")

        assert isinstance(message, Message)
        assert message.id == "hello"
        assert message.value is not None
        assert message.value.elements == (TextElement("Hello, world!"),)

    def test_term_id_without_dash(self) -> None:
        term = only("-brand-short-name = Nightly")

        assert isinstance(term, Term)
        assert term.id == "brand-short-name"

    def test_attributes_only(self) -> None:
        message = only("button =\n    .label = Save\n    .accesskey = S")

        assert isinstance(message, Message)
        assert message.value is None
        assert [a.id for a in message.attributes] == ["label", "accesskey"]
        assert message.get_attribute("accesskey") is not None

    def test_message_needs_value_or_attribute(self) -> None:
        entries = parse("empty =\nnext = ok").entries

        assert isinstance(entries[0], Junk)
        assert isinstance(entries[1], Message)

    def test_term_needs_value(self) -> None:
        entries = parse("-t =\n    .attr = x").entries

        assert isinstance(entries[0], Junk)

    def test_crlf_normalized(self) -> None:
        resource = parse("a = A\r\nb = B\r\n")

        assert [m.id for m in resource.messages] == ["a", "b"]


class TestComments:
    def test_comment_types(self) -> None:
        entries = parse("# one\n\n## group\n\n### resource\n").entries

        assert [e.type for e in entries if isinstance(e, Comment)] == [
            CommentType.COMMENT,
            CommentType.GROUP,
            CommentType.RESOURCE,
        ]

    def test_adjacent_comments_merge(self) -> None:
        entries = parse("## first\n## second\n").entries

        assert entries == (Comment(content="first\nsecond", type=CommentType.GROUP),)

    def test_comment_attached_to_message(self) -> None:
        message = only("# Shown on the toolbar\nsave = Save")

        assert message.comment == "Shown on the toolbar"

    def test_comment_separated_by_blank_line_stays_standalone(self) -> None:
        entries = parse("# Note\n\nsave = Save").entries

        assert isinstance(entries[0], Comment)
        assert isinstance(entries[1], Message)
        assert entries[1].comment is None

    def test_group_comment_not_attached(self) -> None:
        entries = parse("## Group\nsave = Save").entries

        assert isinstance(entries[0], Comment)
        assert entries[1].comment is None  # type: ignore[union-attr]


class TestPatterns:
    def test_multiline_dedent(self) -> None:
        message = only("text =\n    First line\n      indented\n    last")

        assert message.value is not None
        assert message.value.elements == (TextElement("First line\n  indented\nlast"),)

    def test_inline_then_block(self) -> None:
        message = only("text = Start\n    continued")

        assert message.value is not None
        assert message.value.elements == (TextElement("Start\ncontinued"),)

    def test_trailing_whitespace_trimmed(self) -> None:
        message = only("text = Value   \n\n")

        assert message.value is not None
        assert message.value.elements == (TextElement("Value"),)

    def test_placeables(self) -> None:
        message = only('x = { $a } { b } { -c } { "s" } { 42 } { NUMBER($n) }')

        assert message.value is not None
        expressions = [
            e.expression for e in message.value.elements if isinstance(e, Placeable)
        ]
        assert expressions[0] == VariableReference("a")
        assert expressions[1] == MessageReference("b")
        assert expressions[2] == TermReference("c")
        assert expressions[3] == StringLiteral("s")
        assert expressions[4] == NumberLiteral(42, "42")
        assert isinstance(expressions[5], FunctionReference)

    def test_select_expression(self) -> None:
        message = only("x = { $n ->\n    [one] One\n   *[other] Many\n}")

        assert message.value is not None
        placeable = message.value.elements[0]
        assert isinstance(placeable, Placeable)
        select = placeable.expression
        assert isinstance(select, SelectExpression)
        assert [v.key for v in select.variants] == ["one", "other"]
        assert select.default_variant.key == "other"

    def test_term_call_arguments(self) -> None:
        message = only('x = { -brand(case: "gen", count: 2) }')

        assert message.value is not None
        placeable = message.value.elements[0]
        assert isinstance(placeable, Placeable)
        ref = placeable.expression
        assert isinstance(ref, TermReference)
        assert ref.arguments is not None
        assert [a.name for a in ref.arguments.named] == ["case", "count"]


class TestJunk:
    @pytest.mark.parametrize(
        "source",
        [
            "x = { $n ->\n    [one] One\n}",  # no default variant
            "x = { $n ->\n   *[one] One\n   *[other] Many\n}",  # two defaults
            "x = { msg ->\n   *[other] Many\n}",  # message reference selector
            "x = { $a",  # unclosed placeable
            "x = unbalanced }",
            'x = { "unterminated }',
            "x = { lower(1) }",  # function names are upper case
            "x = { F(a: 1, 2) }",  # positional after named
            "x = { F(a: 1, a: 2) }",  # duplicate named argument
            'x = { "\\q" }',  # unknown escape
        ],
    )
    def test_invalid_syntax_becomes_junk(self, source: str) -> None:
        entries = parse(source).entries

        assert any(isinstance(e, Junk) for e in entries)
        assert not any(isinstance(e, Message) for e in entries)

    def test_recovery_after_junk(self) -> None:
        resource = parse("good = Good\n!! bad line\n  more bad\nalso-good = Yes")

        assert [m.id for m in resource.messages] == ["good", "also-good"]
        junk = resource.junk[0]
        assert junk.content == "!! bad line\n  more bad\n"
        assert junk.span is not None
        assert junk.annotations[0].startswith("PARSE_JUNK")

    def test_nesting_depth_limit(self) -> None:
        parser = FluentParser(max_nesting_depth=1)

        assert parser.parse("x = { 1 }").junk == ()
        assert len(parser.parse("x = { { 1 } }").junk) == 1

    def test_source_size_limit(self) -> None:
        parser = FluentParser(max_source_size=10)

        with pytest.raises(ValueError, match="exceeds maximum"):
            parser.parse("x = " + "a" * 20)

    def test_size_limit_disabled(self) -> None:
        assert FluentParser(max_source_size=0).parse("x = " + "a" * 20).junk == ()


class TestCursor:
    def test_cursor_is_immutable(self) -> None:
        start = Cursor("abc", 0)
        moved = start.advance()

        assert start.pos == 0
        assert moved.pos == 1
        assert moved.current == "b"


class TestParserProperties:
    @given(identifier=_IDENTIFIERS, text=_PLAIN_TEXT)
    def test_simple_message_round_trip(self, identifier: str, text: str) -> None:
        message = only(f"{identifier} = {text}")

        assert message.id == identifier
        assert message.value is not None
        assert message.value.elements == (TextElement(text),)

    @given(source=st.text(max_size=200))
    def test_parser_never_raises(self, source: str) -> None:
        resource = parse(source)

        assert isinstance(resource.entries, tuple)
