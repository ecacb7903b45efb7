"""Entry-level FTL parser.

FluentParser drives the grammar rules in :mod:`ftlpreview.syntax.parser.rules`
over a whole resource, attaching single-hash comments to the entry directly
below them and turning unparseable regions into Junk entries instead of
failing the whole file.

Security:
    A configurable source size limit rejects oversized inputs before any
    parsing, and a nesting limit bounds placeable recursion.
"""

import logging
from dataclasses import replace

from ftlpreview.constants import LOG_TRUNCATE_DEBUG, MAX_DEPTH, MAX_SOURCE_SIZE
from ftlpreview.diagnostics import DiagnosticCode
from ftlpreview.enums import CommentType
from ftlpreview.syntax.ast import Comment, Entry, Junk, Message, Resource, Span, Term
from ftlpreview.syntax.cursor import Cursor, ParseResult
from ftlpreview.syntax.parser.rules import (
    ParseContext,
    is_identifier_start,
    parse_comment,
    parse_message,
    parse_term,
)

__all__ = ["FluentParser"]

logger = logging.getLogger(__name__)

_JUNK_ANNOTATION = f"{DiagnosticCode.PARSE_JUNK.name}: expected a message, term or comment"


def _merge_comments(first: Comment, second: Comment) -> Comment:
    """Join adjacent comment lines of the same type."""
    return Comment(content=f"{first.content}\n{second.content}", type=first.type)


class FluentParser:
    """Fluent FTL parser using the immutable cursor pattern.

    Attributes:
        max_source_size: Maximum source size in characters (0 disables the check)
        max_nesting_depth: Maximum placeable nesting depth
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int | None = None,
        max_nesting_depth: int | None = None,
    ) -> None:
        self._max_source_size = max_source_size if max_source_size is not None else MAX_SOURCE_SIZE
        self._max_nesting_depth = (
            max_nesting_depth if max_nesting_depth is not None else MAX_DEPTH
        )

    @property
    def max_source_size(self) -> int:
        return self._max_source_size

    @property
    def max_nesting_depth(self) -> int:
        return self._max_nesting_depth

    def parse(self, source: str) -> Resource:
        """Parse FTL source into a Resource.

        Parsing continues past errors; every unparseable region becomes a
        Junk entry.

        Args:
            source: FTL file content; CRLF line endings are normalized

        Returns:
            Resource whose entries are Message, Term, Comment or Junk

        Raises:
            ValueError: If source exceeds max_source_size

        Example:
            >>> resource = FluentParser().parse("hello = World")
            >>> resource.entries[0].id
            'hello'
        """
        if self._max_source_size > 0 and len(source) > self._max_source_size:
            msg = (
                f"Source size ({len(source):,} characters) exceeds maximum "
                f"({self._max_source_size:,}). "
                "Configure max_source_size in the FluentParser constructor to increase limit."
            )
            raise ValueError(msg)

        source = source.replace("\r\n", "\n")
        cursor = Cursor(source, 0)
        context = ParseContext(max_nesting_depth=self._max_nesting_depth)
        entries: list[Entry] = []

        pending: Comment | None = None
        # Start of the line right after the pending comment.
        pending_end = -1

        while True:
            start = cursor.skip_blank()
            if start.is_eof:
                break
            adjacent = pending is not None and start.pos == pending_end

            if start.current == "#":
                comment_result = parse_comment(start)
                if comment_result is not None:
                    comment = comment_result.value
                    if pending is not None and adjacent and pending.type == comment.type:
                        pending = _merge_comments(pending, comment)
                    else:
                        if pending is not None:
                            entries.append(pending)
                        pending = comment
                    cursor = comment_result.cursor
                    pending_end = cursor.pos
                    continue

            attach: str | None = None
            if pending is not None:
                if adjacent and pending.type == CommentType.COMMENT:
                    attach = pending.content
                else:
                    entries.append(pending)
                pending = None

            entry_result = self._parse_entry(start, context)
            if entry_result is None:
                if attach is not None:
                    entries.append(Comment(content=attach, type=CommentType.COMMENT))
                cursor = self._consume_junk_lines(start)
                junk = Junk(
                    content=start.slice_to(cursor.pos),
                    annotations=(_JUNK_ANNOTATION,),
                    span=Span(start=start.pos, end=cursor.pos),
                )
                logger.debug("Junk at %d: %r", start.pos, junk.content[:LOG_TRUNCATE_DEBUG])
                entries.append(junk)
                continue

            entry = entry_result.value
            if attach is not None:
                entry = replace(entry, comment=attach)
            entries.append(entry)
            cursor = entry_result.cursor

        if pending is not None:
            entries.append(pending)

        return Resource(entries=tuple(entries))

    @staticmethod
    def _parse_entry(cursor: Cursor, context: ParseContext) -> ParseResult[Message | Term] | None:
        if cursor.at("-"):
            return parse_term(cursor, context)
        if is_identifier_start(cursor.current):
            return parse_message(cursor, context)
        return None

    @staticmethod
    def _consume_junk_lines(cursor: Cursor) -> Cursor:
        """Consume junk up to the next line that can start an entry.

        Junk ::= junk_line (junk_line - "#" - "-" - [a-zA-Z])*
        """
        cursor = cursor.skip_to_line_end().skip_line_end()
        while not cursor.is_eof:
            ch = cursor.current
            if ch in ("#", "-") or is_identifier_start(ch):
                break
            cursor = cursor.skip_to_line_end().skip_line_end()
        return cursor
