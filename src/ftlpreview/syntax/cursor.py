"""Immutable cursor for the FTL parser.

Every advance() returns a new cursor, so a rule that forgets to reassign
cannot loop forever. EOF is a state (is_eof), not a return value.

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass

from ftlpreview.diagnostics import ErrorTemplate

__all__ = ["Cursor", "ParseResult"]


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> Cursor("hi", 2).is_eof
        True
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Character at the current position.

        Raises:
            EOFError: If at end of input; check is_eof first
        """
        if self.is_eof:
            raise EOFError(ErrorTemplate.unexpected_eof(self.pos).message)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Character at position + offset, or None beyond EOF."""
        target = self.pos + offset
        if target >= len(self.source):
            return None
        return self.source[target]

    def advance(self, count: int = 1) -> "Cursor":
        return Cursor(self.source, min(self.pos + count, len(self.source)))

    def slice_to(self, end_pos: int) -> str:
        return self.source[self.pos : end_pos]

    def at(self, char: str) -> bool:
        """True if not at EOF and the current character is char."""
        return not self.is_eof and self.source[self.pos] == char

    def expect(self, char: str) -> "Cursor | None":
        """Consume char if it is next, otherwise return None."""
        if self.at(char):
            return self.advance()
        return None

    def skip_spaces(self) -> "Cursor":
        """Skip U+0020 only (FTL blank_inline)."""
        c = self
        while c.at(" "):
            c = c.advance()
        return c

    def skip_blank(self) -> "Cursor":
        """Skip spaces and newlines (FTL blank)."""
        c = self
        while not c.is_eof and c.current in (" ", "\n"):
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next newline (not consumed) or EOF."""
        end = self.source.find("\n", self.pos)
        return Cursor(self.source, len(self.source) if end == -1 else end)

    def skip_line_end(self) -> "Cursor":
        """Consume one newline if present."""
        return self.advance() if self.at("\n") else self


@dataclass(frozen=True, slots=True)
class ParseResult[T]:
    """Parsed value and the cursor positioned after it."""

    value: T
    cursor: Cursor
