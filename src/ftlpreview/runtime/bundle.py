"""TranslationBundle - the single active set of messages a preview renders.

Resources are merged by id with last-writer-wins semantics. The active
pseudo transform is held by the bundle and applied when a message is read,
so swapping it affects every later render without touching stored entries.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from babel import Locale
from babel.core import UnknownLocaleError

from ftlpreview.constants import (
    DEFAULT_LOCALE,
    FALLBACK_INVALID,
    FALLBACK_MISSING_MESSAGE,
    LOG_TRUNCATE_DEBUG,
    LOG_TRUNCATE_WARNING,
    MAX_DEPTH,
)
from ftlpreview.diagnostics import (
    Diagnostic,
    DiagnosticCode,
    ErrorTemplate,
    FluentReferenceError,
    FtlPreviewError,
    OverrideTargetMissingError,
)
from ftlpreview.runtime.pseudo import TextTransform, identity
from ftlpreview.runtime.resolver import FluentValue, PatternResolver
from ftlpreview.syntax import Entry, Junk, Message, Pattern, Resource, Term

__all__ = ["TranslationBundle"]

logger = logging.getLogger(__name__)


class TranslationBundle:
    """Merged messages and terms for one locale plus the active transform.

    Formatting never raises: missing messages and broken references produce
    a readable fallback string and a tuple of errors.

    Examples:
        >>> from ftlpreview.syntax import parse
        >>> bundle = TranslationBundle("en-US", use_isolating=False)
        >>> bundle.add_resource(parse("hello = Hello, { $name }!"))
        ('hello',)
        >>> bundle.format_pattern("hello", {"name": "Ada"})
        ('Hello, Ada!', ())
        >>> bundle.set_transform(str.upper)
        >>> bundle.format_value("hello", {"name": "Ada"})[0]
        'HELLO, Ada!'
    """

    __slots__ = (
        "_babel_locale",
        "_locale",
        "_messages",
        "_resolver",
        "_terms",
        "_transform",
    )

    def __init__(
        self,
        locale: str = DEFAULT_LOCALE,
        /,
        *,
        transform: TextTransform | None = None,
        use_isolating: bool = True,
        max_depth: int = MAX_DEPTH,
    ) -> None:
        """Initialize an empty bundle.

        Args:
            locale: BCP 47 locale code, e.g. "en-US" [positional-only]
            transform: Text transform applied at read time (default: identity)
            use_isolating: Wrap placeables in Unicode bidi isolation marks
            max_depth: Maximum message/term reference depth

        Raises:
            ValueError: If Babel does not recognize the locale
        """
        try:
            self._babel_locale = Locale.parse(locale.replace("_", "-"), sep="-")
        except (UnknownLocaleError, ValueError, TypeError) as e:
            msg = f"Invalid locale code: {locale!r}"
            raise ValueError(msg) from e

        self._locale = locale
        self._messages: dict[str, Message] = {}
        self._terms: dict[str, Term] = {}
        self._transform: TextTransform = transform or identity
        self._resolver = PatternResolver(
            self._babel_locale,
            self._messages,
            self._terms,
            transform=self._transform,
            use_isolating=use_isolating,
            max_depth=max_depth,
        )
        logger.debug("TranslationBundle initialized for locale: %s", locale)

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def babel_locale(self) -> Locale:
        return self._babel_locale

    @property
    def use_isolating(self) -> bool:
        return self._resolver.use_isolating

    @property
    def transform(self) -> TextTransform:
        return self._transform

    def set_transform(self, transform: TextTransform | None) -> None:
        """Swap the read-time transform; None restores identity."""
        self._transform = transform or identity
        self._resolver.transform = self._transform

    def __repr__(self) -> str:
        return (
            f"TranslationBundle(locale={self._locale!r}, "
            f"messages={len(self._messages)}, terms={len(self._terms)})"
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def merge(self, entries: Iterable[Entry], /, *, source_path: str | None = None) -> tuple[str, ...]:
        """Store messages and terms, replacing any with the same id.

        Junk is logged and skipped; comments are ignored.

        Returns:
            Ids of the merged messages, in merge order
        """
        merged: list[str] = []
        terms = 0
        junk_count = 0
        source_desc = source_path or "<string>"

        for entry in entries:
            match entry:
                case Message():
                    if entry.id in self._messages:
                        logger.debug("Replaced message: %s", entry.id)
                    self._messages[entry.id] = entry
                    merged.append(entry.id)
                case Term():
                    self._terms[entry.id] = entry
                    terms += 1
                case Junk():
                    junk_count += 1
                    logger.warning(
                        "Syntax error in %s: %s",
                        source_desc,
                        repr(entry.content[:LOG_TRUNCATE_WARNING]),
                    )
                case _:
                    pass

        logger.info(
            "Added resource %s: %d messages, %d terms, %d junk entries",
            source_desc,
            len(merged),
            terms,
            junk_count,
        )
        return tuple(merged)

    def add_resource(self, resource: Resource, /, *, source_path: str | None = None) -> tuple[str, ...]:
        """Merge every entry of a parsed resource."""
        return self.merge(resource.entries, source_path=source_path)

    def override(self, entries: Iterable[Entry], /) -> tuple[str, ...]:
        """Replace the value and attributes of existing messages and terms.

        All targets are checked before anything is written: if any is
        missing, nothing changes.

        Returns:
            Ids of the overridden messages

        Raises:
            OverrideTargetMissingError: Listing every id with no existing
                message (or "-id" for terms)
        """
        updates = [entry for entry in entries if isinstance(entry, (Message, Term))]

        missing: list[str] = []
        for entry in updates:
            if isinstance(entry, Message) and entry.id not in self._messages:
                missing.append(entry.id)
            elif isinstance(entry, Term) and entry.id not in self._terms:
                missing.append(f"-{entry.id}")
        if missing:
            raise OverrideTargetMissingError(
                ErrorTemplate.override_target_missing(missing), missing_ids=tuple(missing)
            )

        overridden: list[str] = []
        for entry in updates:
            if isinstance(entry, Message):
                current = self._messages[entry.id]
                self._messages[entry.id] = replace(
                    current, value=entry.value, attributes=entry.attributes
                )
                overridden.append(entry.id)
            else:
                current_term = self._terms[entry.id]
                self._terms[entry.id] = replace(
                    current_term, value=entry.value, attributes=entry.attributes
                )
        logger.info("Overrode %d messages", len(overridden))
        return tuple(overridden)

    def clear(self) -> None:
        self._messages.clear()
        self._terms.clear()
        logger.debug("Bundle cleared")

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_message(self, message_id: str) -> Message | None:
        return self._messages.get(message_id)

    def has_message(self, message_id: str) -> bool:
        return message_id in self._messages

    def get_term(self, term_id: str) -> Term | None:
        """Term by id, with or without the leading '-'."""
        return self._terms.get(term_id.removeprefix("-"))

    @property
    def message_ids(self) -> tuple[str, ...]:
        return tuple(self._messages)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages

    def __len__(self) -> int:
        return len(self._messages)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format_pattern(
        self,
        message_id: str,
        /,
        args: Mapping[str, FluentValue] | None = None,
        *,
        attribute: str | None = None,
    ) -> tuple[str, tuple[FtlPreviewError, ...]]:
        """Format a message (or one of its attributes).

        Returns:
            Tuple of (formatted_string, errors); formatted_string is never
            empty and falls back to "{message-id}" when the message is absent
        """
        if not message_id or not isinstance(message_id, str):
            logger.warning("Invalid message ID: empty or non-string")
            diagnostic = Diagnostic(
                code=DiagnosticCode.MESSAGE_NOT_FOUND,
                message="Invalid message ID: empty or non-string",
            )
            return FALLBACK_INVALID, (FluentReferenceError(diagnostic),)

        message = self._messages.get(message_id)
        if message is None:
            logger.warning("Message '%s' not found", message_id)
            error = FluentReferenceError(ErrorTemplate.message_not_found(message_id))
            return FALLBACK_MISSING_MESSAGE.format(id=message_id), (error,)

        result, errors = self._resolver.resolve_message(message, args, attribute)
        if errors:
            logger.warning(
                "Message resolution errors for '%s': %d error(s)", message_id, len(errors)
            )
            for err in errors:
                logger.debug("  - %s: %s", type(err).__name__, err)
        else:
            logger.debug("Resolved message '%s': %s", message_id, result[:LOG_TRUNCATE_DEBUG])
        return result, errors

    def format_value(
        self, message_id: str, args: Mapping[str, FluentValue] | None = None
    ) -> tuple[str, tuple[FtlPreviewError, ...]]:
        """format_pattern() without attribute access."""
        return self.format_pattern(message_id, args)

    def render(
        self, template: str | Pattern, args: Mapping[str, FluentValue] | None = None
    ) -> str:
        """Render text through the active transform.

        A str is treated as literal text; a Pattern is resolved, with only its
        text elements transformed.
        """
        if isinstance(template, str):
            return self._transform(template)
        result, _errors = self._resolver.resolve_pattern(template, args)
        return result
