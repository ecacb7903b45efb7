"""Reference binding layer: translates trees of localizable elements.

A LocalizableElement stands in for a rendered component node carrying
``data-l10n-id``/``data-l10n-args``. RootTranslator walks every connected
root and writes the formatted message value into ``text`` and each
message attribute into ``attributes``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ftlpreview.runtime import FluentValue, TranslationBundle

__all__ = ["BindingLayer", "LocalizableElement", "RootTranslator"]

logger = logging.getLogger(__name__)


class BindingLayer(Protocol):
    """What the controller needs from a DOM-like binding layer."""

    def connect_root(self, root: LocalizableElement) -> None: ...

    def translate_roots(self) -> object: ...


@dataclass(slots=True, eq=False)
class LocalizableElement:
    """Node in a component tree.

    Attributes:
        l10n_id: Message id; None for purely structural nodes
        l10n_args: Variables passed to the message
        text: Translated value (written by the translator)
        attributes: Translated attributes (written by the translator)
        children: Child nodes
    """

    l10n_id: str | None = None
    l10n_args: dict[str, FluentValue] = field(default_factory=dict)
    text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[LocalizableElement] = field(default_factory=list)

    def iter_localizable(self) -> Iterator[LocalizableElement]:
        """Depth-first walk yielding nodes that carry an l10n_id."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.l10n_id is not None:
                yield node
            stack.extend(reversed(node.children))


class RootTranslator:
    """Translates connected roots using the first bundle that has a message.

    Args:
        generate_bundles: Returns a fresh iterable of bundles, in priority
            order, on every call
    """

    __slots__ = ("_generate_bundles", "_roots")

    def __init__(self, generate_bundles: Callable[[], Iterable[TranslationBundle]]) -> None:
        self._generate_bundles = generate_bundles
        self._roots: list[LocalizableElement] = []

    @property
    def roots(self) -> tuple[LocalizableElement, ...]:
        return tuple(self._roots)

    def connect_root(self, root: LocalizableElement) -> None:
        if any(existing is root for existing in self._roots):
            return
        self._roots.append(root)
        logger.debug("Connected root %s", root.l10n_id or "<anonymous>")

    def disconnect_root(self, root: LocalizableElement) -> bool:
        for index, existing in enumerate(self._roots):
            if existing is root:
                del self._roots[index]
                return True
        return False

    def translate_roots(self) -> int:
        """Translate every localizable element under every root.

        Returns:
            Number of elements that found a translation
        """
        translated = 0
        for root in self._roots:
            for element in root.iter_localizable():
                if self.translate_element(element):
                    translated += 1
        return translated

    def translate_element(self, element: LocalizableElement) -> bool:
        """Write element's translation; False leaves it untouched."""
        message_id = element.l10n_id
        if message_id is None:
            return False

        for bundle in self._generate_bundles():
            message = bundle.get_message(message_id)
            if message is None:
                continue
            args = element.l10n_args or None
            if message.value is not None:
                element.text, _ = bundle.format_pattern(message_id, args)
            for attribute in message.attributes:
                element.attributes[attribute.id], _ = bundle.format_pattern(
                    message_id, args, attribute=attribute.id
                )
            return True

        logger.warning("Missing translation for %s", message_id)
        return False
