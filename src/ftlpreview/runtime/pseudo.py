"""Pseudo-localization transforms.

A transform is a pure ``str -> str`` function applied to every literal text
element when a message is rendered. Stored messages are never rewritten, so
switching the strategy changes what the next render produces and nothing
else.

Built-in strategies:
    default   identity
    accented  Latin letters replaced by accented look-alikes, with the
              vowels a/e/o/u doubled to simulate longer translations
    bidi      Latin letters replaced by flipped look-alikes and wrapped in
              RIGHT-TO-LEFT OVERRIDE ... POP DIRECTIONAL FORMATTING

Markup tags and XML entities pass through untouched so elements embedded
in a message keep working.

Python 3.13+. Zero external dependencies.
"""

import logging
import re
from collections.abc import Callable, Iterator

from ftlpreview.enums import Strategy

__all__ = [
    "PseudoTransformRegistry",
    "TextTransform",
    "accented",
    "bidi",
    "create_default_registry",
    "get_shared_registry",
    "identity",
    "transform",
]

logger = logging.getLogger(__name__)

type TextTransform = Callable[[str], str]

_ACCENTED_CAPS = "ȦƁƇḒḖƑƓĦĪĴĶĿḾȠǾƤɊŘŞŦŬṼẆẊẎẐ"
_ACCENTED_SMALL = "ȧƀƈḓḗƒɠħīĵķŀḿƞǿƥɋřşŧŭṽẇẋẏẑ"
_FLIPPED_CAPS = "∀ԐↃᗡƎℲ⅁HIſӼ⅂WNOԀÒᴚS⊥∩ɅMX⅄Z"
_FLIPPED_SMALL = "ɐqɔpǝɟƃɥıɾʞʅɯuodbɹsʇnʌʍxʎz"

_ELONGATED = frozenset("aeou")

RLO = "\u202e"  # RIGHT-TO-LEFT OVERRIDE
PDF = "\u202c"  # POP DIRECTIONAL FORMATTING

# XML entities (&amp; &#x202a;) and tags (<a href="...">, </a>).
_EXCLUDED = re.compile(r"(&[#\w]+;|<\s*.+?\s*>)")
_LATIN = re.compile(r"[a-zA-Z]")


def _letter_map(caps: str, small: str) -> dict[str, str]:
    return {
        **dict(zip("ABCDEFGHIJKLMNOPQRSTUVWXYZ", caps, strict=True)),
        **dict(zip("abcdefghijklmnopqrstuvwxyz", small, strict=True)),
    }


_ACCENTED_MAP = _letter_map(_ACCENTED_CAPS, _ACCENTED_SMALL)
_FLIPPED_MAP = _letter_map(_FLIPPED_CAPS, _FLIPPED_SMALL)


def _transform_text(
    text: str,
    letters: dict[str, str],
    *,
    elongate: bool = False,
    prefix: str = "",
    postfix: str = "",
) -> str:
    # Single characters are usually access keys.
    if len(text) <= 1:
        return text

    def substitute(match: re.Match[str]) -> str:
        ch = match.group()
        replacement = letters[ch]
        if elongate and ch in _ELONGATED:
            return replacement * 2
        return replacement

    parts = []
    for part in _EXCLUDED.split(text):
        if not part or _EXCLUDED.fullmatch(part):
            parts.append(part)
        else:
            parts.append(f"{prefix}{_LATIN.sub(substitute, part)}{postfix}")
    return "".join(parts)


def identity(text: str) -> str:
    return text


def accented(text: str) -> str:
    """Accented look-alikes with elongated vowels.

    Example:
        >>> accented("Save file")
        'Şȧȧṽḗḗ ƒīŀḗḗ'
    """
    return _transform_text(text, _ACCENTED_MAP, elongate=True)


def bidi(text: str) -> str:
    """Flipped look-alikes inside a right-to-left override."""
    return _transform_text(text, _FLIPPED_MAP, prefix=RLO, postfix=PDF)


class PseudoTransformRegistry:
    """Named text transforms.

    Lookups never fail: an unregistered name resolves to the identity
    transform, so a stale or mistyped strategy degrades to plain text.

    Example:
        >>> registry = create_default_registry()
        >>> registry.transform("accented", "Hi")
        'Ħī'
        >>> registry.transform("no-such-strategy", "Hi")
        'Hi'
    """

    __slots__ = ("_frozen", "_transforms")

    def __init__(self) -> None:
        self._transforms: dict[str, TextTransform] = {}
        self._frozen = False

    def register(self, name: str, func: TextTransform) -> None:
        """Register (or replace) the transform called name.

        Raises:
            TypeError: If the registry is frozen
        """
        if self._frozen:
            msg = "Cannot register transforms on a frozen registry; use copy() first"
            raise TypeError(msg)
        self._transforms[name] = func
        logger.debug("Registered pseudo transform %r", name)

    def get(self, name: str) -> TextTransform:
        """Transform for name, or identity when name is unknown."""
        return self._transforms.get(name, identity)

    def transform(self, name: str, text: str) -> str:
        return self.get(name)(text)

    def is_known(self, name: str) -> bool:
        return name in self._transforms

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._transforms)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def copy(self) -> "PseudoTransformRegistry":
        """Unfrozen copy holding the same transforms."""
        clone = PseudoTransformRegistry()
        clone._transforms = dict(self._transforms)
        return clone

    def __contains__(self, name: object) -> bool:
        return name in self._transforms

    def __iter__(self) -> Iterator[str]:
        return iter(self._transforms)

    def __len__(self) -> int:
        return len(self._transforms)


def create_default_registry() -> PseudoTransformRegistry:
    """Fresh, unfrozen registry with the built-in strategies."""
    registry = PseudoTransformRegistry()
    registry.register(Strategy.DEFAULT, identity)
    registry.register(Strategy.ACCENTED, accented)
    registry.register(Strategy.BIDI, bidi)
    return registry


# Initialized lazily on first access to avoid import-time side effects.
_SHARED_REGISTRY: PseudoTransformRegistry | None = None


def get_shared_registry() -> PseudoTransformRegistry:
    """Shared, frozen registry with the built-in strategies.

    Raises TypeError on register(); use copy() or create_default_registry()
    to add strategies.
    """
    global _SHARED_REGISTRY  # noqa: PLW0603
    if _SHARED_REGISTRY is None:
        _SHARED_REGISTRY = create_default_registry()
        _SHARED_REGISTRY.freeze()
    return _SHARED_REGISTRY


def transform(strategy: str, text: str) -> str:
    """Apply the named built-in strategy to text; unknown names are identity.

    Example:
        >>> transform("default", "Hello")
        'Hello'
        >>> transform("unknown", "Hello")
        'Hello'
    """
    return get_shared_registry().transform(strategy, text)
