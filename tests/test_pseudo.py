"""Tests for pseudo-localization transforms and their registry."""

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from ftlpreview.enums import Strategy
from ftlpreview.runtime import (
    PseudoTransformRegistry,
    accented,
    bidi,
    create_default_registry,
    get_shared_registry,
    identity,
    transform,
)
from ftlpreview.runtime.pseudo import PDF, RLO


class TestAccented:
    def test_letters_and_elongation(self) -> None:
        assert accented("Save file") == "Şȧȧṽḗḗ ƒīŀḗḗ"

    def test_uppercase_vowels_not_elongated(self) -> None:
        assert accented("AEOU") == "ȦḖǾŬ"

    def test_non_latin_untouched(self) -> None:
        assert accented("42 - ok!") == "42 - ǿǿķ!"

    def test_single_character_untouched(self) -> None:
        assert accented("S") == "S"

    def test_markup_preserved(self) -> None:
        assert accented('Go <a href="x">on</a> &amp; up') == (
            'Ɠǿǿ <a href="x">ǿǿƞ</a> &amp; ŭŭƥ'
        )


class TestBidi:
    def test_wraps_in_override(self) -> None:
        assert bidi("Hi") == f"{RLO}Hı{PDF}"

    def test_flips_letters(self) -> None:
        assert bidi("abc") == f"{RLO}ɐqɔ{PDF}"

    def test_markup_outside_override(self) -> None:
        result = bidi("ab<b>cd</b>")

        assert result == f"{RLO}ɐq{PDF}<b>{RLO}ɔp{PDF}</b>"

    def test_single_character_untouched(self) -> None:
        assert bidi("a") == "a"


class TestRegistry:
    def test_default_strategies(self) -> None:
        registry = create_default_registry()

        assert set(registry.names) == {"default", "accented", "bidi"}
        assert registry.get(Strategy.DEFAULT) is identity
        assert registry.transform(Strategy.ACCENTED, "Hi") == "Ħī"
        assert len(registry) == 3
        assert "bidi" in registry

    def test_unknown_strategy_is_identity(self) -> None:
        registry = create_default_registry()

        assert registry.get("klingon") is identity
        assert not registry.is_known("klingon")
        assert transform("klingon", "Hello") == "Hello"

    def test_register_custom(self) -> None:
        registry = create_default_registry()
        registry.register("upper", str.upper)

        assert registry.transform("upper", "hi") == "HI"
        assert list(registry)[-1] == "upper"

    def test_shared_registry_is_frozen(self) -> None:
        shared = get_shared_registry()

        assert shared is get_shared_registry()
        assert shared.frozen
        with pytest.raises(TypeError, match="frozen"):
            shared.register("upper", str.upper)

    def test_copy_is_unfrozen(self) -> None:
        clone = get_shared_registry().copy()
        clone.register("upper", str.upper)

        assert not clone.frozen
        assert "upper" in clone
        assert "upper" not in get_shared_registry()

    def test_empty_registry(self) -> None:
        registry = PseudoTransformRegistry()

        assert registry.transform("accented", "Hi") == "Hi"


class TestTransformProperties:
    @given(text=st.text())
    def test_every_strategy_is_total(self, text: str) -> None:
        for name in (*Strategy, "unknown"):
            assert isinstance(transform(name, text), str)

    @given(text=st.text())
    def test_default_is_identity(self, text: str) -> None:
        assert transform(Strategy.DEFAULT, text) == text

    @given(text=st.text(alphabet=st.characters(exclude_categories=("L",)), min_size=2))
    def test_accented_leaves_non_letters(self, text: str) -> None:
        event(f"len={min(len(text), 10)}")
        assert accented(text) == text

    @given(text=st.text(alphabet="abcdefghijklmnopqrstuvwxyz", min_size=2))
    def test_accented_length(self, text: str) -> None:
        vowels = sum(1 for ch in text if ch in "aeou")
        assert len(accented(text)) == len(text) + vowels
