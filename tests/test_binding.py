"""Tests for the reference binding layer."""

from ftlpreview import LocalizableElement, RootTranslator, TranslationBundle
from ftlpreview.syntax import parse


def bundles(*sources: str) -> list[TranslationBundle]:
    result = []
    for source in sources:
        bundle = TranslationBundle("en-US", use_isolating=False)
        bundle.add_resource(parse(source))
        result.append(bundle)
    return result


class TestLocalizableElement:
    def test_iter_localizable_depth_first(self) -> None:
        tree = LocalizableElement(
            l10n_id="root",
            children=[
                LocalizableElement(children=[LocalizableElement(l10n_id="a")]),
                LocalizableElement(l10n_id="b"),
            ],
        )

        assert [e.l10n_id for e in tree.iter_localizable()] == ["root", "a", "b"]


class TestRootTranslator:
    def test_translates_value_and_attributes(self) -> None:
        element = LocalizableElement(l10n_id="button")
        translator = RootTranslator(
            lambda: bundles("button = Go\n    .title = Go { $where }")
        )
        element.l10n_args["where"] = "home"
        translator.connect_root(element)

        assert translator.translate_roots() == 1
        assert element.text == "Go"
        assert element.attributes == {"title": "Go home"}

    def test_attribute_only_message_keeps_text(self) -> None:
        element = LocalizableElement(l10n_id="button", text="original")
        translator = RootTranslator(lambda: bundles("button =\n    .label = Save"))

        assert translator.translate_element(element) is True
        assert element.text == "original"
        assert element.attributes == {"label": "Save"}

    def test_first_bundle_with_message_wins(self) -> None:
        element = LocalizableElement(l10n_id="b")
        translator = RootTranslator(lambda: bundles("a = First", "b = Second", "b = Third"))

        translator.translate_element(element)

        assert element.text == "Second"

    def test_missing_message_leaves_element(self) -> None:
        element = LocalizableElement(l10n_id="missing", text="keep")
        translator = RootTranslator(lambda: bundles("a = A"))

        assert translator.translate_element(element) is False
        assert element.text == "keep"

    def test_connect_root_is_idempotent(self) -> None:
        root = LocalizableElement()
        translator = RootTranslator(list)

        translator.connect_root(root)
        translator.connect_root(root)

        assert translator.roots == (root,)
        assert translator.disconnect_root(root) is True
        assert translator.disconnect_root(root) is False
        assert translator.translate_roots() == 0
