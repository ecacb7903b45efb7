"""Tests for logical identifier -> physical path resolution."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from ftlpreview.config import DEFAULT_ROOT_TABLE, CategoryRule
from ftlpreview.diagnostics import (
    DiagnosticCode,
    InvalidIdentifierError,
    ResolutionError,
    UnknownCategoryError,
)
from ftlpreview.localization import PathResolver, resolve, split_identifier

_SEGMENT = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_0123456789", min_size=1, max_size=12)


class TestDefaultTable:
    """Resolution against the built-in category table."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [
            (
                "toolkit/global/commands.ftl",
                "/firefox/toolkit/locales/en-US/toolkit/global/commands.ftl",
            ),
            (
                "browser/preferences/main.ftl",
                "/firefox/browser/locales/en-US/browser/preferences/main.ftl",
            ),
            (
                "branding/brand/brand.ftl",
                "/firefox/browser/branding/nightly/locales/en-US/brand.ftl",
            ),
            (
                "locales-preview/preview/new-feature.ftl",
                "/firefox/browser/locales-preview/new-feature.ftl",
            ),
            (
                "preview/megalist/megalist.ftl",
                "/firefox/toolkit/components/satchel/megalist/content/megalist.ftl",
            ),
        ],
    )
    def test_known_categories(self, identifier: str, expected: str) -> None:
        assert resolve(identifier) == expected

    def test_unknown_category_raises(self) -> None:
        with pytest.raises(UnknownCategoryError) as exc_info:
            resolve("shared/a.ftl")

        error = exc_info.value
        assert error.category == "shared"
        assert error.identifier == "shared/a.ftl"
        assert error.diagnostic is not None
        assert error.diagnostic.code == DiagnosticCode.UNKNOWN_CATEGORY
        assert "toolkit" in (error.diagnostic.hint or "")

    def test_unknown_category_is_resolution_error(self) -> None:
        with pytest.raises(ResolutionError):
            resolve("nope/a.ftl")

    def test_category_checked_before_path(self) -> None:
        """An unknown category wins over a malformed relative path."""
        with pytest.raises(UnknownCategoryError):
            resolve("nope/../a.ftl")

    @pytest.mark.parametrize(
        "identifier",
        [
            "toolkit",
            "toolkit/",
            "toolkit//a.ftl",
            "toolkit/../secrets.ftl",
            "toolkit/./a.ftl",
            "branding/brand.ftl",
        ],
    )
    def test_invalid_identifiers(self, identifier: str) -> None:
        with pytest.raises(InvalidIdentifierError) as exc_info:
            resolve(identifier)
        assert exc_info.value.identifier == identifier

    def test_category_is_case_sensitive(self) -> None:
        with pytest.raises(UnknownCategoryError):
            resolve("Toolkit/a.ftl")


class TestSplitIdentifier:
    def test_splits_on_first_slash(self) -> None:
        assert split_identifier("browser/a/b.ftl") == ("browser", "a/b.ftl")

    def test_requires_slash(self) -> None:
        with pytest.raises(InvalidIdentifierError):
            split_identifier("browser")


class TestCustomTable:
    def test_custom_table(self) -> None:
        resolver = PathResolver({"app": CategoryRule("/srv/app/l10n/")})

        assert resolver.categories == ("app",)
        assert resolver.resolve("app/main.ftl") == "/srv/app/l10n/main.ftl"
        with pytest.raises(UnknownCategoryError):
            resolver.resolve("toolkit/main.ftl")

    def test_default_resolver_uses_default_table(self) -> None:
        assert PathResolver().categories == tuple(DEFAULT_ROOT_TABLE)


class TestResolutionProperties:
    @given(segments=st.lists(_SEGMENT, min_size=1, max_size=4))
    def test_plain_category_appends_relative_path(self, segments: list[str]) -> None:
        relative = "/".join(segments)
        prefix = DEFAULT_ROOT_TABLE["toolkit"].prefix

        assert resolve(f"toolkit/{relative}") == prefix + relative

    @given(
        namespace=_SEGMENT,
        segments=st.lists(_SEGMENT, min_size=1, max_size=4),
    )
    def test_namespaced_category_drops_first_segment(
        self, namespace: str, segments: list[str]
    ) -> None:
        relative = "/".join(segments)
        prefix = DEFAULT_ROOT_TABLE["branding"].prefix

        assert resolve(f"branding/{namespace}/{relative}") == prefix + relative

    @given(segments=st.lists(_SEGMENT, min_size=1, max_size=4))
    def test_resolution_is_deterministic(self, segments: list[str]) -> None:
        identifier = "browser/" + "/".join(segments)
        assert resolve(identifier) == resolve(identifier)
