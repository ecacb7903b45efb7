"""LoaderConfig and CategoryRule validation."""

from types import MappingProxyType

import pytest

from ftlpreview import DEFAULT_ROOT_TABLE, CategoryRule, LoaderConfig
from ftlpreview.constants import MAX_SOURCE_SIZE
from ftlpreview.enums import RootCategory, Strategy


class TestCategoryRule:
    def test_prefix_must_end_with_slash(self) -> None:
        with pytest.raises(ValueError, match="must end with '/'"):
            CategoryRule("/firefox/toolkit")

    def test_frozen(self) -> None:
        rule = CategoryRule("/x/")
        with pytest.raises(AttributeError):
            rule.prefix = "/y/"  # type: ignore[misc]


class TestDefaultRootTable:
    def test_every_category_mapped(self) -> None:
        assert set(DEFAULT_ROOT_TABLE) == set(RootCategory)

    def test_namespaced_categories(self) -> None:
        dropping = {name for name, rule in DEFAULT_ROOT_TABLE.items() if rule.drop_first_segment}

        assert dropping == {
            RootCategory.LOCALES_PREVIEW,
            RootCategory.BRANDING,
            RootCategory.PREVIEW,
        }

    def test_read_only(self) -> None:
        assert isinstance(DEFAULT_ROOT_TABLE, MappingProxyType)


class TestLoaderConfig:
    def test_defaults(self) -> None:
        config = LoaderConfig()

        assert config.locale == "en-US"
        assert config.default_strategy == Strategy.DEFAULT
        assert config.reject_junk is True
        assert config.use_isolating is True
        assert config.max_source_size == MAX_SOURCE_SIZE
        assert config.root_table is DEFAULT_ROOT_TABLE

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"locale": ""},
            {"root_table": {}},
            {"root_table": {"a/b": CategoryRule("/x/")}},
            {"root_table": {"": CategoryRule("/x/")}},
            {"max_source_size": -1},
        ],
    )
    def test_invalid_values(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            LoaderConfig(**kwargs)  # type: ignore[arg-type]
