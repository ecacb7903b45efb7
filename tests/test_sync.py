"""Tests for the preview control channel and its adapter."""

import pytest

from ftlpreview import EventChannel, SyncChannelAdapter
from ftlpreview.diagnostics import (
    FtlPreviewError,
    MalformedResourceError,
    OverrideTargetMissingError,
)
from ftlpreview.enums import Strategy, SyncEvent
from ftlpreview.localization import LocalizationContext, LoadedResourceRegistry
from ftlpreview.runtime import TranslationBundle, accented, create_default_registry
from ftlpreview.sync import OVERRIDE_LABEL
from ftlpreview.syntax import FluentParser, parse


def make_adapter(
    source: str = "save = Save\ncancel = Cancel",
) -> tuple[SyncChannelAdapter, LocalizationContext, list[None]]:
    bundle = TranslationBundle("en-US", use_isolating=False)
    bundle.add_resource(parse(source))
    context = LocalizationContext(
        bundle=bundle,
        registry=LoadedResourceRegistry(),
        transforms=create_default_registry(),
        strategy=Strategy.DEFAULT,
    )
    changes: list[None] = []
    adapter = SyncChannelAdapter(
        context, parser=FluentParser(), on_change=lambda: changes.append(None)
    )
    return adapter, context, changes


class TestEventChannel:
    def test_delivery_in_subscription_order(self) -> None:
        channel = EventChannel()
        seen: list[str] = []
        channel.on("e", lambda p: seen.append(f"first:{p}"))
        channel.on("e", lambda p: seen.append(f"second:{p}"))
        channel.on("other", lambda p: seen.append("wrong"))

        assert channel.emit("e", 1) == ()
        assert seen == ["first:1", "second:1"]

    def test_off(self) -> None:
        channel = EventChannel()
        sub = channel.on("e", print)

        assert channel.subscriber_count("e") == 1
        assert channel.off(sub) is True
        assert channel.off(sub) is False
        assert channel.subscriber_count() == 0

    def test_library_errors_are_contained(self) -> None:
        channel = EventChannel()
        seen: list[object] = []

        def failing(payload: object) -> None:
            msg = "boom"
            raise FtlPreviewError(msg)

        channel.on("e", failing)
        channel.on("e", seen.append)

        errors = channel.emit("e", "payload")

        assert len(errors) == 1
        assert str(errors[0]) == "boom"
        assert seen == ["payload"]

    def test_other_errors_propagate(self) -> None:
        channel = EventChannel()

        def failing(payload: object) -> None:
            msg = "bug"
            raise RuntimeError(msg)

        channel.on("e", failing)

        with pytest.raises(RuntimeError, match="bug"):
            channel.emit("e")

    def test_handler_may_unsubscribe_during_emit(self) -> None:
        channel = EventChannel()
        seen: list[str] = []
        subs = []

        def once(payload: object) -> None:
            seen.append("once")
            channel.off(subs[0])

        subs.append(channel.on("e", once))
        channel.on("e", lambda p: seen.append("always"))

        channel.emit("e")
        channel.emit("e")

        assert seen == ["once", "always", "always"]


class TestStrategyChanges:
    def test_switch_strategy(self) -> None:
        adapter, context, changes = make_adapter()

        assert adapter.apply_strategy("accented") is True
        assert context.strategy == Strategy.ACCENTED
        assert context.bundle.format_value("save")[0] == accented("Save")
        assert len(changes) == 1

    def test_same_strategy_is_noop(self) -> None:
        adapter, _, changes = make_adapter()

        assert adapter.apply_strategy("default") is False
        assert changes == []

    def test_unknown_strategy_is_noop(self) -> None:
        adapter, context, changes = make_adapter()
        adapter.apply_strategy("bidi")

        assert adapter.apply_strategy("klingon") is False
        assert context.strategy == Strategy.BIDI
        assert len(changes) == 1

    @pytest.mark.parametrize("payload", [None, ""])
    def test_empty_payload_means_default(self, payload: str | None) -> None:
        adapter, context, _ = make_adapter()
        adapter.apply_strategy("accented")

        assert adapter.apply_strategy(payload) is True
        assert context.strategy == Strategy.DEFAULT
        assert context.bundle.format_value("save")[0] == "Save"


class TestOverrides:
    def test_override_existing_message(self) -> None:
        adapter, context, changes = make_adapter()

        ids = adapter.apply_override("save = Store")

        assert ids == ("save",)
        assert context.bundle.format_value("save")[0] == "Store"
        assert context.bundle.format_value("cancel")[0] == "Cancel"
        assert len(changes) == 1

    def test_override_survives_strategy_change(self) -> None:
        adapter, context, _ = make_adapter()
        adapter.apply_override("save = Store")

        adapter.apply_strategy("accented")

        assert context.bundle.format_value("save")[0] == accented("Store")

    def test_missing_target_raises_and_changes_nothing(self) -> None:
        adapter, context, changes = make_adapter()

        with pytest.raises(OverrideTargetMissingError) as exc_info:
            adapter.apply_override("save = Store\nunknown = Nope")

        assert exc_info.value.missing_ids == ("unknown",)
        assert context.bundle.format_value("save")[0] == "Save"
        assert "unknown" not in context.bundle
        assert changes == []

    def test_malformed_override(self) -> None:
        adapter, context, _ = make_adapter()

        with pytest.raises(MalformedResourceError) as exc_info:
            adapter.apply_override("save = { oops")

        assert exc_info.value.identifier == OVERRIDE_LABEL
        assert len(exc_info.value.junk_entries) == 1
        assert context.bundle.format_value("save")[0] == "Save"


class TestSubscription:
    def test_subscribe_is_idempotent(self) -> None:
        adapter, _, _ = make_adapter()
        channel = EventChannel()

        adapter.subscribe(channel)
        adapter.subscribe(channel)

        assert adapter.is_subscribed
        assert channel.subscriber_count(SyncEvent.STRATEGY_CHANGED) == 1
        assert channel.subscriber_count(SyncEvent.STRINGS_OVERRIDDEN) == 1

    def test_events_drive_adapter(self) -> None:
        adapter, context, _ = make_adapter()
        channel = EventChannel()
        adapter.subscribe(channel)

        channel.emit(SyncEvent.STRATEGY_CHANGED, "bidi")
        channel.emit(SyncEvent.STRINGS_OVERRIDDEN, "cancel = Abort")

        assert context.strategy == Strategy.BIDI
        assert context.bundle.get_message("cancel") is not None
        context.apply_strategy(Strategy.DEFAULT)
        assert context.bundle.format_value("cancel")[0] == "Abort"

    def test_override_error_returned_from_emit(self) -> None:
        adapter, _, _ = make_adapter()
        channel = EventChannel()
        adapter.subscribe(channel)

        errors = channel.emit(SyncEvent.STRINGS_OVERRIDDEN, "missing = X")

        assert len(errors) == 1
        assert isinstance(errors[0], OverrideTargetMissingError)

    def test_unsubscribe(self) -> None:
        adapter, context, _ = make_adapter()
        channel = EventChannel()
        adapter.subscribe(channel)

        adapter.unsubscribe()
        channel.emit(SyncEvent.STRATEGY_CHANGED, "bidi")

        assert not adapter.is_subscribed
        assert channel.subscriber_count() == 0
        assert context.strategy == Strategy.DEFAULT
