"""Control-channel integration for live previews.

The preview toolbar publishes two events on an EventChannel:

    fluent:update-strategy  payload: strategy name (None means "default")
    fluent:set-strings      payload: raw FTL with replacement messages

SyncChannelAdapter translates them into strategy swaps and in-place
message overrides on the active LocalizationContext, then asks for a
re-translation.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ftlpreview.diagnostics import ErrorTemplate, FtlPreviewError, MalformedResourceError
from ftlpreview.enums import Strategy, SyncEvent

if TYPE_CHECKING:
    from ftlpreview.localization.controller import LocalizationContext
    from ftlpreview.syntax import FluentParser

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Channel
    "EventChannel",
    "EventHandler",
    "Subscription",
    # Adapter
    "SyncChannelAdapter",
    "OVERRIDE_LABEL",
]

logger = logging.getLogger(__name__)

type EventHandler = Callable[[Any], object]

# Identifier reported in errors about live overrides.
OVERRIDE_LABEL = "<override>"


@dataclass(frozen=True, slots=True, eq=False)
class Subscription:
    """Handle returned by EventChannel.on(); pass it to off()."""

    event: str
    handler: EventHandler


class EventChannel:
    """Synchronous publish/subscribe channel.

    Handlers run in subscription order. A handler raising FtlPreviewError
    does not stop the others: the error is logged and returned by emit().
    Any other exception propagates.

    Example:
        >>> channel = EventChannel()
        >>> seen = []
        >>> sub = channel.on("ping", seen.append)
        >>> channel.emit("ping", 1)
        ()
        >>> seen
        [1]
        >>> channel.off(sub)
        True
    """

    __slots__ = ("_subscriptions",)

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def on(self, event: str, handler: EventHandler) -> Subscription:
        subscription = Subscription(event=event, handler=handler)
        self._subscriptions.append(subscription)
        return subscription

    def off(self, subscription: Subscription) -> bool:
        """Remove a subscription; False if it was not registered."""
        for index, existing in enumerate(self._subscriptions):
            if existing is subscription:
                del self._subscriptions[index]
                return True
        return False

    def subscriber_count(self, event: str | None = None) -> int:
        if event is None:
            return len(self._subscriptions)
        return sum(1 for sub in self._subscriptions if sub.event == event)

    def emit(self, event: str, payload: Any = None) -> tuple[FtlPreviewError, ...]:
        """Deliver payload to every handler of event.

        Returns:
            Errors raised by handlers, in delivery order
        """
        errors: list[FtlPreviewError] = []
        for subscription in tuple(self._subscriptions):
            if subscription.event != event:
                continue
            try:
                subscription.handler(payload)
            except FtlPreviewError as e:
                logger.warning("Handler for %s failed: %s", event, e)
                errors.append(e)
        return tuple(errors)


class SyncChannelAdapter:
    """Applies control-channel events to a LocalizationContext.

    Args:
        context: Context whose bundle and strategy are updated
        parser: Parser for override payloads
        on_change: Called after any change that needs a re-translation
    """

    __slots__ = ("_channel", "_context", "_on_change", "_parser", "_subscriptions")

    def __init__(
        self,
        context: LocalizationContext,
        *,
        parser: FluentParser,
        on_change: Callable[[], object] | None = None,
    ) -> None:
        self._context = context
        self._parser = parser
        self._on_change = on_change
        self._channel: EventChannel | None = None
        self._subscriptions: tuple[Subscription, ...] = ()

    @property
    def is_subscribed(self) -> bool:
        return self._channel is not None

    def subscribe(self, channel: EventChannel) -> None:
        """Listen to channel; a second call while subscribed does nothing."""
        if self._channel is not None:
            return
        self._channel = channel
        self._subscriptions = (
            channel.on(SyncEvent.STRATEGY_CHANGED, self.apply_strategy),
            channel.on(SyncEvent.STRINGS_OVERRIDDEN, self.apply_override),
        )
        logger.debug("Subscribed to preview control channel")

    def unsubscribe(self) -> None:
        if self._channel is None:
            return
        for subscription in self._subscriptions:
            self._channel.off(subscription)
        self._channel = None
        self._subscriptions = ()
        logger.debug("Unsubscribed from preview control channel")

    def apply_strategy(self, name: str | None) -> bool:
        """Switch to strategy name.

        Returns:
            True if the strategy changed; False (silently) when name is the
            active strategy or is not a registered transform
        """
        name = str(name) if name else Strategy.DEFAULT
        if name == self._context.strategy:
            logger.debug("Strategy %s already active", name)
            return False
        if not self._context.transforms.is_known(name):
            logger.debug("Ignoring unknown strategy %r", name)
            return False

        self._context.apply_strategy(name)
        logger.info("Pseudo strategy changed to %s", name)
        self._notify()
        return True

    def apply_override(self, raw_ftl: str) -> tuple[str, ...]:
        """Replace existing messages with the ones defined in raw_ftl.

        Returns:
            Ids of the overridden messages

        Raises:
            MalformedResourceError: If raw_ftl does not parse cleanly
            OverrideTargetMissingError: If any message in raw_ftl is not in
                the bundle; the bundle is left unchanged
        """
        try:
            resource = self._parser.parse(raw_ftl)
        except ValueError as e:
            raise MalformedResourceError(
                ErrorTemplate.resource_rejected(OVERRIDE_LABEL, str(e)), identifier=OVERRIDE_LABEL
            ) from e
        junk = resource.junk
        if junk:
            raise MalformedResourceError(
                ErrorTemplate.resource_malformed(OVERRIDE_LABEL, len(junk)),
                identifier=OVERRIDE_LABEL,
                junk_entries=junk,
            )

        overridden = self._context.bundle.override(resource.entries)
        self._notify()
        return overridden

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
