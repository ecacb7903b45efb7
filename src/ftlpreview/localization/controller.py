"""Localization controller for the component-preview environment.

LocalizationController is the single entry point previews talk to. It owns
one LocalizationContext (registry + bundle + active strategy) and wires it
to the resource cache, the control-channel adapter and the binding layer.

Lifecycle:
    controller = LocalizationController(provider, channel=channel)
    controller.initialize(root)              # idempotent
    await controller.ensure_loaded("browser/preferences.ftl")
    channel.emit(SyncEvent.STRATEGY_CHANGED, "accented")
    controller.reset()                       # back to a fresh context

Every other operation raises RuntimeError before initialize().

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Generator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ftlpreview.binding import RootTranslator
from ftlpreview.config import LoaderConfig
from ftlpreview.localization.cache import LoadSummary, ResourceCache, ResourceLoadResult
from ftlpreview.localization.paths import PathResolver
from ftlpreview.localization.registry import LoadedResourceRegistry
from ftlpreview.runtime import PseudoTransformRegistry, TranslationBundle, get_shared_registry
from ftlpreview.sync import SyncChannelAdapter
from ftlpreview.syntax import FluentParser, Message, Pattern

if TYPE_CHECKING:
    from ftlpreview.binding import BindingLayer, LocalizableElement
    from ftlpreview.diagnostics import FtlPreviewError
    from ftlpreview.localization.providers import AssetProvider
    from ftlpreview.localization.types import FTLSource, LogicalIdentifier, MessageId
    from ftlpreview.runtime import FluentValue
    from ftlpreview.sync import EventChannel

__all__ = ["LocalizationContext", "LocalizationController"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LocalizationContext:
    """Mutable state shared by the cache, the adapter and the controller.

    Attributes:
        bundle: The single active translation bundle
        registry: Loaded/in-flight resources
        transforms: Strategy name -> text transform
        strategy: Name of the active strategy
    """

    bundle: TranslationBundle
    registry: LoadedResourceRegistry
    transforms: PseudoTransformRegistry
    strategy: str

    def apply_strategy(self, name: str) -> None:
        """Make name the active strategy and swap the bundle's transform."""
        self.strategy = name
        self.bundle.set_transform(self.transforms.get(name))

    def reset(self, default_strategy: str) -> None:
        self.registry.clear()
        self.bundle.clear()
        self.apply_strategy(default_strategy)


class LocalizationController:
    """Loads resources on demand and keeps previews translated.

    Args:
        provider: Asset provider for raw FTL text
        config: Loader configuration (default: LoaderConfig())
        binding: Binding layer (default: a RootTranslator over this
            controller's bundles)
        channel: Control channel to subscribe to on initialize()
        parser: FTL parser (default: FluentParser with config.max_source_size)
        transforms: Strategy registry (default: the shared built-in registry)

    Example:
        >>> provider = MappingAssetProvider({
        ...     "/firefox/toolkit/locales/en-US/toolkit/a.ftl": "save = Save",
        ... })
        >>> controller = LocalizationController(provider)
        >>> controller.initialize()
        >>> asyncio.run(controller.ensure_loaded("toolkit/a.ftl")).status
        <LoadStatus.SUCCESS: 'success'>
        >>> controller.format_value("save")
        ('Save', ())

    Raises:
        ValueError: If config.default_strategy is not in the strategy registry
    """

    __slots__ = (
        "_adapter",
        "_binding",
        "_cache",
        "_channel",
        "_config",
        "_context",
        "_initialized",
        "_parser",
    )

    def __init__(
        self,
        provider: AssetProvider,
        *,
        config: LoaderConfig | None = None,
        binding: BindingLayer | None = None,
        channel: EventChannel | None = None,
        parser: FluentParser | None = None,
        transforms: PseudoTransformRegistry | None = None,
    ) -> None:
        self._config = config if config is not None else LoaderConfig()
        self._parser = (
            parser if parser is not None
            else FluentParser(max_source_size=self._config.max_source_size)
        )

        if transforms is None:
            transforms = get_shared_registry()
        if self._config.default_strategy not in transforms:
            msg = (
                f"Unknown default strategy {self._config.default_strategy!r}; "
                f"expected one of: {', '.join(transforms.names)}"
            )
            raise ValueError(msg)

        bundle = TranslationBundle(self._config.locale, use_isolating=self._config.use_isolating)
        self._context = LocalizationContext(
            bundle=bundle,
            registry=LoadedResourceRegistry(),
            transforms=transforms,
            strategy=self._config.default_strategy,
        )
        self._context.apply_strategy(self._config.default_strategy)

        self._binding: BindingLayer = (
            binding if binding is not None else RootTranslator(self.generate_bundles)
        )
        self._cache = ResourceCache(
            provider,
            bundle,
            self._context.registry,
            resolver=PathResolver(self._config.root_table),
            parser=self._parser,
            reject_junk=self._config.reject_junk,
            on_merged=self.translate_roots,
        )
        self._adapter = SyncChannelAdapter(
            self._context, parser=self._parser, on_change=self.translate_roots
        )
        self._channel = channel
        self._initialized = False

    def __repr__(self) -> str:
        return (
            f"LocalizationController(initialized={self._initialized}, "
            f"strategy={self._context.strategy!r}, bundle={self._context.bundle!r})"
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def config(self) -> LoaderConfig:
        return self._config

    def initialize(self, root: LocalizableElement | None = None) -> None:
        """Set up the context and connect root; safe to call repeatedly.

        Only the first call (after construction or reset()) subscribes to
        the control channel. Every call connects root, if given, and
        re-translates.
        """
        if not self._initialized:
            self._initialized = True
            if self._channel is not None:
                self._adapter.subscribe(self._channel)
            logger.info(
                "Localization initialized (locale=%s, strategy=%s)",
                self._config.locale,
                self._context.strategy,
            )
        if root is not None:
            self._binding.connect_root(root)
        self.translate_roots()

    def reset(self) -> None:
        """Discard every loaded resource and return to the uninitialized state.

        Loads still in flight finish without merging.
        """
        self._adapter.unsubscribe()
        self._context.reset(self._config.default_strategy)
        self._cache.clear_results()
        self._initialized = False
        logger.info("Localization context reset")

    def _require_initialized(self) -> None:
        if not self._initialized:
            msg = "LocalizationController.initialize() must be called first"
            raise RuntimeError(msg)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def ensure_loaded(self, identifier: LogicalIdentifier) -> ResourceLoadResult:
        """Load identifier at most once; see ResourceCache.ensure_loaded()."""
        self._require_initialized()
        return await self._cache.ensure_loaded(identifier)

    def provide_resource(
        self, source: FTLSource, identifier: LogicalIdentifier | None = None
    ) -> ResourceLoadResult:
        """Merge raw FTL text directly into the bundle."""
        self._require_initialized()
        return self._cache.provide(source, identifier)

    def get_load_summary(self) -> LoadSummary:
        return self._cache.get_load_summary()

    @property
    def registry(self) -> LoadedResourceRegistry:
        return self._context.registry

    # ------------------------------------------------------------------
    # Live updates
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> str:
        return self._context.strategy

    def set_strategy(self, name: str | None) -> bool:
        """Switch pseudo strategy; False if unchanged or unknown."""
        self._require_initialized()
        return self._adapter.apply_strategy(name)

    def apply_override(self, raw_ftl: str) -> tuple[MessageId, ...]:
        """Override existing messages in place; see SyncChannelAdapter."""
        self._require_initialized()
        return self._adapter.apply_override(raw_ftl)

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def bundle(self) -> TranslationBundle:
        return self._context.bundle

    def generate_bundles(self) -> Generator[TranslationBundle]:
        """Bundles in priority order; each call starts a fresh iteration."""
        yield self._context.bundle

    def get_message(self, message_id: MessageId) -> Message | None:
        self._require_initialized()
        return self._context.bundle.get_message(message_id)

    def render(
        self, template: str | Pattern, args: Mapping[str, FluentValue] | None = None
    ) -> str:
        self._require_initialized()
        return self._context.bundle.render(template, args)

    def format_value(
        self, message_id: MessageId, args: Mapping[str, FluentValue] | None = None
    ) -> tuple[str, tuple[FtlPreviewError, ...]]:
        self._require_initialized()
        return self._context.bundle.format_value(message_id, args)

    def translate_roots(self) -> None:
        """Ask the binding layer to re-translate; no-op before initialize()."""
        if self._initialized:
            self._binding.translate_roots()
