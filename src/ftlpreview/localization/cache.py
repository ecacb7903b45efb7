"""On-demand resource loading with at-most-one load per identifier.

Components:
    ResourceLoadResult - Immutable outcome of one ensure_loaded()/provide() call
    LoadSummary - Immutable aggregate of every result recorded by a cache
    ResourceCache - Resolves, fetches, parses and merges resources

Concurrency model: single-threaded asyncio. The only suspension point of
a load is the provider await, and the identifier is claimed in the
registry before it, so concurrent calls for one identifier share one
lookup and one merge.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ftlpreview.constants import LOG_TRUNCATE_WARNING
from ftlpreview.diagnostics import ErrorTemplate, MalformedResourceError, ResourceAbsentError
from ftlpreview.enums import LoadStatus

if TYPE_CHECKING:
    from ftlpreview.localization.paths import PathResolver
    from ftlpreview.localization.providers import AssetProvider
    from ftlpreview.localization.registry import LoadedResourceRegistry
    from ftlpreview.localization.types import (
        FTLSource,
        LogicalIdentifier,
        MessageId,
        PhysicalPath,
    )
    from ftlpreview.runtime import TranslationBundle
    from ftlpreview.syntax import FluentParser, Junk

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
    # Loader
    "ResourceCache",
]

logger = logging.getLogger(__name__)

# Label used in results for provide() calls without an identifier.
PROVIDED_LABEL = "<provided>"


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of one attempt to load a resource.

    Attributes:
        identifier: Logical identifier that was requested
        status: Outcome of the attempt
        physical_path: Resolved asset path (None for provide())
        error: ResourceAbsentError, MalformedResourceError or the provider's
            exception; None on success and skip
        junk_entries: Unparseable entries found while parsing
        message_ids: Ids of the messages merged into the bundle
    """

    identifier: LogicalIdentifier
    status: LoadStatus
    physical_path: PhysicalPath | None = None
    error: Exception | None = None
    junk_entries: tuple[Junk, ...] = ()
    message_ids: tuple[MessageId, ...] = ()

    @property
    def is_success(self) -> bool:
        return self.status == LoadStatus.SUCCESS

    @property
    def is_skipped(self) -> bool:
        """Already loaded or in flight; nothing was fetched."""
        return self.status == LoadStatus.SKIPPED

    @property
    def is_not_found(self) -> bool:
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_malformed(self) -> bool:
        return self.status == LoadStatus.MALFORMED

    @property
    def is_error(self) -> bool:
        return self.status == LoadStatus.ERROR

    @property
    def has_junk(self) -> bool:
        return len(self.junk_entries) > 0


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of load results.

    All statistics are computed from ``results``.

    Example:
        >>> summary = controller.get_load_summary()
        >>> for result in summary.get_not_found():
        ...     print(f"Missing: {result.identifier} ({result.physical_path})")
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"skipped={self.skipped}, "
            f"not_found={self.not_found}, "
            f"malformed={self.malformed}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        return len(self.results)

    @property
    def successful(self) -> int:
        return sum(1 for r in self.results if r.is_success)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.results if r.is_skipped)

    @property
    def not_found(self) -> int:
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def malformed(self) -> int:
        return sum(1 for r in self.results if r.is_malformed)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.is_error)

    @property
    def junk_count(self) -> int:
        """Total number of Junk entries across all results."""
        return sum(len(r.junk_entries) for r in self.results)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_success)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_not_found)

    def get_malformed(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_malformed)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.is_error)

    def get_by_identifier(self, identifier: LogicalIdentifier) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.identifier == identifier)

    def get_with_junk(self) -> tuple[ResourceLoadResult, ...]:
        return tuple(r for r in self.results if r.has_junk)

    def get_all_junk(self) -> tuple[Junk, ...]:
        junk_list: list[Junk] = []
        for result in self.results:
            junk_list.extend(result.junk_entries)
        return tuple(junk_list)

    @property
    def has_errors(self) -> bool:
        return self.errors > 0

    @property
    def has_junk(self) -> bool:
        return self.junk_count > 0

    @property
    def all_successful(self) -> bool:
        """No errors, no missing and no malformed resources (skips are fine)."""
        return self.errors == 0 and self.not_found == 0 and self.malformed == 0

    @property
    def all_clean(self) -> bool:
        """all_successful and zero Junk entries."""
        return self.all_successful and self.junk_count == 0


class ResourceCache:
    """Loads each logical identifier at most once into a shared bundle.

    A load that fails (absent, malformed, provider error) releases its claim
    so the next request retries; only successes stay in the registry.

    Args:
        provider: Asset provider; lookup() may be sync or async
        bundle: Bundle that successful loads merge into
        registry: Shared loaded-resource registry
        resolver: Identifier -> physical path
        parser: FTL parser
        reject_junk: Skip the merge of any resource containing Junk
        on_merged: Called after every successful merge (re-translation)
    """

    __slots__ = (
        "_bundle",
        "_on_merged",
        "_parser",
        "_provider",
        "_registry",
        "_reject_junk",
        "_resolver",
        "_results",
    )

    def __init__(
        self,
        provider: AssetProvider,
        bundle: TranslationBundle,
        registry: LoadedResourceRegistry,
        *,
        resolver: PathResolver,
        parser: FluentParser,
        reject_junk: bool = True,
        on_merged: Callable[[], object] | None = None,
    ) -> None:
        self._provider = provider
        self._bundle = bundle
        self._registry = registry
        self._resolver = resolver
        self._parser = parser
        self._reject_junk = reject_junk
        self._on_merged = on_merged
        self._results: list[ResourceLoadResult] = []

    @property
    def registry(self) -> LoadedResourceRegistry:
        return self._registry

    async def ensure_loaded(self, identifier: LogicalIdentifier) -> ResourceLoadResult:
        """Load identifier into the bundle unless it is loaded or loading.

        Returns:
            ResourceLoadResult; SKIPPED when nothing was fetched

        Raises:
            UnknownCategoryError: If the identifier's category is not mapped
            InvalidIdentifierError: If the identifier is structurally invalid
        """
        if identifier in self._registry:
            logger.debug(
                "Resource %s already %s; skipping",
                identifier,
                "in flight" if self._registry.is_in_flight(identifier) else "loaded",
            )
            return self._record(ResourceLoadResult(identifier, LoadStatus.SKIPPED))

        # Resolve and claim before the first await.
        physical_path = self._resolver.resolve(identifier)
        self._registry.mark_in_flight(identifier)
        generation = self._registry.generation

        try:
            content = self._provider.lookup(physical_path)
            if inspect.isawaitable(content):
                content = await content
        except (OSError, ValueError) as e:
            self._release(identifier, generation)
            logger.error("Failed to load resource %s from %s: %s", identifier, physical_path, e)
            return self._record(
                ResourceLoadResult(identifier, LoadStatus.ERROR, physical_path, error=e)
            )
        except asyncio.CancelledError:
            self._release(identifier, generation)
            raise
        except Exception as e:
            self._release(identifier, generation)
            logger.exception(
                "Unexpected provider error loading %s from %s", identifier, physical_path
            )
            return self._record(
                ResourceLoadResult(identifier, LoadStatus.ERROR, physical_path, error=e)
            )

        if self._registry.generation != generation:
            logger.debug("Context reset while %s was loading; result dropped", identifier)
            return self._record(ResourceLoadResult(identifier, LoadStatus.SKIPPED, physical_path))

        if self._registry.is_loaded(identifier):
            logger.debug("Resource %s was provided while loading; result dropped", identifier)
            return self._record(ResourceLoadResult(identifier, LoadStatus.SKIPPED, physical_path))

        if not content:
            self._registry.discard(identifier)
            logger.warning("FTL file not found for: %s (%s)", identifier, physical_path)
            error = ResourceAbsentError(
                ErrorTemplate.resource_absent(identifier, physical_path),
                identifier=identifier,
                physical_path=physical_path,
            )
            return self._record(
                ResourceLoadResult(identifier, LoadStatus.NOT_FOUND, physical_path, error=error)
            )

        result = self._merge(identifier, content, physical_path=physical_path, register=True)
        if not result.is_success:
            self._registry.discard(identifier)
        return self._record(result)

    def provide(
        self, source: FTLSource, identifier: LogicalIdentifier | None = None
    ) -> ResourceLoadResult:
        """Merge raw FTL text directly, bypassing path resolution.

        When identifier is given the resource is registered under it, so a
        later ensure_loaded(identifier) is a no-op.
        """
        result = self._merge(
            identifier or PROVIDED_LABEL,
            source,
            physical_path=None,
            register=identifier is not None,
        )
        return self._record(result)

    def get_load_summary(self) -> LoadSummary:
        return LoadSummary(results=tuple(self._results))

    def clear_results(self) -> None:
        self._results.clear()

    def _release(self, identifier: LogicalIdentifier, generation: int) -> None:
        """Drop our claim, unless a reset or provide() already replaced it."""
        if self._registry.generation == generation and self._registry.is_in_flight(identifier):
            self._registry.discard(identifier)

    def _record(self, result: ResourceLoadResult) -> ResourceLoadResult:
        self._results.append(result)
        return result

    def _merge(
        self,
        identifier: LogicalIdentifier,
        source: FTLSource,
        *,
        physical_path: PhysicalPath | None,
        register: bool,
    ) -> ResourceLoadResult:
        try:
            resource = self._parser.parse(source)
        except ValueError as e:
            logger.error("Failed to parse resource %s: %s", identifier, e)
            rejected = MalformedResourceError(
                ErrorTemplate.resource_rejected(identifier, str(e)), identifier=identifier
            )
            return ResourceLoadResult(
                identifier, LoadStatus.MALFORMED, physical_path, error=rejected
            )

        junk = resource.junk
        if junk and self._reject_junk:
            for entry in junk:
                logger.warning(
                    "Syntax error in %s: %s",
                    identifier,
                    repr(entry.content[:LOG_TRUNCATE_WARNING]),
                )
            logger.error(
                "Resource %s has %d junk entries; not merged", identifier, len(junk)
            )
            malformed = MalformedResourceError(
                ErrorTemplate.resource_malformed(identifier, len(junk)),
                identifier=identifier,
                junk_entries=junk,
            )
            return ResourceLoadResult(
                identifier,
                LoadStatus.MALFORMED,
                physical_path,
                error=malformed,
                junk_entries=junk,
            )

        message_ids = self._bundle.add_resource(resource, source_path=physical_path or identifier)
        if register:
            self._registry.mark_loaded(identifier, resource)
        if self._on_merged is not None:
            self._on_merged()
        return ResourceLoadResult(
            identifier,
            LoadStatus.SUCCESS,
            physical_path,
            junk_entries=junk,
            message_ids=message_ids,
        )
