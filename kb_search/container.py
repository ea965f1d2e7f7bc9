import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


def configure_container(settings: Settings) -> Container:
    """Build a container wired from settings.

    The caller owns the returned container and decides when to rebuild the
    index.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.index.search_index import SearchIndex
    from .core.protocols.document_loader import DocumentLoaderProtocol
    from .core.protocols.search_index import SearchIndexProtocol
    from .core.services.ingest_service import IngestService
    from .core.services.search_service import SearchService
    from .core.strategies.scoring import SnippetExtractor
    from .infrastructure.document_loaders import CompositeLoader

    container = Container()

    container.register(DocumentLoaderProtocol, CompositeLoader, singleton=True)

    container.register(
        SearchIndexProtocol,
        lambda: SearchIndex(
            snippet_extractor=SnippetExtractor(
                max_snippets=settings.max_snippets,
                min_sentence_length=settings.min_sentence_length,
            ),
            fuzzy_max_distance=settings.fuzzy_max_distance,
        ),
        singleton=True,
    )

    container.register(
        IngestService,
        lambda: IngestService(
            search_index=container.resolve(SearchIndexProtocol),
            loader=container.resolve(DocumentLoaderProtocol),
            docs_path=settings.docs_path,
        ),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            search_index=container.resolve(SearchIndexProtocol),
            max_results=settings.search_max_results,
            fuzzy_match=settings.search_fuzzy_match,
            priority_boost=settings.search_priority_boost,
            suggestions_limit=settings.suggestions_limit,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
