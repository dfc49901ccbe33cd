"""Page cache and the service that owns index, cache and sources together.

Pages are memoized by id and the cache is only ever cleared in full. The
service keeps sources, index and cache in one snapshot; replacing a source
collection builds a new snapshot under a lock and swaps it in, so readers
never see an index that is half rebuilt.
"""

import logging
import threading
from dataclasses import dataclass, field, replace
from typing import Iterable

from .index.builder import PageIndex, build_page_index
from .index.disambiguation import disambiguation_for
from .index.search import search_index
from .models.artifacts import Chronicle, StaticPage
from .models.pages import DisambiguationEntry, PageIndexEntry, WikiPage
from .models.world import WorldState
from .synth.sources import WikiSources
from .synth.synthesizer import synthesize

logger = logging.getLogger(__name__)


class PageCache:
    """Synthesized pages keyed by page id."""

    def __init__(self) -> None:
        self._pages: dict[str, WikiPage] = {}
        self.hits = 0
        self.misses = 0

    def get(self, page_id: str) -> WikiPage | None:
        page = self._pages.get(page_id)
        if page is None:
            self.misses += 1
        else:
            self.hits += 1
        return page

    def put(self, page: WikiPage) -> None:
        self._pages[page.id] = page

    def clear(self) -> None:
        self._pages.clear()

    def __contains__(self, page_id: str) -> bool:
        return page_id in self._pages

    def __len__(self) -> int:
        return len(self._pages)


def get_or_build_page(
    page_id: str,
    index: PageIndex,
    sources: WikiSources,
    cache: PageCache,
) -> WikiPage | None:
    """Return the cached page, synthesizing and caching it on first access."""
    page = cache.get(page_id)
    if page is not None:
        return page

    page = synthesize(page_id, index, sources)
    if page is not None:
        cache.put(page)
    return page


@dataclass
class WikiSnapshot:
    """Sources with the index and cache built from them."""

    sources: WikiSources
    index: PageIndex
    cache: PageCache = field(default_factory=PageCache)


class WikiService:
    """
    Explicitly owned handle over the wiki core.

    Usage:
        service = WikiService(world, chronicles=chronicles, static_pages=pages)
        page = service.get_page("npc-1")
        service.replace_chronicles(new_chronicles)  # rebuilds the index
    """

    def __init__(
        self,
        world: WorldState | None = None,
        chronicles: Iterable[Chronicle] = (),
        static_pages: Iterable[StaticPage] = (),
    ):
        self._rebuild_lock = threading.Lock()
        sources = WikiSources(
            world=world or WorldState(),
            chronicles=list(chronicles),
            static_pages=list(static_pages),
        )
        self._snapshot = self._build(sources)

    @staticmethod
    def _build(sources: WikiSources) -> WikiSnapshot:
        index = build_page_index(sources.world, sources.chronicles, sources.static_pages)
        return WikiSnapshot(sources=sources, index=index)

    def _rebuild(self, **changes) -> None:
        # One rebuild at a time; readers keep the old snapshot until the swap
        with self._rebuild_lock:
            sources = replace(self._snapshot.sources, **changes)
            snapshot = self._build(sources)
            self._snapshot = snapshot
        logger.info("Rebuilt wiki index: %d pages", len(snapshot.index))

    # -- Source replacement ---------------------------------------------------

    def replace_world(self, world: WorldState) -> None:
        self._rebuild(world=world)

    def replace_chronicles(self, chronicles: Iterable[Chronicle]) -> None:
        self._rebuild(chronicles=list(chronicles))

    def replace_static_pages(self, static_pages: Iterable[StaticPage]) -> None:
        self._rebuild(static_pages=list(static_pages))

    def invalidate(self) -> None:
        """Drop every cached page without touching the index."""
        self._snapshot.cache.clear()

    # -- Reads ----------------------------------------------------------------

    @property
    def index(self) -> PageIndex:
        return self._snapshot.index

    @property
    def sources(self) -> WikiSources:
        return self._snapshot.sources

    @property
    def cache(self) -> PageCache:
        return self._snapshot.cache

    def get_page(self, page_id: str) -> WikiPage | None:
        snapshot = self._snapshot
        return get_or_build_page(page_id, snapshot.index, snapshot.sources, snapshot.cache)

    def get_disambiguation(self, page_id: str) -> list[DisambiguationEntry]:
        """Other pages sharing the base title of ``page_id``."""
        entry = self._snapshot.index.get(page_id)
        if entry is None or entry.type == "category":
            return []
        return disambiguation_for(entry.title, self._snapshot.index.by_base_name, exclude_id=page_id)

    def resolve(self, name: str) -> str | None:
        return self._snapshot.index.references.resolve(name)

    def search(self, query: str, limit: int | None = None) -> list[tuple[PageIndexEntry, float]]:
        return search_index(self._snapshot.index, query, limit=limit)
