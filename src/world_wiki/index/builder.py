"""Lightweight page index.

Emits one summary entry per page without expanding any content. The index is
cheap to build and is rebuilt in full whenever a source collection changes;
full pages are synthesized later, on demand, from these entries.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..link.autolinker import AutoLinker
from ..models.artifacts import Chronicle, StaticPage
from ..models.pages import (
    CategoryEntry,
    ChronicleEntry,
    DisambiguationEntry,
    EntityEntry,
    PageIndexEntry,
    RegionEntry,
    StaticEntry,
    WikiCategory,
)
from ..models.world import Entity, Region, WorldState
from .categories import entity_categories, slugify
from .disambiguation import build_disambiguation
from .references import (
    ReferenceIndex,
    build_reference_index,
    category_page_id,
    collect_categories,
    region_page_id,
)

logger = logging.getLogger(__name__)


@dataclass
class PageIndex:
    """Every page known to the wiki, plus the lookup tables built alongside."""

    entries: list[PageIndexEntry] = field(default_factory=list)
    by_id: dict[str, PageIndexEntry] = field(default_factory=dict)
    references: ReferenceIndex = field(default_factory=ReferenceIndex)
    categories: list[WikiCategory] = field(default_factory=list)
    by_base_name: dict[str, list[DisambiguationEntry]] = field(default_factory=dict)

    _linker: AutoLinker | None = field(default=None, repr=False)

    @property
    def by_name(self) -> dict[str, str]:
        return self.references.by_name

    @property
    def by_alias(self) -> dict[str, str]:
        return self.references.by_alias

    def autolinker(self) -> AutoLinker:
        """Linker over every claimed name, compiled on first use."""
        if self._linker is None:
            self._linker = AutoLinker(self.references.link_candidates())
        return self._linker

    def get(self, page_id: str) -> PageIndexEntry | None:
        return self.by_id.get(page_id)

    def __contains__(self, page_id: str) -> bool:
        return page_id in self.by_id

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, entry: PageIndexEntry) -> bool:
        """Add an entry unless its id is already taken."""
        if entry.id in self.by_id:
            existing = self.by_id[entry.id]
            logger.warning(
                "Skipping %s page %r: id %s already used by %s page %r",
                entry.type, entry.title, entry.id, existing.type, existing.title,
            )
            return False
        self.entries.append(entry)
        self.by_id[entry.id] = entry
        return True

    def of_type(self, *types: str) -> list[PageIndexEntry]:
        return [e for e in self.entries if e.type in types]

    def in_category(self, category_id: str) -> list[PageIndexEntry]:
        return [e for e in self.entries if category_id in e.categories]


def build_entity_entry(entity: Entity, world: WorldState) -> EntityEntry:
    aliases = entity.clean_aliases()
    return EntityEntry(
        id=entity.id,
        title=entity.name,
        type="era" if entity.kind == "era" else "entity",
        slug=slugify(entity.name),
        summary=entity.summary.strip() or None,
        aliases=aliases,
        categories=entity_categories(entity, world.relationships),
        entity_kind=entity.kind,
        entity_subtype=entity.subtype,
        prominence=entity.prominence,
        culture=entity.culture,
        last_updated=entity.last_updated,
    )


def build_chronicle_entry(chronicle: Chronicle) -> ChronicleEntry:
    return ChronicleEntry(
        id=chronicle.id,
        title=chronicle.title,
        slug=f"chronicle/{slugify(chronicle.title)}",
        summary=(chronicle.summary or "").strip() or None,
        format=chronicle.format,
        entrypoint_id=chronicle.entrypoint_id,
        narrative_style_id=chronicle.narrative_style_id,
        last_updated=chronicle.last_updated,
    )


def build_static_entry(page: StaticPage) -> StaticEntry:
    return StaticEntry(
        id=page.id,
        title=page.title,
        slug=f"page/{page.slug or slugify(page.title)}",
        summary=(page.summary or "").strip() or None,
        namespace=page.namespace,
        base_name=page.base_name,
        last_updated=page.last_updated,
    )


def region_members(region: Region, entities: Iterable[Entity]) -> list[str]:
    """Ids of entities that belong to a region directly or secondarily."""
    return [
        e.id for e in entities
        if e.region_id == region.id or region.id in e.all_region_ids
    ]


def build_region_entry(region: Region, entities: list[Entity]) -> RegionEntry:
    return RegionEntry(
        id=region_page_id(region.id),
        title=region.label,
        slug=f"region/{slugify(region.label)}",
        summary=(region.description or "").strip() or None,
        region_id=region.id,
        entity_kind=region.entity_kind,
        culture=region.culture,
        member_ids=region_members(region, entities),
        last_updated=region.created_at or 0,
    )


def visible_chronicles(chronicles: Iterable[Chronicle]) -> list[Chronicle]:
    return [c for c in chronicles if c.is_visible]


def visible_static_pages(pages: Iterable[StaticPage]) -> list[StaticPage]:
    return [p for p in pages if p.is_visible]


def build_page_index(
    world: WorldState,
    chronicles: Iterable[Chronicle] = (),
    static_pages: Iterable[StaticPage] = (),
) -> PageIndex:
    """Build the lightweight index of every page.

    Args:
        world: Simulation state (entities, relationships, regions)
        chronicles: Chronicle collection; incomplete or empty ones are skipped
        static_pages: Static page collection; drafts are skipped

    Returns:
        PageIndex with entries, lookups, categories and disambiguation groups
    """
    chronicles = visible_chronicles(chronicles)
    static_pages = visible_static_pages(static_pages)
    regions = world.all_regions()
    entities = world.entities

    index = PageIndex()

    # Entity and era pages
    for entity in entities:
        index.add(build_entity_entry(entity, world))

    # Chronicle pages
    for chronicle in chronicles:
        index.add(build_chronicle_entry(chronicle))

    # Static pages
    for page in static_pages:
        index.add(build_static_entry(page))

    # Region pages
    for region in regions:
        index.add(build_region_entry(region, entities))

    index.references = build_reference_index(entities, static_pages, regions)

    # Category pages come last, derived from the entries built so far
    era_names = {e.id: e.name for e in entities if e.kind == "era"}
    page_entries = list(index.entries)
    index.categories = collect_categories((e.categories for e in page_entries), era_names)

    for category in index.categories:
        members = [e for e in page_entries if category.id in e.categories]
        index.add(
            CategoryEntry(
                id=category_page_id(category.id),
                title=f"Category: {category.name}",
                slug=f"category/{slugify(category.name)}",
                category_id=category.id,
                page_count=category.page_count,
                member_ids=[e.id for e in members],
                last_updated=max((e.last_updated for e in members), default=0),
            )
        )

    index.by_base_name = build_disambiguation(index.entries)

    logger.debug(
        "Built page index: %d entries, %d categories, %d disambiguation groups",
        len(index.entries), len(index.categories), len(index.by_base_name),
    )
    return index
