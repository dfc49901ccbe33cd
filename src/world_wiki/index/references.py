"""Reference index - case-insensitive name lookup across all page sources.

Names are claimed in a fixed priority order with insert-if-absent semantics:

    primary entity name > entity alias > static page title
        > static page base name > region label

A lower-priority name that collides with an already claimed one is dropped.
Matching is case-insensitive only; no other normalization is applied.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable

from ..link.autolinker import LinkCandidate
from ..models.artifacts import StaticPage
from ..models.pages import WikiCategory
from ..models.world import Entity, Region
from .categories import format_category_name

logger = logging.getLogger(__name__)


def region_page_id(region_id: str) -> str:
    return f"region-{region_id}"


def category_page_id(category_id: str) -> str:
    return f"category-{category_id}"


@dataclass
class ReferenceIndex:
    """Lookup tables mapping lowercase names to page ids."""

    by_name: dict[str, str] = field(default_factory=dict)
    by_alias: dict[str, str] = field(default_factory=dict)
    by_static_title: dict[str, str] = field(default_factory=dict)
    by_static_base_name: dict[str, str] = field(default_factory=dict)
    by_region_label: dict[str, str] = field(default_factory=dict)

    # Winning names in their original casing, in insertion order
    _candidates: list[LinkCandidate] = field(default_factory=list)

    def _tables(self) -> list[dict[str, str]]:
        # Resolution order
        return [
            self.by_name,
            self.by_alias,
            self.by_static_title,
            self.by_static_base_name,
            self.by_region_label,
        ]

    def is_claimed(self, name: str) -> bool:
        key = name.strip().lower()
        return any(key in table for table in self._tables())

    def _claim(self, table: dict[str, str], name: str, page_id: str, source: str) -> bool:
        name = name.strip()
        key = name.lower()
        if not key:
            return False
        if self.is_claimed(key):
            if self.resolve(key) != page_id:
                logger.debug("Dropping %s %r for %s: already claimed by %s", source, name, page_id, self.resolve(key))
            return False
        table[key] = page_id
        self._candidates.append(LinkCandidate(name=name, page_id=page_id))
        return True

    def add_entity_name(self, entity: Entity) -> bool:
        return self._claim(self.by_name, entity.name, entity.id, "name")

    def add_alias(self, alias: str, entity_id: str) -> bool:
        return self._claim(self.by_alias, alias, entity_id, "alias")

    def add_static_page(self, page: StaticPage) -> None:
        self._claim(self.by_static_title, page.title, page.id, "static title")
        if page.namespace:
            self._claim(self.by_static_base_name, page.base_name, page.id, "static base name")

    def add_region(self, region: Region) -> bool:
        return self._claim(self.by_region_label, region.label, region_page_id(region.id), "region label")

    def resolve(self, name: str) -> str | None:
        """Resolve a name to a page id, or None when nothing claims it.

        Args:
            name: Name as written in text, any casing

        Returns:
            The page id of the highest-priority claim
        """
        key = name.strip().lower()
        for table in self._tables():
            if key in table:
                return table[key]
        return None

    def resolve_entity(self, name: str) -> str | None:
        """Resolve against entity names and aliases only."""
        key = name.strip().lower()
        return self.by_name.get(key) or self.by_alias.get(key)

    def link_candidates(self, exclude_id: str | None = None) -> list[LinkCandidate]:
        """Every claimed name, optionally without those pointing at one page."""
        if exclude_id is None:
            return list(self._candidates)
        return [c for c in self._candidates if c.page_id != exclude_id]


def build_reference_index(
    entities: Iterable[Entity],
    static_pages: Iterable[StaticPage] = (),
    regions: Iterable[Region] = (),
) -> ReferenceIndex:
    """Build the name lookup tables.

    All primary names are claimed before any alias, so a primary name always
    outranks an alias regardless of entity order.

    Args:
        entities: Entities in source order (first name wins on collision)
        static_pages: Visible static pages
        regions: Merged seed and emergent regions

    Returns:
        A populated ReferenceIndex
    """
    entities = list(entities)
    refs = ReferenceIndex()

    for entity in entities:
        refs.add_entity_name(entity)

    for entity in entities:
        for alias in entity.clean_aliases():
            refs.add_alias(alias, entity.id)

    for page in static_pages:
        refs.add_static_page(page)

    for region in regions:
        refs.add_region(region)

    return refs


def collect_categories(
    category_lists: Iterable[list[str]],
    era_names: dict[str, str] | None = None,
) -> list[WikiCategory]:
    """Aggregate category ids into categories with page counts.

    Args:
        category_lists: The category ids of each page
        era_names: Era id to era name, for friendlier era category names

    Returns:
        Categories ordered by page count, most populated first
    """
    counts: Counter[str] = Counter()
    for categories in category_lists:
        counts.update(categories)

    categories = [
        WikiCategory(id=cat_id, name=format_category_name(cat_id, era_names), page_count=count)
        for cat_id, count in counts.items()
    ]
    categories.sort(key=lambda c: c.page_count, reverse=True)
    return categories
