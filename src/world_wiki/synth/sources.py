"""Materialized source collections handed to the synthesizer."""

from dataclasses import dataclass, field
from functools import cached_property

from ..models.artifacts import Chronicle, StaticPage
from ..models.world import Entity, Region, WorldState


@dataclass
class WikiSources:
    """World state plus the authored chronicle and static page collections.

    Treat instances as immutable: replacing a collection means building a new
    WikiSources (see ``dataclasses.replace``), which also drops the lookups
    cached below.
    """

    world: WorldState = field(default_factory=WorldState)
    chronicles: list[Chronicle] = field(default_factory=list)
    static_pages: list[StaticPage] = field(default_factory=list)

    @cached_property
    def entities_by_id(self) -> dict[str, Entity]:
        return self.world.entity_map()

    @cached_property
    def regions_by_id(self) -> dict[str, Region]:
        return {r.id: r for r in self.world.all_regions()}

    def entity(self, entity_id: str | None) -> Entity | None:
        if entity_id is None:
            return None
        return self.entities_by_id.get(entity_id)

    def region(self, region_id: str) -> Region | None:
        return self.regions_by_id.get(region_id)

    def chronicle(self, chronicle_id: str) -> Chronicle | None:
        for chronicle in self.chronicles:
            if chronicle.id == chronicle_id:
                return chronicle
        return None

    def static_page(self, page_id: str) -> StaticPage | None:
        for page in self.static_pages:
            if page.id == page_id:
                return page
        return None
