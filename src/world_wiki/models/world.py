"""Simulation state models: entities, relationships, narrative events and regions."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SourceModel(BaseModel):
    """Base for upstream records; accepts snake_case or camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Coordinates(SourceModel):
    """Position in semantic space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class AuthoredSection(SourceModel):
    """A pre-authored page section attached to an entity."""

    heading: str
    content: str
    level: int = 2


class EntityLore(SourceModel):
    """Authored long-form content for an entity page."""

    sections: list[AuthoredSection] = Field(default_factory=list)
    story: str | None = None
    story_sections: list[AuthoredSection] = Field(default_factory=list)
    era_chapter: str | None = None
    era_chapter_sections: list[AuthoredSection] = Field(default_factory=list)


class Entity(SourceModel):
    """A simulated person, place, faction, era, etc."""

    id: str
    name: str
    kind: str
    subtype: str | None = None
    culture: str | None = None
    prominence: float = 0.0  # 0-5
    status: str = "active"
    tags: dict[str, str | bool] = Field(default_factory=dict)
    coordinates: Coordinates | None = None
    region_id: str | None = None
    all_region_ids: list[str] = Field(default_factory=list)
    description: str = ""
    summary: str = ""
    aliases: list[str] = Field(default_factory=list)
    image_id: str | None = None
    lore: EntityLore = Field(default_factory=EntityLore)
    created_at: int = 0
    updated_at: int | None = None

    @property
    def last_updated(self) -> int:
        return self.updated_at or self.created_at

    def clean_aliases(self) -> list[str]:
        """Return trimmed, non-empty aliases in declaration order."""
        return [a.strip() for a in self.aliases if a and a.strip()]


class Relationship(SourceModel):
    """A directed relationship between two entities."""

    src: str
    dst: str
    kind: str
    status: str = "active"
    strength: float | None = None
    created_at: int = 0


class EventEntityRef(SourceModel):
    """Entity reference carried inside a narrative event."""

    id: str
    name: str
    kind: str | None = None


class EntityEffect(SourceModel):
    """One effect an event had on a participant."""

    type: str
    description: str


class ParticipantEffects(SourceModel):
    """All effects an event had on a single participant."""

    entity: EventEntityRef
    effects: list[EntityEffect] = Field(default_factory=list)


class NarrativeEvent(SourceModel):
    """A narratively significant change recorded during simulation."""

    id: str
    tick: int
    era: str
    event_kind: str | None = None
    subject: EventEntityRef
    object: EventEntityRef | None = None
    participant_effects: list[ParticipantEffects] = Field(default_factory=list)
    significance: float = 0.0  # 0-1
    headline: str = ""
    description: str = ""

    def touches(self, entity_id: str) -> bool:
        """Whether the entity is subject, object or an affected participant."""
        if self.subject.id == entity_id:
            return True
        if self.object is not None and self.object.id == entity_id:
            return True
        return any(p.entity.id == entity_id for p in self.participant_effects)

    def effects_for(self, entity_id: str) -> list[EntityEffect]:
        effects: list[EntityEffect] = []
        for participant in self.participant_effects:
            if participant.entity.id == entity_id:
                effects.extend(participant.effects)
        return effects


class Region(SourceModel):
    """A named zone of semantic space that entities may belong to."""

    id: str
    label: str
    description: str | None = None
    culture: str | None = None
    entity_kind: str | None = None
    emergent: bool = False
    created_at: int | None = None


class WorldMetadata(SourceModel):
    """Run-level facts about the simulation."""

    simulation_run_id: str | None = None
    tick: int = 0
    era: str | None = None


class CoordinateState(SourceModel):
    """Emergent regions discovered during simulation, keyed by entity kind."""

    emergent_regions: dict[str, list[Region]] = Field(default_factory=dict)


class WorldState(SourceModel):
    """The full simulated world handed to the wiki core."""

    metadata: WorldMetadata = Field(default_factory=WorldMetadata)
    entities: list[Entity] = Field(default_factory=list, alias="hardState")
    relationships: list[Relationship] = Field(default_factory=list)
    narrative_events: list[NarrativeEvent] = Field(default_factory=list, alias="narrativeHistory")
    regions: list[Region] = Field(default_factory=list)
    coordinate_state: CoordinateState = Field(default_factory=CoordinateState)

    def entity_map(self) -> dict[str, Entity]:
        return {e.id: e for e in self.entities}

    def all_regions(self) -> list[Region]:
        """Seed regions followed by emergent regions of every kind; first id wins."""
        merged: list[Region] = []
        seen: set[str] = set()

        for region in self.regions:
            if region.id not in seen:
                seen.add(region.id)
                merged.append(region)

        for kind, regions in self.coordinate_state.emergent_regions.items():
            for region in regions:
                if region.id in seen:
                    continue
                seen.add(region.id)
                # Emergent regions inherit the kind they were discovered under
                merged.append(
                    region.model_copy(
                        update={"entity_kind": region.entity_kind or kind, "emergent": True}
                    )
                )

        return merged
