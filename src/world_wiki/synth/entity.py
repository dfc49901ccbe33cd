"""Entity and era pages."""

from collections import defaultdict
from dataclasses import dataclass, field

from ..index.builder import PageIndex
from ..index.categories import find_active_era, prominence_label
from ..index.references import region_page_id
from ..link.autolinker import AutoLinker
from ..link.extract import extract_linked_entities
from ..models.pages import EntityEntry, Infobox, WikiPage
from ..models.world import AuthoredSection, Entity, NarrativeEvent, Relationship
from .sections import SectionList, escape_cell, markdown_table, wikilink
from .sources import WikiSources

OUTGOING = "outgoing"
INCOMING = "incoming"
BIDIRECTIONAL = "bidirectional"

DIRECTION_ARROWS = {
    OUTGOING: "→",
    INCOMING: "←",
    BIDIRECTIONAL: "↔",
}

# Row order within a relationship kind
DIRECTION_ORDER = [OUTGOING, INCOMING, BIDIRECTIONAL]


@dataclass
class RelationshipRow:
    """All counterparts sharing one relationship kind and direction."""

    kind: str
    direction: str
    names: list[str] = field(default_factory=list)

    @property
    def arrow(self) -> str:
        return DIRECTION_ARROWS[self.direction]


def group_relationships(
    entity_id: str,
    relationships: list[Relationship],
    entities: dict[str, Entity],
) -> list[RelationshipRow]:
    """Group the relationships touching an entity by (kind, direction).

    A counterpart related in both directions with the same kind appears once,
    in a bidirectional row. Counterparts missing from ``entities`` and
    self-relationships are skipped.
    """
    directions: dict[tuple[str, str], set[str]] = defaultdict(set)

    for rel in relationships:
        if rel.src == rel.dst:
            continue
        if rel.src == entity_id:
            directions[(rel.kind, rel.dst)].add(OUTGOING)
        elif rel.dst == entity_id:
            directions[(rel.kind, rel.src)].add(INCOMING)

    rows: dict[tuple[str, str], set[str]] = defaultdict(set)
    for (kind, other_id), dirs in directions.items():
        other = entities.get(other_id)
        if other is None:
            continue
        direction = BIDIRECTIONAL if len(dirs) > 1 else next(iter(dirs))
        rows[(kind, direction)].add(other.name)

    ordered = sorted(rows.items(), key=lambda item: (item[0][0], DIRECTION_ORDER.index(item[0][1])))
    return [
        RelationshipRow(kind=kind, direction=direction, names=sorted(names, key=str.casefold))
        for (kind, direction), names in ordered
    ]


def format_relationships(rows: list[RelationshipRow]) -> str:
    table_rows = [
        [escape_cell(row.kind), row.arrow, ", ".join(wikilink(n) for n in row.names)]
        for row in rows
    ]
    return markdown_table(["Relationship", "Direction", "Entities"], table_rows)


def entity_timeline(entity_id: str, events: list[NarrativeEvent]) -> list[NarrativeEvent]:
    """Events touching the entity, earliest tick first."""
    return sorted((e for e in events if e.touches(entity_id)), key=lambda e: e.tick)


def format_timeline(
    entity_id: str,
    events: list[NarrativeEvent],
    index: PageIndex,
    sources: WikiSources,
) -> str:
    rows: list[list[str]] = []

    for event in events:
        # Link the subject/object names that have pages of their own
        refs = [r for r in (event.subject, event.object) if r is not None and r.id in index]
        headline = event.headline or event.description
        if refs:
            linker = AutoLinker([(r.name, r.id) for r in refs], min_length=1)
            headline = linker.link(headline)

        era = sources.entity(event.era)
        era_cell = wikilink(era.name) if era is not None else event.era

        effects = "; ".join(effect.description for effect in event.effects_for(entity_id))

        rows.append([str(event.tick), escape_cell(era_cell), escape_cell(headline), escape_cell(effects)])

    return markdown_table(["Tick", "Era", "Event", "Effects"], rows)


def build_entity_infobox(entity: Entity, sources: WikiSources) -> Infobox:
    infobox = Infobox(type="era" if entity.kind == "era" else "entity", image_id=entity.image_id)

    infobox.add("Type", entity.kind)
    if entity.subtype:
        infobox.add("Subtype", entity.subtype)
    infobox.add("Status", entity.status)
    infobox.add("Prominence", f"{prominence_label(entity.prominence)} ({entity.prominence:.1f})")
    if entity.culture:
        infobox.add("Culture", entity.culture)

    era = sources.entity(find_active_era(entity.id, sources.world.relationships))
    if era is not None:
        infobox.add("Era", era.name, linked_entity=era.id)

    region = sources.region(entity.region_id) if entity.region_id else None
    if region is not None:
        infobox.add("Region", region.label, linked_entity=region_page_id(region.id))

    return infobox


def _add_authored(
    sections: SectionList,
    authored: list[AuthoredSection],
    fallback_heading: str,
    fallback_text: str | None,
    link,
) -> None:
    """Add structured sections when present, else one fallback section."""
    if authored:
        for section in authored:
            sections.add(section.heading, link(section.content), section.level or 2)
    elif fallback_text and fallback_text.strip():
        sections.add(fallback_heading, link(fallback_text.strip()))


def build_entity_page(entity: Entity, entry: EntityEntry, index: PageIndex, sources: WikiSources) -> WikiPage:
    """Synthesize the full page for an entity or era.

    Sections, in order: authored content (or an Overview from the
    description), the long-form story, the era chapter (eras only),
    Relationships and Timeline.
    """
    linker = index.autolinker()

    def link(text: str) -> str:
        return linker.link(text, exclude_id=entity.id)

    lore = entity.lore
    sections = SectionList("section")

    _add_authored(sections, lore.sections, "Overview", entity.description, link)
    _add_authored(sections, lore.story_sections, "Story", lore.story, link)
    if entry.type == "era":
        _add_authored(sections, lore.era_chapter_sections, "Chronicle", lore.era_chapter, link)

    rows = group_relationships(entity.id, sources.world.relationships, sources.entities_by_id)
    if rows:
        sections.add("Relationships", format_relationships(rows))

    events = entity_timeline(entity.id, sources.world.narrative_events)
    if events:
        sections.add("Timeline", format_timeline(entity.id, events, index, sources))

    return WikiPage(
        id=entity.id,
        slug=entry.slug,
        title=entry.title,
        type=entry.type,
        aliases=entry.aliases,
        sections=sections.sections,
        summary=entry.summary,
        infobox=build_entity_infobox(entity, sources),
        categories=entry.categories,
        linked_entities=extract_linked_entities(sections.sections, index.references),
        last_updated=entry.last_updated,
    )
