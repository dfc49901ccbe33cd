"""Static pages and their live-data template tokens.

Supported tokens:

    {{era}}            current era, linked when it is a known entity
    {{tick}}           current simulation tick
    {{era_summary}}    "Tick N, during <era>"
    {{cultures}}       comma-separated list of cultures
    {{entity_count}}   number of entities
    {{count:<kind>}}   number of entities of one kind
    {{entity:<name>}}  link to a named entity

Unrecognized tokens, and names that do not resolve, are left verbatim.
"""

import re

from ..index.builder import PageIndex
from ..index.references import ReferenceIndex
from ..link.extract import extract_linked_entities
from ..models.artifacts import StaticPage
from ..models.pages import StaticEntry, WikiPage
from ..models.world import WorldState
from .sections import split_into_sections, strip_title_heading, wikilink

TOKEN_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


def _current_era(world: WorldState) -> str | None:
    era_id = world.metadata.era
    if not era_id:
        return None
    for entity in world.entities:
        if entity.id == era_id:
            return wikilink(entity.name)
    return era_id


def _cultures(world: WorldState) -> str:
    cultures = sorted({e.culture for e in world.entities if e.culture}, key=str.casefold)
    return ", ".join(cultures)


def expand_templates(text: str, world: WorldState, references: ReferenceIndex) -> str:
    """Replace ``{{token}}`` placeholders with live simulation data."""
    entities = {e.id: e for e in world.entities}

    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        name, _, arg = token.partition(":")
        name = name.strip().lower()
        arg = arg.strip()

        if name == "era" and not arg:
            return _current_era(world) or match.group(0)
        if name == "tick" and not arg:
            return str(world.metadata.tick)
        if name == "era_summary" and not arg:
            era = _current_era(world)
            if era:
                return f"Tick {world.metadata.tick}, during {era}"
            return f"Tick {world.metadata.tick}"
        if name == "cultures" and not arg:
            return _cultures(world)
        if name == "entity_count" and not arg:
            return str(len(world.entities))
        if name == "count" and arg:
            kind = arg.lower()
            return str(sum(1 for e in world.entities if e.kind.lower() == kind))
        if name == "entity" and arg:
            entity_id = references.resolve_entity(arg)
            if entity_id and entity_id in entities:
                return wikilink(entities[entity_id].name)
            return match.group(0)

        return match.group(0)

    return TOKEN_PATTERN.sub(replace, text)


def build_static_page(page: StaticPage, entry: StaticEntry, index: PageIndex, world: WorldState) -> WikiPage:
    content = expand_templates(page.content, world, index.references)
    body = strip_title_heading(content)
    sections = split_into_sections(body, default_heading="Overview", prefix="static-section")

    linker = index.autolinker()
    for section in sections:
        section.content = linker.link(section.content, exclude_id=page.id)

    return WikiPage(
        id=page.id,
        slug=entry.slug,
        title=entry.title,
        type="static",
        sections=sections,
        summary=entry.summary,
        linked_entities=extract_linked_entities(sections, index.references),
        last_updated=entry.last_updated,
    )
