"""Region pages: an overview plus member tables per entity kind."""

from collections import defaultdict

from ..index.builder import PageIndex
from ..link.extract import extract_linked_entities
from ..models.pages import Infobox, RegionEntry, WikiPage
from ..models.world import Entity, Region
from .sections import SectionList, escape_cell, markdown_table, wikilink
from .sources import WikiSources


def kind_heading(kind: str) -> str:
    return kind.replace("_", " ").title()


def format_overview(region: Region, member_count: int, description: str) -> str:
    lines: list[str] = []
    if description:
        lines.extend([description, ""])
    if region.culture:
        lines.append(f"- **Culture:** {region.culture}")
    if region.entity_kind:
        lines.append(f"- **Entity kind:** {region.entity_kind}")
    lines.append(f"- **Members:** {member_count}")
    return "\n".join(lines)


def format_members(members: list[Entity]) -> str:
    rows = [
        [escape_cell(wikilink(e.name)), escape_cell(e.subtype or "-"), escape_cell(e.status)]
        for e in sorted(members, key=lambda e: e.name.casefold())
    ]
    return markdown_table(["Name", "Subtype", "Status"], rows)


def build_region_page(region: Region, entry: RegionEntry, index: PageIndex, sources: WikiSources) -> WikiPage:
    members = [e for e in (sources.entity(i) for i in entry.member_ids) if e is not None]

    description = (region.description or "").strip()
    if description:
        description = index.autolinker().link(description, exclude_id=entry.id)

    sections = SectionList("region-section")
    sections.add("Overview", format_overview(region, len(members), description))

    by_kind: dict[str, list[Entity]] = defaultdict(list)
    for member in members:
        by_kind[member.kind].append(member)

    for kind in sorted(by_kind):
        sections.add(kind_heading(kind), format_members(by_kind[kind]))

    infobox = Infobox(type="region")
    if region.culture:
        infobox.add("Culture", region.culture)
    if region.entity_kind:
        infobox.add("Entity kind", region.entity_kind)
    infobox.add("Members", len(members))
    infobox.add("Origin", "emergent" if region.emergent else "seed")

    return WikiPage(
        id=entry.id,
        slug=entry.slug,
        title=entry.title,
        type="region",
        sections=sections.sections,
        summary=entry.summary,
        infobox=infobox,
        linked_entities=extract_linked_entities(sections.sections, index.references),
        last_updated=entry.last_updated,
    )
