"""Chronicle pages: authored stories and documents split into sections."""

import logging

from ..index.builder import PageIndex
from ..link.extract import extract_linked_entities
from ..models.artifacts import Chronicle, ChronicleImageRef
from ..models.pages import ChronicleEntry, Infobox, SectionImage, WikiPage, WikiSection
from ..models.world import Entity
from .sections import split_into_sections, strip_title_heading
from .sources import WikiSources

logger = logging.getLogger(__name__)


def resolve_section_image(ref: ChronicleImageRef, entities: dict[str, Entity]) -> SectionImage | None:
    """Turn an image ref into a section image, or None when there is nothing to show.

    Generated images must be complete; entity images need the entity to have
    a profile image.
    """
    if ref.type == "prompt_request":
        if ref.status != "complete":
            logger.debug("Skipping incomplete image request %s (%s)", ref.ref_id, ref.status)
            return None
        if not ref.generated_image_id:
            logger.debug("Image request %s is complete but has no image", ref.ref_id)
            return None
        image_id = ref.generated_image_id
        image_type = "chronicle_image"
    else:
        entity = entities.get(ref.entity_id) if ref.entity_id else None
        if entity is None or not entity.image_id:
            logger.debug("Entity image ref %s has no profile image (%s)", ref.ref_id, ref.entity_id)
            return None
        image_id = entity.image_id
        image_type = "entity_ref"

    return SectionImage(
        ref_id=ref.ref_id,
        type=image_type,
        image_id=image_id,
        anchor_text=ref.anchor_text,
        size=ref.size,
        caption=ref.caption,
    )


def find_anchor_section(sections: list[WikiSection], anchor_text: str) -> WikiSection | None:
    """First section whose body contains the anchor text; the first section otherwise."""
    if not sections:
        return None
    anchor = anchor_text.strip().lower()
    if anchor:
        for section in sections:
            if anchor in section.content.lower():
                return section
    return sections[0]


def attach_images(
    sections: list[WikiSection],
    refs: list[ChronicleImageRef],
    entities: dict[str, Entity],
) -> None:
    """Attach each displayable image ref to its anchor section, in place."""
    for ref in refs:
        image = resolve_section_image(ref, entities)
        if image is None:
            continue
        section = find_anchor_section(sections, ref.anchor_text)
        if section is not None:
            section.images.append(image)


def build_chronicle_infobox(chronicle: Chronicle, sources: WikiSources) -> Infobox:
    infobox = Infobox(type="chronicle")
    infobox.add("Format", chronicle.format)

    entrypoint = sources.entity(chronicle.entrypoint_id)
    if entrypoint is not None:
        infobox.add("Entry point", entrypoint.name, linked_entity=entrypoint.id)

    if chronicle.narrative_style_id:
        infobox.add("Narrative style", chronicle.narrative_style_id)

    for assignment in chronicle.role_assignments:
        entity = sources.entity(assignment.entity_id)
        name = entity.name if entity is not None else (assignment.entity_name or assignment.entity_id)
        label = assignment.role.replace("_", " ").capitalize()
        infobox.add(label, name, linked_entity=entity.id if entity is not None else None)

    return infobox


def build_chronicle_page(
    chronicle: Chronicle,
    entry: ChronicleEntry,
    index: PageIndex,
    sources: WikiSources,
) -> WikiPage:
    """Synthesize a chronicle page.

    Images are placed using the raw text so anchors are found before any
    link markup is inserted.
    """
    body = strip_title_heading(chronicle.rendered_content)
    # Chapters are level-2 headings; deeper headings stay inside their chapter
    sections = split_into_sections(body, default_heading="Chronicle", prefix="chronicle-section", levels=(2,))

    attach_images(sections, chronicle.image_refs, sources.entities_by_id)

    linker = index.autolinker()
    for section in sections:
        section.content = linker.link(section.content, exclude_id=chronicle.id)

    linked = extract_linked_entities(sections, index.references)
    if chronicle.entrypoint_id and chronicle.entrypoint_id in index and chronicle.entrypoint_id not in linked:
        linked.append(chronicle.entrypoint_id)

    return WikiPage(
        id=chronicle.id,
        slug=entry.slug,
        title=entry.title,
        type="chronicle",
        sections=sections,
        summary=entry.summary,
        infobox=build_chronicle_infobox(chronicle, sources),
        linked_entities=linked,
        last_updated=entry.last_updated,
    )
