"""Category pages."""

from ..index.builder import PageIndex
from ..link.extract import extract_linked_entities
from ..models.pages import CategoryEntry, WikiPage, WikiSection
from .sections import wikilink


def build_category_page(entry: CategoryEntry, index: PageIndex) -> WikiPage:
    """List every page carrying the category, in index order."""
    members = index.in_category(entry.category_id)
    content = "\n".join(f"- {wikilink(m.title)}" for m in members)

    sections = [WikiSection(id="pages", heading="Pages", level=2, content=content)]

    # Member titles that are not link targets (chronicles) still count
    linked = extract_linked_entities(sections, index.references)
    linked.extend(m.id for m in members if m.id not in linked)

    return WikiPage(
        id=entry.id,
        slug=entry.slug,
        title=entry.title,
        type="category",
        sections=sections,
        linked_entities=linked,
        last_updated=entry.last_updated,
    )
