"""Page synthesizer - build a full page for one index entry on demand."""

import logging

from ..index.builder import PageIndex
from ..models.pages import (
    CategoryEntry,
    ChronicleEntry,
    EntityEntry,
    RegionEntry,
    StaticEntry,
    WikiPage,
)
from .category import build_category_page
from .chronicle import build_chronicle_page
from .entity import build_entity_page
from .region import build_region_page
from .sources import WikiSources
from .static import build_static_page

logger = logging.getLogger(__name__)


def synthesize(page_id: str, index: PageIndex, sources: WikiSources) -> WikiPage | None:
    """Build the fully hydrated page for an id in the index.

    Args:
        page_id: Id of a lightweight index entry
        index: Index built from the same sources
        sources: Materialized source collections

    Returns:
        The page, or None when the id is unknown or its source record is gone
    """
    entry = index.get(page_id)
    if entry is None:
        return None

    if isinstance(entry, EntityEntry):
        entity = sources.entity(page_id)
        if entity is None:
            return _missing(entry.type, page_id)
        return build_entity_page(entity, entry, index, sources)

    if isinstance(entry, ChronicleEntry):
        chronicle = sources.chronicle(page_id)
        if chronicle is None or not chronicle.is_visible:
            return _missing(entry.type, page_id)
        return build_chronicle_page(chronicle, entry, index, sources)

    if isinstance(entry, StaticEntry):
        page = sources.static_page(page_id)
        if page is None or not page.is_visible:
            return _missing(entry.type, page_id)
        return build_static_page(page, entry, index, sources.world)

    if isinstance(entry, CategoryEntry):
        return build_category_page(entry, index)

    if isinstance(entry, RegionEntry):
        region = sources.region(entry.region_id)
        if region is None:
            return _missing(entry.type, page_id)
        return build_region_page(region, entry, index, sources)

    raise TypeError(f"Unhandled index entry type: {type(entry).__name__}")


def _missing(page_type: str, page_id: str) -> None:
    logger.debug("No source record for %s page %s", page_type, page_id)
    return None
