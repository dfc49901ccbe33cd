"""Fuzzy search over page titles and aliases."""

from rapidfuzz import fuzz, process

from ..config import get_settings
from ..models.pages import PageIndexEntry
from .builder import PageIndex


def search_index(
    index: PageIndex,
    query: str,
    limit: int | None = None,
    cutoff: float | None = None,
    include_categories: bool = False,
) -> list[tuple[PageIndexEntry, float]]:
    """Rank index entries against a free-text query.

    Each page is scored on its best-matching title or alias.

    Args:
        index: The lightweight page index
        query: Search text
        limit: Maximum number of results (defaults to settings)
        cutoff: Minimum score 0-100 (defaults to settings)
        include_categories: Whether category pages can match

    Returns:
        List of (entry, score) tuples, best first
    """
    settings = get_settings()
    limit = limit if limit is not None else settings.search_limit
    cutoff = cutoff if cutoff is not None else settings.search_cutoff

    query = query.strip().lower()
    if not query:
        return []

    # One choice per title/alias, keyed back to its page
    choices: dict[int, str] = {}
    owners: dict[int, str] = {}
    for entry in index.entries:
        if entry.type == "category" and not include_categories:
            continue
        for name in [entry.title, *entry.aliases]:
            key = len(choices)
            choices[key] = name.lower()
            owners[key] = entry.id

    best: dict[str, float] = {}
    for _, score, key in process.extract(
        query,
        choices,
        scorer=fuzz.WRatio,
        score_cutoff=cutoff,
        limit=None,
    ):
        page_id = owners[key]
        if score > best.get(page_id, -1.0):
            best[page_id] = score

    ranked = sorted(best.items(), key=lambda item: item[1], reverse=True)
    return [(index.by_id[page_id], score) for page_id, score in ranked[:limit]]
