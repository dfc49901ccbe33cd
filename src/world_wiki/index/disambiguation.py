"""Group pages that share a base title for "see also" notices."""

from collections import defaultdict
from typing import Iterable

from ..models.artifacts import split_namespace
from ..models.pages import DisambiguationEntry, EntityEntry, PageIndexEntry


def base_title_key(title: str) -> str:
    """Lowercase title with any ``Namespace:`` prefix removed."""
    _, base = split_namespace(title)
    return base.lower()


def build_disambiguation(entries: Iterable[PageIndexEntry]) -> dict[str, list[DisambiguationEntry]]:
    """Map each shared base title to the pages carrying it.

    Category pages are ignored. Groups keep index order and only groups of
    two or more pages are returned.
    """
    groups: dict[str, list[DisambiguationEntry]] = defaultdict(list)

    for entry in entries:
        if entry.type == "category":
            continue

        namespace, _ = split_namespace(entry.title)
        groups[base_title_key(entry.title)].append(
            DisambiguationEntry(
                id=entry.id,
                title=entry.title,
                namespace=namespace,
                type=entry.type,
                entity_kind=entry.entity_kind if isinstance(entry, EntityEntry) else None,
            )
        )

    return {key: members for key, members in groups.items() if len(members) >= 2}


def disambiguation_for(
    title: str,
    by_base_name: dict[str, list[DisambiguationEntry]],
    exclude_id: str | None = None,
) -> list[DisambiguationEntry]:
    """The other pages sharing a page's base title (empty when unique)."""
    members = by_base_name.get(base_title_key(title), [])
    return [m for m in members if m.id != exclude_id]
