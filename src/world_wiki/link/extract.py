"""Resolve the wikilinks a page's sections contain."""

from typing import Iterable

from ..index.references import ReferenceIndex
from ..models.pages import WikiSection
from .autolinker import find_wikilinks


def extract_linked_entities(sections: Iterable[WikiSection], references: ReferenceIndex) -> list[str]:
    """Page ids referenced by ``[[Name]]`` markup, in first-seen order.

    Names resolve against entity names, then aliases, then static page and
    region titles. Names that resolve to nothing are skipped.
    """
    linked: list[str] = []
    seen: set[str] = set()

    for section in sections:
        for name in find_wikilinks(section.content):
            page_id = references.resolve(name)
            if page_id and page_id not in seen:
                seen.add(page_id)
                linked.append(page_id)

    return linked
