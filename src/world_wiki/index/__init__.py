"""
Page Index Module

Builds the lightweight, eagerly rebuilt view of every page:
- Reference lookups (names, aliases, static titles, region labels)
- Automatic categories
- Disambiguation groups for shared base titles
- Fuzzy title search
"""

from .builder import PageIndex, build_page_index
from .categories import entity_categories, format_category_name, prominence_label, slugify
from .disambiguation import build_disambiguation, disambiguation_for
from .references import ReferenceIndex, build_reference_index
from .search import search_index

__all__ = [
    "PageIndex",
    "build_page_index",
    "entity_categories",
    "format_category_name",
    "prominence_label",
    "slugify",
    "build_disambiguation",
    "disambiguation_for",
    "ReferenceIndex",
    "build_reference_index",
    "search_index",
]
