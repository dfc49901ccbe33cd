"""
Page Synthesis Module

Builds fully hydrated wiki pages on demand from the lightweight index:
- Entity and era pages (authored content, relationships, timeline)
- Chronicle pages with anchored images
- Static pages with live template tokens
- Category and region pages
"""

from .sources import WikiSources
from .synthesizer import synthesize

__all__ = ["WikiSources", "synthesize"]
