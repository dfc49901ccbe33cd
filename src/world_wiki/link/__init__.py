"""Wikilink insertion and resolution."""

from .autolinker import AutoLinker, LinkCandidate, apply_wikilinks, find_wikilinks

__all__ = ["AutoLinker", "LinkCandidate", "apply_wikilinks", "find_wikilinks"]
