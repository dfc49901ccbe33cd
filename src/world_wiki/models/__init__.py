"""Data models for world state, authored artifacts and wiki pages."""

from world_wiki.models.artifacts import Chronicle, ChronicleImageRef, RoleAssignment, StaticPage
from world_wiki.models.pages import (
    CategoryEntry,
    ChronicleEntry,
    DisambiguationEntry,
    EntityEntry,
    Infobox,
    PageIndexEntry,
    RegionEntry,
    SectionImage,
    StaticEntry,
    WikiCategory,
    WikiPage,
    WikiSection,
)
from world_wiki.models.world import (
    AuthoredSection,
    Entity,
    EntityLore,
    NarrativeEvent,
    Region,
    Relationship,
    WorldState,
)

__all__ = [
    "AuthoredSection",
    "CategoryEntry",
    "Chronicle",
    "ChronicleEntry",
    "ChronicleImageRef",
    "DisambiguationEntry",
    "Entity",
    "EntityEntry",
    "EntityLore",
    "Infobox",
    "NarrativeEvent",
    "PageIndexEntry",
    "Region",
    "RegionEntry",
    "Relationship",
    "RoleAssignment",
    "SectionImage",
    "StaticEntry",
    "StaticPage",
    "WikiCategory",
    "WikiPage",
    "WikiSection",
    "WorldState",
]
