"""Automatic categories derived from entity attributes.

Category ids are ``{dimension}-{value}``. Each dimension is evaluated on its
own, so an entity carries at most one category per dimension.
"""

import math
import re

from ..models.world import Entity, Relationship

ACTIVE_DURING = "active_during"

# Upper bounds (exclusive) for each prominence label; anything above is mythic
PROMINENCE_LABELS: list[tuple[float, str]] = [
    (1.0, "forgotten"),
    (2.0, "marginal"),
    (3.0, "recognized"),
    (4.0, "renowned"),
]


def prominence_label(prominence: float) -> str:
    """Map a 0-5 prominence score to its descriptive label."""
    for upper, label in PROMINENCE_LABELS:
        if prominence < upper:
            return label
    return "mythic"


def prominence_bucket(prominence: float) -> int:
    """Integer bucket used for the prominence category."""
    return max(0, math.floor(prominence))


def find_active_era(entity_id: str, relationships: list[Relationship]) -> str | None:
    """Return the era id the entity is ``active_during``, if any."""
    for rel in relationships:
        if rel.src == entity_id and rel.kind == ACTIVE_DURING:
            return rel.dst
    return None


def entity_categories(entity: Entity, relationships: list[Relationship]) -> list[str]:
    """Compute the category ids for an entity, in dimension order."""
    categories = [f"kind-{entity.kind}"]

    if entity.subtype:
        categories.append(f"subtype-{entity.subtype}")

    if entity.culture:
        categories.append(f"culture-{entity.culture}")

    categories.append(f"prominence-{prominence_bucket(entity.prominence)}")
    categories.append(f"status-{entity.status}")

    era_id = find_active_era(entity.id, relationships)
    if era_id:
        categories.append(f"era-{era_id}")

    return categories


def split_category_id(category_id: str) -> tuple[str, str]:
    """Split a category id on its first dash into (dimension, value)."""
    dimension, _, value = category_id.partition("-")
    return dimension, value


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def format_category_name(category_id: str, era_names: dict[str, str] | None = None) -> str:
    """Human-readable name for a category id.

    ``"kind-npc"`` becomes ``"Kind: Npc"``. Era categories use the era's
    name when it is known.
    """
    dimension, value = split_category_id(category_id)
    if not value:
        return _capitalize(category_id.replace("_", " "))

    if dimension == "era" and era_names and value in era_names:
        return f"Era: {era_names[value]}"

    return f"{_capitalize(dimension)}: {_capitalize(value.replace('_', ' '))}"


def slugify(text: str) -> str:
    """Convert text to a URL-friendly slug."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
