"""Authored artifacts: generated chronicles and hand-written static pages."""

from typing import Literal

from pydantic import Field

from world_wiki.models.world import SourceModel


class ChronicleImageRef(SourceModel):
    """An image placement requested by a chronicle."""

    ref_id: str
    anchor_text: str = ""
    size: Literal["small", "medium", "large", "full-width"] = "medium"
    caption: str | None = None
    type: Literal["entity_ref", "prompt_request"]
    entity_id: str | None = None  # entity_ref only
    scene_description: str | None = None  # prompt_request only
    status: Literal["pending", "generating", "complete", "failed"] | None = None
    generated_image_id: str | None = None


class RoleAssignment(SourceModel):
    """An entity cast in a narrative role."""

    role: str
    entity_id: str
    entity_name: str | None = None
    is_primary: bool = False


class Chronicle(SourceModel):
    """A generated story or document built from a seed of entities and events."""

    id: str
    title: str
    format: Literal["story", "document"] = "story"
    entrypoint_id: str | None = None
    narrative_style_id: str | None = None
    role_assignments: list[RoleAssignment] = Field(default_factory=list)
    selected_entity_ids: list[str] = Field(default_factory=list)
    selected_event_ids: list[str] = Field(default_factory=list)
    selected_relationship_ids: list[str] = Field(default_factory=list)
    assembled_content: str | None = None  # draft
    final_content: str | None = None
    summary: str | None = None
    image_refs: list[ChronicleImageRef] = Field(default_factory=list)
    status: str = "complete"
    created_at: int = 0
    updated_at: int = 0
    accepted_at: int | None = None

    @property
    def rendered_content(self) -> str:
        """Final content when accepted, otherwise the assembled draft."""
        content = self.final_content or self.assembled_content or ""
        return content.strip()

    @property
    def is_visible(self) -> bool:
        return self.status == "complete" and bool(self.rendered_content)

    @property
    def last_updated(self) -> int:
        return self.accepted_at or self.updated_at or self.created_at


class StaticPage(SourceModel):
    """A hand-authored article, optionally namespaced as ``Namespace:Title``."""

    id: str
    title: str
    slug: str
    content: str = ""
    summary: str | None = None
    status: Literal["draft", "published"] = "published"
    created_at: int = 0
    updated_at: int = 0

    @property
    def is_visible(self) -> bool:
        return self.status == "published"

    @property
    def namespace(self) -> str | None:
        namespace, _ = split_namespace(self.title)
        return namespace

    @property
    def base_name(self) -> str:
        _, base = split_namespace(self.title)
        return base

    @property
    def last_updated(self) -> int:
        return self.updated_at or self.created_at


def split_namespace(title: str) -> tuple[str | None, str]:
    """Split ``"Cultures:Aurora"`` into ``("Cultures", "Aurora")``.

    Titles without a colon, or with nothing on one side of it, have no
    namespace and are returned whole as the base name.
    """
    colon = title.find(":")
    if colon <= 0 or colon >= len(title) - 1:
        return None, title.strip()
    base = title[colon + 1 :].strip()
    if not base:
        return None, title.strip()
    return title[:colon].strip(), base
