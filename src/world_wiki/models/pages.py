"""Wiki page models: lightweight index entries and fully synthesized pages."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

PageType = Literal["entity", "era", "chronicle", "static", "category", "region"]


class IndexEntryBase(BaseModel):
    """Fields shared by every lightweight index entry."""

    id: str
    title: str
    slug: str
    summary: str | None = None
    aliases: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    linked_entities: list[str] = Field(default_factory=list)  # filled on full synthesis
    last_updated: int = 0


class EntityEntry(IndexEntryBase):
    """Index entry for an entity (or an era, which is an entity of kind ``era``)."""

    type: Literal["entity", "era"] = "entity"
    entity_kind: str
    entity_subtype: str | None = None
    prominence: float = 0.0
    culture: str | None = None


class ChronicleEntry(IndexEntryBase):
    type: Literal["chronicle"] = "chronicle"
    format: Literal["story", "document"] = "story"
    entrypoint_id: str | None = None
    narrative_style_id: str | None = None


class StaticEntry(IndexEntryBase):
    type: Literal["static"] = "static"
    namespace: str | None = None
    base_name: str


class CategoryEntry(IndexEntryBase):
    type: Literal["category"] = "category"
    category_id: str
    page_count: int = 0
    member_ids: list[str] = Field(default_factory=list)


class RegionEntry(IndexEntryBase):
    type: Literal["region"] = "region"
    region_id: str
    entity_kind: str | None = None
    culture: str | None = None
    member_ids: list[str] = Field(default_factory=list)


PageIndexEntry = Annotated[
    Union[EntityEntry, ChronicleEntry, StaticEntry, CategoryEntry, RegionEntry],
    Field(discriminator="type"),
]


class WikiCategory(BaseModel):
    """An automatically derived category."""

    id: str  # "{dimension}-{value}"
    name: str
    page_count: int = 0


class DisambiguationEntry(BaseModel):
    """One candidate in a "see also" notice for pages sharing a base title."""

    id: str
    title: str
    namespace: str | None = None
    type: PageType
    entity_kind: str | None = None


class SectionImage(BaseModel):
    """An image anchored inside a section."""

    ref_id: str
    type: Literal["entity_ref", "chronicle_image"]
    image_id: str
    anchor_text: str = ""
    size: str = "medium"
    caption: str | None = None


class WikiSection(BaseModel):
    id: str
    heading: str
    level: int = 2
    content: str
    images: list[SectionImage] = Field(default_factory=list)


class InfoboxField(BaseModel):
    label: str
    value: str
    linked_entity: str | None = None


class Infobox(BaseModel):
    """Sidebar metadata for a page."""

    type: PageType
    fields: list[InfoboxField] = Field(default_factory=list)
    image_id: str | None = None

    def add(self, label: str, value: object, linked_entity: str | None = None) -> None:
        self.fields.append(InfoboxField(label=label, value=str(value), linked_entity=linked_entity))

    def get(self, label: str) -> InfoboxField | None:
        for item in self.fields:
            if item.label == label:
                return item
        return None


class WikiPage(BaseModel):
    """A fully hydrated page, synthesized on demand and never persisted."""

    id: str
    slug: str
    title: str
    type: PageType
    aliases: list[str] = Field(default_factory=list)
    sections: list[WikiSection] = Field(default_factory=list)
    summary: str | None = None
    infobox: Infobox | None = None
    categories: list[str] = Field(default_factory=list)
    linked_entities: list[str] = Field(default_factory=list)
    last_updated: int = 0

    def section(self, heading: str) -> WikiSection | None:
        """Return the first section with the given heading."""
        for section in self.sections:
            if section.heading == heading:
                return section
        return None
