"""Exceptions raised at the edges of the wiki core.

The index and synthesis code never raises for gaps in world data; these
exceptions belong to the loading step that runs before an index is built.
"""


class WikiError(Exception):
    """Base class for World Wiki errors."""


class MalformedWorldDataError(WikiError):
    """A critical field in upstream world data has the wrong type."""

    def __init__(self, message: str, entity_id: str | None = None, field: str | None = None):
        super().__init__(message)
        self.entity_id = entity_id
        self.field = field


class SourceLoadError(WikiError):
    """A source collection file could not be read or decoded."""
