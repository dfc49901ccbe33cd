"""Load source collections from JSON exports.

The world export is type-checked before any model is built: a non-numeric
prominence anywhere blocks the whole load with a MalformedWorldDataError.
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import MalformedWorldDataError, SourceLoadError
from .models.artifacts import Chronicle, StaticPage
from .models.world import WorldState


def load_json(path: Path) -> Any:
    """Read and decode a JSON file."""
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise SourceLoadError(f"Could not read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SourceLoadError(f"Invalid JSON in {path}: {e}") from e


def _entity_records(raw: dict) -> list:
    records = raw.get("hardState", raw.get("entities", []))
    return records if isinstance(records, list) else []


def validate_world_data(raw: dict) -> None:
    """Check the fields the index depends on before it is built.

    Raises:
        MalformedWorldDataError: for the first entity whose prominence is not a number
    """
    for record in _entity_records(raw):
        if not isinstance(record, dict):
            continue
        prominence = record.get("prominence", 0)
        if isinstance(prominence, bool) or not isinstance(prominence, (int, float)):
            name = record.get("name", "?")
            entity_id = record.get("id", "?")
            raise MalformedWorldDataError(
                f'Entity "{name}" ({entity_id}) has prominence={prominence!r} '
                f"({type(prominence).__name__}). Expected a number (0-5). "
                "The saved simulation data may be from an older format.",
                entity_id=entity_id,
                field="prominence",
            )


def parse_world(raw: dict) -> WorldState:
    """Validate and parse a decoded world export."""
    if not isinstance(raw, dict):
        raise SourceLoadError("World export must be a JSON object")
    validate_world_data(raw)
    try:
        return WorldState.model_validate(raw)
    except ValidationError as e:
        raise SourceLoadError(f"Invalid world data: {e}") from e


def load_world(path: Path) -> WorldState:
    return parse_world(load_json(path))


def _records(raw: Any, key: str) -> list:
    """Accept either a bare list or an object wrapping the list under ``key``."""
    if isinstance(raw, dict):
        raw = raw.get(key, [])
    if not isinstance(raw, list):
        raise SourceLoadError(f"Expected a list of {key}")
    return raw


def load_chronicles(path: Path) -> list[Chronicle]:
    try:
        return [Chronicle.model_validate(r) for r in _records(load_json(path), "chronicles")]
    except ValidationError as e:
        raise SourceLoadError(f"Invalid chronicle in {path}: {e}") from e


def load_static_pages(path: Path) -> list[StaticPage]:
    try:
        return [StaticPage.model_validate(r) for r in _records(load_json(path), "pages")]
    except ValidationError as e:
        raise SourceLoadError(f"Invalid static page in {path}: {e}") from e
