"""Shared fixtures: a small world with chronicles and static pages."""

import pytest

from world_wiki.cache import WikiService
from world_wiki.config import get_settings
from world_wiki.index import build_page_index
from world_wiki.models import Chronicle, StaticPage, WorldState
from world_wiki.synth import WikiSources


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; make each test read the environment again."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def world_data():
    """World export in the camelCase shape the simulation writes."""
    return {
        "metadata": {"simulationRunId": "run-1", "tick": 42, "era": "era-1"},
        "hardState": [
            {
                "id": "era-1",
                "name": "Age of Embers",
                "kind": "era",
                "prominence": 4.5,
                "description": "The age when the Aurora Stack rose.",
                "lore": {"eraChapter": "The embers fell on the Ember Coast."},
                "createdAt": 1,
            },
            {
                "id": "npc-1",
                "name": "Aurora Stack",
                "kind": "npc",
                "subtype": "merchant",
                "culture": "Aurora",
                "prominence": 3,
                "aliases": ["The Stack", "  "],
                "regionId": "reg-1",
                "imageId": "img-npc-1",
                "summary": "A merchant prince.",
                "description": "Aurora Stack trades with Mira Vell. Aurora Stack never sleeps.",
                "lore": {"story": "Long ago, Vell was a friend."},
                "createdAt": 3,
                "updatedAt": 30,
            },
            {
                "id": "npc-2",
                "name": "Mira Vell",
                "kind": "npc",
                "subtype": "smuggler",
                "culture": "Nightshelf",
                "prominence": 1.5,
                "aliases": ["Vell"],
                "regionId": "reg-1",
                "description": "A smuggler.",
                "createdAt": 4,
            },
            {
                "id": "loc-1",
                "name": "Aurora",
                "kind": "location",
                "subtype": "city",
                "culture": "Aurora",
                "prominence": 2.2,
                "allRegionIds": ["reg-1"],
                "description": "A harbor city.",
                "createdAt": 2,
            },
        ],
        "relationships": [
            {"src": "npc-1", "dst": "npc-2", "kind": "ally", "createdAt": 5},
            {"src": "npc-2", "dst": "npc-1", "kind": "ally", "createdAt": 5},
            {"src": "npc-1", "dst": "loc-1", "kind": "resident_of", "createdAt": 3},
            {"src": "npc-1", "dst": "era-1", "kind": "active_during", "createdAt": 3},
        ],
        "narrativeHistory": [
            {
                "id": "ev-2",
                "tick": 20,
                "era": "era-1",
                "eventKind": "betrayal",
                "subject": {"id": "npc-2", "name": "Mira Vell"},
                "object": {"id": "npc-1", "name": "Aurora Stack"},
                "participantEffects": [
                    {
                        "entity": {"id": "npc-1", "name": "Aurora Stack"},
                        "effects": [{"type": "relationship_ended", "description": "lost trust"}],
                    }
                ],
                "significance": 0.8,
                "headline": "Mira Vell betrays Aurora Stack",
            },
            {
                "id": "ev-1",
                "tick": 5,
                "era": "era-1",
                "subject": {"id": "npc-1", "name": "Aurora Stack"},
                "significance": 0.4,
                "headline": "Aurora Stack founds a guild",
            },
        ],
        "regions": [
            {
                "id": "reg-1",
                "label": "Ember Coast",
                "description": "A coast ruled by Aurora Stack.",
                "culture": "Aurora",
                "createdAt": 1,
            }
        ],
        "coordinateState": {
            "emergentRegions": {"npc": [{"id": "reg-e", "label": "Drift Quarter", "createdAt": 12}]}
        },
    }


@pytest.fixture
def chronicle_data():
    return [
        {
            "id": "chr-1",
            "title": "The Fall of Aurora Stack",
            "format": "story",
            "status": "complete",
            "entrypointId": "npc-1",
            "narrativeStyleId": "epic-drama",
            "roleAssignments": [
                {"role": "protagonist", "entityId": "npc-1", "entityName": "Aurora Stack", "isPrimary": True},
                {"role": "antagonist", "entityId": "npc-2", "entityName": "Mira Vell"},
            ],
            "finalContent": (
                "# The Fall of Aurora Stack\n\n"
                "Intro mentions Mira Vell.\n\n"
                "## The Betrayal\n\n"
                "Mira Vell struck at dawn.\n\n"
                "## Aftermath\n\n"
                "The Ember Coast burned."
            ),
            "summary": "Betrayal on the coast.",
            "imageRefs": [
                {"refId": "img-a", "type": "entity_ref", "entityId": "npc-1", "anchorText": "struck at dawn"},
                {"refId": "img-b", "type": "entity_ref", "entityId": "npc-2", "anchorText": "Aftermath"},
                {"refId": "img-c", "type": "prompt_request", "status": "pending", "anchorText": "burned"},
                {
                    "refId": "img-d",
                    "type": "prompt_request",
                    "status": "complete",
                    "generatedImageId": "gen-1",
                    "anchorText": "nowhere in the text",
                    "size": "large",
                    "caption": "The harbor at dusk",
                },
            ],
            "createdAt": 10,
            "updatedAt": 11,
            "acceptedAt": 12,
        },
        {"id": "chr-2", "title": "Empty Tale", "status": "complete", "finalContent": "   "},
        {"id": "chr-3", "title": "Unfinished Tale", "status": "assembly_ready", "assembledContent": "Draft text."},
    ]


@pytest.fixture
def static_page_data():
    return [
        {
            "id": "sp-1",
            "title": "Cultures:Aurora",
            "slug": "cultures-aurora",
            "status": "published",
            "content": (
                "The {{cultures}} peoples gather. Now: {{era_summary}}. "
                "There are {{count:npc}} npcs, led by {{entity:the stack}}. "
                "{{mystery}} and {{entity:Nobody}} stay."
            ),
            "summary": "Aurora culture.",
            "createdAt": 7,
        },
        {
            "id": "sp-2",
            "title": "Locations:Aurora",
            "slug": "locations-aurora",
            "status": "published",
            "content": "# Locations:Aurora\n\n## Harbor\n\nShips from Ember Coast.",
        },
        {"id": "sp-3", "title": "Draft Notes", "slug": "draft-notes", "status": "draft", "content": "Not yet."},
    ]


@pytest.fixture
def world(world_data):
    return WorldState.model_validate(world_data)


@pytest.fixture
def chronicles(chronicle_data):
    return [Chronicle.model_validate(c) for c in chronicle_data]


@pytest.fixture
def static_pages(static_page_data):
    return [StaticPage.model_validate(p) for p in static_page_data]


@pytest.fixture
def sources(world, chronicles, static_pages):
    return WikiSources(world=world, chronicles=chronicles, static_pages=static_pages)


@pytest.fixture
def index(world, chronicles, static_pages):
    return build_page_index(world, chronicles, static_pages)


@pytest.fixture
def service(world, chronicles, static_pages):
    return WikiService(world, chronicles=chronicles, static_pages=static_pages)
