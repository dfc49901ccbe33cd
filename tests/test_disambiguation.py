"""Tests for disambiguation grouping."""

from world_wiki.index import build_disambiguation, disambiguation_for
from world_wiki.models import CategoryEntry, StaticEntry


def static_entry(page_id, title):
    namespace, _, base = title.partition(":")
    if not base:
        namespace, base = None, title
    return StaticEntry(id=page_id, title=title, slug=page_id, namespace=namespace, base_name=base)


class TestDisambiguation:
    """Test grouping of pages by base title."""

    def test_namespaced_titles_group(self):
        entries = [
            static_entry("a", "Cultures:Aurora"),
            static_entry("b", "Locations:Aurora"),
            static_entry("c", "Harbor"),
        ]
        groups = build_disambiguation(entries)

        assert list(groups) == ["aurora"]
        assert len(groups["aurora"]) == 2
        assert [m.namespace for m in groups["aurora"]] == ["Cultures", "Locations"]

    def test_unique_title_in_no_group(self):
        groups = build_disambiguation([static_entry("a", "Cultures:Aurora"), static_entry("c", "Harbor")])
        assert groups == {}

    def test_categories_ignored(self):
        entries = [
            static_entry("a", "Aurora"),
            CategoryEntry(id="category-x", title="Aurora", slug="x", category_id="x"),
        ]
        assert build_disambiguation(entries) == {}

    def test_entity_joins_group(self, index):
        group = index.by_base_name["aurora"]
        assert [m.id for m in group] == ["loc-1", "sp-1", "sp-2"]
        assert group[0].type == "entity"
        assert group[0].entity_kind == "location"
        assert group[0].namespace is None

    def test_disambiguation_for_excludes_self(self, index):
        others = disambiguation_for("Cultures:Aurora", index.by_base_name, exclude_id="sp-1")
        assert [m.id for m in others] == ["loc-1", "sp-2"]

    def test_disambiguation_for_unique_title(self, index):
        assert disambiguation_for("Mira Vell", index.by_base_name, exclude_id="npc-2") == []
