"""Tests for automatic wikilink insertion."""

from world_wiki.link import AutoLinker, LinkCandidate, apply_wikilinks, find_wikilinks


class TestAutoLinker:
    """Test link placement rules."""

    def test_no_candidates_match(self):
        text = "Nothing to see here."
        assert apply_wikilinks(text, [("Aurora Stack", "id1")]) == text

    def test_empty_candidate_list(self):
        text = "Aurora Stack fought."
        assert apply_wikilinks(text, []) == text

    def test_first_occurrence_only(self):
        text = "Aurora Stack fought. Aurora Stack fled."
        result = apply_wikilinks(text, [("Aurora Stack", "id1")])
        assert result == "[[Aurora Stack]] fought. Aurora Stack fled."

    def test_longest_match_wins(self):
        linker = AutoLinker([("Aurora", "id1"), ("Aurora Stack", "id2")])
        assert linker.link("Aurora Stack") == "[[Aurora Stack]]"
        assert linker.page_id_for("Aurora Stack") == "id2"

    def test_shorter_name_still_linked_elsewhere(self):
        linker = AutoLinker([("Aurora", "id1"), ("Aurora Stack", "id2")])
        assert linker.link("Aurora Stack met Aurora") == "[[Aurora Stack]] met [[Aurora]]"

    def test_heading_never_linked(self):
        text = "## Aurora Stack\nNothing else."
        assert apply_wikilinks(text, [("Aurora Stack", "id1")]) == text

    def test_heading_starts_new_section(self):
        text = "Aurora here.\n## Next\nAurora again."
        result = apply_wikilinks(text, [("Aurora", "id1")])
        assert result == "[[Aurora]] here.\n## Next\n[[Aurora]] again."

    def test_body_after_heading_linked(self):
        text = "## Aurora Stack\nAurora Stack waits."
        result = apply_wikilinks(text, [("Aurora Stack", "id1")])
        assert result == "## Aurora Stack\n[[Aurora Stack]] waits."

    def test_existing_link_untouched(self):
        text = "[[Aurora]] and Aurora"
        assert apply_wikilinks(text, [("Aurora", "id1")]) == text

    def test_case_insensitive_keeps_original_casing(self):
        result = apply_wikilinks("the aurora stack rose", [("Aurora Stack", "id1")])
        assert result == "the [[aurora stack]] rose"

    def test_whole_words_only(self):
        assert apply_wikilinks("Auroras shine", [("Aurora", "id1")]) == "Auroras shine"
        assert apply_wikilinks("Aurora's light", [("Aurora", "id1")]) == "[[Aurora]]'s light"

    def test_minimum_length(self):
        assert apply_wikilinks("Al went home", [("Al", "id1")]) == "Al went home"
        assert apply_wikilinks("Al went home", [("Al", "id1")], min_length=2) == "[[Al]] went home"

    def test_exclude_id(self):
        linker = AutoLinker([("Aurora", "loc-1"), ("Mira", "npc-2")])
        assert linker.link("Aurora and Mira", exclude_id="loc-1") == "Aurora and [[Mira]]"

    def test_special_characters_in_names(self):
        result = apply_wikilinks("Meet Dr. K (the elder).", [("Dr. K (the elder)", "id1")])
        assert result == "Meet [[Dr. K (the elder)]]."

    def test_first_candidate_wins_for_same_name(self):
        linker = AutoLinker([LinkCandidate("Aurora", "a"), LinkCandidate("aurora", "b")])
        assert len(linker) == 1
        assert linker.page_id_for("AURORA") == "a"

    def test_empty_text(self):
        assert apply_wikilinks("", [("Aurora", "id1")]) == ""

    def test_pipe_in_name_escaped(self):
        result = apply_wikilinks("Birch|Elm waves", [("Birch|Elm", "b")])
        assert result == "[[Birch\\|Elm]] waves"


class TestFindWikilinks:
    """Test wikilink extraction."""

    def test_find_names(self):
        assert find_wikilinks("[[Aurora]] met [[Mira Vell|Mira]].") == ["Aurora", "Mira Vell"]

    def test_no_links(self):
        assert find_wikilinks("plain text") == []

    def test_escaped_pipe_kept_in_name(self):
        assert find_wikilinks("[[Birch\\|Elm]] and [[Ash|the ash]]") == ["Birch|Elm", "Ash"]
