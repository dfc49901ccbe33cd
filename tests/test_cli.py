"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from world_wiki.cli import main


@pytest.fixture
def data_dir(tmp_path, monkeypatch, world_data, chronicle_data, static_page_data):
    """A data directory holding all three source files."""
    (tmp_path / "world.json").write_text(json.dumps(world_data))
    (tmp_path / "chronicles.json").write_text(json.dumps(chronicle_data))
    (tmp_path / "static_pages.json").write_text(json.dumps({"pages": static_page_data}))
    monkeypatch.setenv("WIKI_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


class TestCLI:
    """Test CLI commands against a small data directory."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_status(self, runner, data_dir):
        result = runner.invoke(main, ["status"])
        assert result.exit_code == 0
        assert "World Wiki Status" in result.output

    def test_validate(self, runner, data_dir):
        result = runner.invoke(main, ["validate", str(data_dir / "world.json")])
        assert result.exit_code == 0
        assert "Valid" in result.output

    def test_validate_malformed(self, runner, tmp_path, world_data):
        world_data["hardState"][0]["prominence"] = "high"
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(world_data))

        result = runner.invoke(main, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Invalid" in result.output

    def test_index(self, runner, data_dir):
        result = runner.invoke(main, ["index", "--type", "chronicle"])
        assert result.exit_code == 0
        assert "total" in result.output
        assert "The Fall of Aurora Stack" in result.output

    def test_categories(self, runner, data_dir):
        result = runner.invoke(main, ["categories"])
        assert result.exit_code == 0
        assert "Kind: Npc" in result.output

    def test_disambiguation(self, runner, data_dir):
        result = runner.invoke(main, ["disambiguation"])
        assert result.exit_code == 0
        assert "Cultures:Aurora" in result.output
        assert "Locations:Aurora" in result.output

    def test_page_json(self, runner, data_dir):
        result = runner.invoke(main, ["page", "npc-1", "--json"])
        assert result.exit_code == 0
        page = json.loads(result.output[result.output.index("{"):])
        assert page["title"] == "Aurora Stack"
        assert page["sections"][0]["heading"] == "Overview"

    def test_page_rendered(self, runner, data_dir):
        result = runner.invoke(main, ["page", "sp-1"])
        assert result.exit_code == 0
        assert "Cultures:Aurora" in result.output
        assert "See also" in result.output

    def test_page_not_found(self, runner, data_dir):
        result = runner.invoke(main, ["page", "nope"])
        assert result.exit_code == 1
        assert "Page not found" in result.output

    def test_search(self, runner, data_dir):
        result = runner.invoke(main, ["search", "Mira Vel"])
        assert result.exit_code == 0
        assert "Mira Vell" in result.output

    def test_link(self, runner, data_dir):
        result = runner.invoke(main, ["link", "Mira Vell met the Stack"])
        assert result.exit_code == 0
        assert "[[Mira Vell]] met [[the Stack]]" in result.output

    def test_explicit_paths(self, runner, tmp_path, world_data):
        path = tmp_path / "elsewhere.json"
        path.write_text(json.dumps(world_data))

        result = runner.invoke(main, ["link", "--world", str(path), "Aurora Stack"])
        assert result.exit_code == 0
        assert "[[Aurora Stack]]" in result.output

    def test_missing_world(self, runner, tmp_path, monkeypatch):
        monkeypatch.setenv("WIKI_DATA_DIR", str(tmp_path / "empty"))
        result = runner.invoke(main, ["categories"])
        assert result.exit_code == 1
        assert "Error" in result.output
