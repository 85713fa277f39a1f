# tests/test_cli.py

import pytest
from unittest.mock import Mock, patch
from click.testing import CliRunner
from cli.main import cli

@pytest.fixture
def runner(tmp_path, monkeypatch):
    """CLI runner pointed at a fresh SQLite file."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.delenv("STORYHUB_SEED_ON_INIT", raising=False)
    return CliRunner()

@pytest.fixture
def seeded(runner):
    result = runner.invoke(cli, ['db', 'init', '--seed'])
    assert result.exit_code == 0, result.output
    return runner

def test_db_init(runner):
    result = runner.invoke(cli, ['db', 'init'])
    assert result.exit_code == 0
    assert "Schema ready" in result.output

def test_db_init_seed_from_environment(runner, monkeypatch):
    monkeypatch.setenv("STORYHUB_SEED_ON_INIT", "1")
    result = runner.invoke(cli, ['db', 'init'])
    assert result.exit_code == 0
    assert "Sample data inserted" in result.output

def test_db_seed_twice(seeded):
    result = seeded.invoke(cli, ['db', 'seed'])
    assert result.exit_code == 0
    assert "skipped" in result.output

def test_story_list_featured(seeded):
    result = seeded.invoke(cli, ['story', 'list', '--featured'])
    assert result.exit_code == 0
    # Most read first
    assert result.output.index("A Christmas Carol") < result.output.index("Tom Sawyer")
    assert result.output.index("Tom Sawyer") < result.output.index("Ubuntu")
    assert "4 stories" in result.output

def test_story_list_search(seeded):
    result = seeded.invoke(cli, ['story', 'list', '--search', 'alice'])
    assert result.exit_code == 0
    assert "Alice's Adventures in Wonderland" in result.output
    assert "Tom Sawyer" not in result.output

def test_story_list_rejects_combined_filters(seeded):
    result = seeded.invoke(cli, ['story', 'list', '--featured', '--search', 'x'])
    assert result.exit_code == 1

def test_story_show(seeded):
    result = seeded.invoke(cli, ['story', 'show', '1'])
    assert result.exit_code == 0
    assert "A Christmas Carol" in result.output
    assert "Marley's Ghost" in result.output
    assert "Noma Themba" in result.output

def test_story_show_missing(seeded):
    result = seeded.invoke(cli, ['story', 'show', '999'])
    assert result.exit_code == 1
    assert "Story 999 not found" in result.output

def test_author_stats(seeded):
    result = seeded.invoke(cli, ['author', 'stats', '1'])
    assert result.exit_code == 0
    assert "Stories: 4" in result.output
    assert "Followers: 0" in result.output

def test_author_featured(seeded):
    result = seeded.invoke(cli, ['author', 'featured'])
    assert result.exit_code == 0
    assert "Noma Themba" in result.output

def test_translate_caches(seeded):
    translator = Mock(return_value="Isikhathi esithile")
    with patch("cli.commands.translate.GoogleTranslator", return_value=translator):
        first = seeded.invoke(cli, ['translate', '4', 'zu'])
        second = seeded.invoke(cli, ['translate', '4', 'zu'])
    assert first.exit_code == 0
    assert "Isikhathi esithile" in second.output
    assert translator.call_count == 1

def test_translate_without_key(seeded, monkeypatch):
    monkeypatch.delenv("GOOGLE_TRANSLATE_API_KEY", raising=False)
    result = seeded.invoke(cli, ['translate', '1', 'fr'])
    assert result.exit_code == 1
    assert "not configured" in result.output
