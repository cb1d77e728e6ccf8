"""Tests for standings config loading and secret checks."""

import pytest

from medal_standings.config import secrets
from medal_standings.config.settings import DEFAULT_CONFIG, load_standings_config


class TestLoadStandingsConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_standings_config(str(tmp_path / "nope.yaml"))
        assert config == DEFAULT_CONFIG
        assert config is not DEFAULT_CONFIG

    def test_partial_override_merges(self, tmp_path):
        path = tmp_path / "standings.yaml"
        path.write_text("source: html\napi:\n  year: '2026'\n")

        config = load_standings_config(str(path))

        assert config["source"] == "html"
        assert config["api"]["year"] == "2026"
        assert config["api"]["endpoint"] == "/medals/countries"
        assert config["timeout_seconds"] == 10

    def test_invalid_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "standings.yaml"
        path.write_text("source: [unclosed\n")

        assert load_standings_config(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_gives_defaults(self, tmp_path):
        path = tmp_path / "standings.yaml"
        path.write_text("- just\n- a list\n")

        assert load_standings_config(str(path)) == DEFAULT_CONFIG

    def test_repo_config_loads(self):
        config = load_standings_config()
        assert config["source"] in ("api", "html")
        assert config["timeout_seconds"] > 0


class TestSecrets:
    def test_get_key(self, monkeypatch):
        monkeypatch.setenv("RAPIDAPI_KEY", "  abc123  ")
        assert secrets.get_rapidapi_key() == "abc123"

    def test_missing_key_raises(self, monkeypatch):
        monkeypatch.setenv("RAPIDAPI_KEY", "   ")
        with pytest.raises(secrets.MissingAPIKeyError):
            secrets.get_rapidapi_key()

    def test_check_keys(self, monkeypatch):
        monkeypatch.delenv("RAPIDAPI_KEY", raising=False)
        assert secrets.check_keys() == {"RAPIDAPI_KEY": "MISSING"}

        monkeypatch.setenv("RAPIDAPI_KEY", "abc")
        assert secrets.check_keys() == {"RAPIDAPI_KEY": "OK"}
