"""Tests for YAML configuration loading and validation."""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from genrefixer.config_loader import Config, RunOptions
from genrefixer.errors import ConfigInvalid


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


class TestConfigDefaults:
    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LASTFM_API_KEY", raising=False)
        config = Config(str(tmp_path / "nope.yaml"))
        assert config.max_tags == 20
        assert config.min_scrobs == 5
        assert config.set_genre is True
        assert config.dry_run is False
        assert config.itunes_enabled is True
        assert config.genre_table_path is None
        assert config.lastfm_api_key == ""

    def test_empty_file(self, tmp_path):
        assert Config(_write(tmp_path, "")).run_options() == RunOptions()


class TestConfigValues:
    def test_values_read(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LASTFM_API_KEY", raising=False)
        path = _write(tmp_path, (
            "lastfm:\n"
            "  api_key: abc123\n"
            "  max_tags: 10\n"
            "  min_scrobs: '7'\n"
            "itunes:\n"
            "  enabled: false\n"
            "tagging:\n"
            "  set_genre: no\n"
            "genres:\n"
            "  table_path: my_genres.txt\n"
        ))
        config = Config(path)
        assert config.lastfm_api_key == "abc123"
        assert config.run_options() == RunOptions(max_tags=10, min_scrobs=7, set_genre=False)
        assert config.itunes_enabled is False
        assert config.genre_table_path == "my_genres.txt"

    def test_env_overrides_api_key(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LASTFM_API_KEY", "from-env")
        config = Config(_write(tmp_path, "lastfm:\n  api_key: from-file\n"))
        assert config.lastfm_api_key == "from-env"

    def test_placeholder_key_is_unset(self, tmp_path, monkeypatch):
        monkeypatch.delenv("LASTFM_API_KEY", raising=False)
        config = Config(_write(tmp_path, "lastfm:\n  api_key: YOUR_LASTFM_API_KEY\n"))
        assert config.lastfm_api_key == ""


class TestConfigValidation:
    @pytest.mark.parametrize("text", [
        "lastfm:\n  max_tags: lots\n",
        "lastfm:\n  min_scrobs: -1\n",
        "lastfm:\n  max_tags: true\n",
        "lastfm:\n  timeout: 2.5x\n",
        "tagging:\n  set_genre: maybe\n",
        "lastfm: [1, 2]\n",
        "- just\n- a list\n",
        "lastfm: {max_tags: [\n",
    ])
    def test_invalid_config_rejected(self, tmp_path, text):
        with pytest.raises(ConfigInvalid):
            Config(_write(tmp_path, text))
