"""Tests for label configuration loading."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from expiry_label.config import LabelConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("BEFORE", "AFTER", "START", "END", "MSG_PREFIX", "MSG_SUFFIX", "WARN_AT", "NOTICE_AT"):
        monkeypatch.delenv(f"EXPIRY_LABEL_{name}", raising=False)


def write_config(tmp_path: Path, data) -> Path:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestDefaults:
    def test_missing_file_returns_defaults(self, tmp_path):
        config = load_config(tmp_path / "absent.json")
        assert config == LabelConfig()
        assert config.warn_at == -1
        assert config.notice_at == -1

    def test_default_phrases(self):
        phrases = LabelConfig().phrases
        assert phrases.before_word == "Expires"
        assert phrases.after_word == "Expired"
        assert phrases.start_connector == "in"
        assert phrases.end_connector == "ago"


class TestFile:
    def test_values_loaded(self, tmp_path):
        path = write_config(tmp_path, {"before": "Closes", "warn_at": 600, "msg_suffix": "."})
        config = load_config(path)
        assert config.before == "Closes"
        assert config.warn_at == 600
        assert config.msg_suffix == "."
        assert config.after == "Expired"

    def test_unknown_keys_ignored(self, tmp_path):
        path = write_config(tmp_path, {"colour": "red"})
        assert load_config(path) == LabelConfig()

    def test_malformed_json_falls_back(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_config(path) == LabelConfig()
        assert "Failed to read config" in caplog.text

    def test_non_object_falls_back(self, tmp_path, caplog):
        path = write_config(tmp_path, ["before"])
        assert load_config(path) == LabelConfig()
        assert "not a JSON object" in caplog.text

    def test_bad_threshold_keeps_default(self, tmp_path, caplog):
        path = write_config(tmp_path, {"warn_at": "soon", "notice_at": True})
        config = load_config(path)
        assert config.warn_at == -1
        assert config.notice_at == -1
        assert "Invalid value" in caplog.text


class TestEnvironment:
    def test_env_overrides_file(self, tmp_path, monkeypatch):
        path = write_config(tmp_path, {"before": "Closes", "notice_at": 100})
        monkeypatch.setenv("EXPIRY_LABEL_BEFORE", "Ends")
        monkeypatch.setenv("EXPIRY_LABEL_NOTICE_AT", "7200")
        config = load_config(path)
        assert config.before == "Ends"
        assert config.notice_at == 7200

    def test_bad_env_int_ignored(self, tmp_path, monkeypatch):
        monkeypatch.setenv("EXPIRY_LABEL_WARN_AT", "ten")
        assert load_config(tmp_path / "absent.json").warn_at == -1
