"""Configuration cascade and API-key resolution."""
from __future__ import annotations

import pytest

from gemini_client import config
from gemini_client.config import env


def test_defaults():
    cfg = config.get_config()
    assert cfg["model"] == "gemini-2.0-flash"  # nosec B101
    assert cfg["embedding_model"] == "embedding-001"  # nosec B101
    assert cfg["base_url"] == "https://generativelanguage.googleapis.com/v1"  # nosec B101


def test_merge_order(monkeypatch, tmp_path):
    cfg_file = tmp_path / "gemini.yaml"
    cfg_file.write_text("model: from-file\nbase_url: https://file.test\nunknown: ignored\n", encoding="utf-8")
    monkeypatch.setenv("GEMINI_CONFIG_FILE", str(cfg_file))
    assert config.get_config()["model"] == "from-file"  # nosec B101
    assert "unknown" not in config.get_config()  # nosec B101

    monkeypatch.setenv("GEMINI_MODEL", "from-env")
    assert config.get_config()["model"] == "from-env"  # nosec B101
    assert config.get_config()["base_url"] == "https://file.test"  # nosec B101

    config.set_default_model("from-runtime")
    assert config.default_model() == "from-runtime"  # nosec B101

    assert config.get_config({"model": "explicit", "base_url": None})["model"] == "explicit"  # nosec B101


def test_json_config_file(monkeypatch, tmp_path):
    cfg_file = tmp_path / "gemini.json"
    cfg_file.write_text('{"embedding_model": "embed-x"}', encoding="utf-8")
    monkeypatch.setenv("GEMINI_CONFIG_FILE", str(cfg_file))
    assert config.get_config()["embedding_model"] == "embed-x"  # nosec B101


def test_broken_config_file_is_ignored(monkeypatch, tmp_path):
    cfg_file = tmp_path / "broken.yaml"
    cfg_file.write_text("model: [unclosed", encoding="utf-8")
    monkeypatch.setenv("GEMINI_CONFIG_FILE", str(cfg_file))
    assert config.get_config()["model"] == "gemini-2.0-flash"  # nosec B101


def test_set_default_model_rejects_empty():
    with pytest.raises(ValueError):
        config.set_default_model("  ")


def test_api_key_cascade(monkeypatch, tmp_path):
    assert config.api_key() is None  # nosec B101

    dotenv = tmp_path / ".env"
    dotenv.write_text('# comment\nexport GOOGLE_API_KEY="dotenv-google"\n', encoding="utf-8")
    monkeypatch.setenv("DOTENV_FILE", str(dotenv))
    assert env.resolve_api_key() == ("dotenv-google", "dotenv:GOOGLE_API_KEY")  # nosec B101

    monkeypatch.setenv("GOOGLE_API_KEY", "env-google")
    assert env.resolve_api_key() == ("env-google", "env:GOOGLE_API_KEY")  # nosec B101

    monkeypatch.setenv("GEMINI_API_KEY", "env-gemini")
    assert config.api_key() == "env-gemini"  # nosec B101

    config.set_api_key(None)
    assert config.api_key() == "env-gemini"  # nosec B101
    config.set_api_key("runtime")
    assert config.api_key() == "runtime"  # nosec B101

    config.reset_runtime_config()
    assert config.api_key() == "env-gemini"  # nosec B101


def test_is_placeholder():
    assert env.is_placeholder("YOUR_API_KEY")  # nosec B101
    assert env.is_placeholder(" test_123 ")  # nosec B101
    assert env.is_placeholder("changeme")  # nosec B101
    assert not env.is_placeholder("AIzaSyReal")  # nosec B101
    assert not env.is_placeholder(None)  # nosec B101
