"""
Tests for the settings store and prompts built from settings.
"""

import json

from hn_companion.prompts import (
    DEFAULT_SYSTEM_PROMPT,
    build_system_prompt,
    build_user_prompt,
)
from hn_companion.settings import SettingsStore, get_credential


class TestSettingsStore:

    def test_defaults_when_missing(self, tmp_path):
        store = SettingsStore(str(tmp_path / "missing.json"))

        settings = store.get()

        assert settings["providerSelection"] == "none"
        assert settings["serverCacheEnabled"] is True
        assert settings["promptCustomization"] is False
        assert settings["ollama"]["url"] == "http://localhost:11434"

    def test_set_then_get(self, tmp_path):
        store = SettingsStore(str(tmp_path / "nested" / "settings.json"))

        store.set({"providerSelection": "openai", "openai": {"apiKey": "sk-1", "model": "gpt-4"}})
        settings = store.get()

        assert settings["providerSelection"] == "openai"
        assert settings["openai"] == {"apiKey": "sk-1", "model": "gpt-4"}
        assert settings["serverCacheEnabled"] is True

    def test_partial_provider_record_merged(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"ollama": {"model": "mistral"}}))

        settings = SettingsStore(str(path)).get()

        assert settings["ollama"] == {"model": "mistral", "url": "http://localhost:11434"}

    def test_last_write_wins(self, tmp_path):
        store = SettingsStore(str(tmp_path / "settings.json"))

        store.set({"providerSelection": "google"})
        store.set({"providerSelection": "anthropic"})

        assert store.get()["providerSelection"] == "anthropic"

    def test_corrupt_file_uses_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")

        assert SettingsStore(str(path)).get()["providerSelection"] == "none"

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.json"
        monkeypatch.setenv("HN_COMPANION_SETTINGS", str(path))

        assert SettingsStore().path == str(path)

    def test_defaults_not_shared_between_reads(self, tmp_path):
        store = SettingsStore(str(tmp_path / "settings.json"))

        store.get()["openai"]["apiKey"] = "changed"

        assert store.get()["openai"]["apiKey"] == ""


class TestGetCredential:

    def test_from_settings(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "from-env")

        assert get_credential({"openai": {"apiKey": "from-settings"}}, "openai") == "from-settings"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ANTHROPIC_API_KEY", "from-env")

        assert get_credential({"anthropic": {"apiKey": ""}}, "anthropic") == "from-env"

    def test_absent(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        assert get_credential({}, "google") is None


class TestPrompts:

    def test_default_prompts(self):
        assert build_system_prompt({}) == DEFAULT_SYSTEM_PROMPT
        prompt = build_user_prompt({}, "My Title", "THREAD")
        assert "My Title" in prompt
        assert prompt.endswith("THREAD")

    def test_custom_prompts_ignored_when_disabled(self):
        settings = {"promptCustomization": False, "systemPrompt": "custom"}

        assert build_system_prompt(settings) == DEFAULT_SYSTEM_PROMPT

    def test_empty_custom_prompt_falls_back(self):
        settings = {"promptCustomization": True, "systemPrompt": ""}

        assert build_system_prompt(settings) == DEFAULT_SYSTEM_PROMPT

    def test_literal_substitution(self):
        settings = {"promptCustomization": True, "userPrompt": "${title} | ${title} | ${text}"}

        result = build_user_prompt(settings, "T", r"text with \1 and $0")

        assert result == r"T | T | text with \1 and $0"
