"""
Persistent user settings stored as one JSON document.
"""

import copy
import json
import os
from typing import Any, Dict, Optional

from .config import DEFAULT_SETTINGS_PATH, SETTINGS_ENV_VAR, OLLAMA_BASE_URL, OLLAMA_DEFAULT_MODEL
from .logging_config import get_logger

DEFAULT_SETTINGS: Dict[str, Any] = {
    "providerSelection": "none",
    "serverCacheEnabled": True,
    "promptCustomization": False,
    "systemPrompt": "",
    "userPrompt": "",
    "openai": {"apiKey": "", "model": ""},
    "anthropic": {"apiKey": "", "model": ""},
    "google": {"apiKey": "", "model": ""},
    "openrouter": {"apiKey": "", "model": ""},
    "ollama": {"model": OLLAMA_DEFAULT_MODEL, "url": OLLAMA_BASE_URL},
}


class SettingsStore:
    """
    Reads and writes the settings record.

    get() always returns a complete record: stored values merged over the
    defaults. set() replaces the stored document; the last write wins.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path or os.environ.get(SETTINGS_ENV_VAR) or DEFAULT_SETTINGS_PATH
        self.logger = get_logger(self.__class__.__name__)

    def get(self) -> Dict[str, Any]:
        settings = copy.deepcopy(DEFAULT_SETTINGS)

        if not os.path.exists(self.path):
            self.logger.debug(f"No settings file at {self.path}, using defaults")
            return settings

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                stored = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Could not read settings from {self.path}: {e}. Using defaults")
            return settings

        if not isinstance(stored, dict):
            self.logger.warning(f"Settings file {self.path} does not hold an object. Using defaults")
            return settings

        for key, value in stored.items():
            if isinstance(value, dict) and isinstance(settings.get(key), dict):
                settings[key].update(value)
            else:
                settings[key] = value
        return settings

    def set(self, settings: Dict[str, Any]) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)
        self.logger.debug(f"Saved settings to {self.path}")


def get_credential(settings: Dict[str, Any], provider_id: str) -> Optional[str]:
    """API key for a provider from settings, else from <PROVIDER>_API_KEY."""
    provider_settings = settings.get(provider_id) or {}
    return provider_settings.get("apiKey") or os.environ.get(f"{provider_id.upper()}_API_KEY") or None
