"""
Token budgets and sampling defaults per provider model.
"""

import re
from typing import Any, Dict, Optional

from ..config import (
    DEFAULT_INPUT_TOKEN_BUDGET,
    DEFAULT_OUTPUT_TOKEN_BUDGET,
    DEFAULT_TEMPERATURE,
)
from ..models import ModelProfile

DEFAULT_PROFILE = {
    "input_token_budget": DEFAULT_INPUT_TOKEN_BUDGET,
    "output_token_budget": DEFAULT_OUTPUT_TOKEN_BUDGET,
    "temperature": DEFAULT_TEMPERATURE,
    "top_p": None,
    "frequency_penalty": 0,
    "presence_penalty": 0,
    "reasoning": False,
}

# (provider, model) -> overrides; "default" applies to unlisted models of a provider
MODEL_PROFILES: Dict[str, Dict[str, Dict[str, Any]]] = {
    "openai": {
        "gpt-5": {"input_token_budget": 25000, "reasoning": True},
        "gpt-5-mini": {"input_token_budget": 20000, "reasoning": True},
        "gpt-5-nano": {"input_token_budget": 16000, "reasoning": True},
        "gpt-4.1-nano": {"input_token_budget": 16000, "temperature": 0.7},
        "gpt-4": {"input_token_budget": 25000, "temperature": 0.7},
        "gpt-4-turbo": {"input_token_budget": 27000, "temperature": 0.7},
        "gpt-3.5-turbo": {"input_token_budget": 16000, "temperature": 0.7},
    },
    "anthropic": {
        "claude-opus-4-1": {"input_token_budget": 25000, "output_token_budget": 4000, "temperature": 0.7},
        "claude-sonnet-4-0": {"input_token_budget": 24000, "output_token_budget": 4000, "temperature": 0.7},
        "claude-3-7-sonnet-latest": {"input_token_budget": 24000, "output_token_budget": 4000, "temperature": 0.7},
        "claude-3-5-sonnet-latest": {"input_token_budget": 22000, "output_token_budget": 4000, "temperature": 0.7},
        "claude-3-5-haiku-latest": {"input_token_budget": 20000, "output_token_budget": 3000, "temperature": 0.7},
        "claude-3-opus-latest": {"input_token_budget": 25000, "output_token_budget": 4000, "temperature": 0.7},
        "default": {"input_token_budget": 20000, "output_token_budget": 4000, "temperature": 0.7},
    },
    "google": {
        "gemini-3-pro-preview": {"input_token_budget": 15000, "temperature": 0.7},
        "gemini-2.5-pro": {"input_token_budget": 15000, "temperature": 0.7},
        "gemini-flash-latest": {"input_token_budget": 15000, "temperature": 0.7},
        "gemini-2.5-flash": {"input_token_budget": 15000, "temperature": 0.7},
        "gemini-2.5-flash-lite": {"input_token_budget": 15000, "temperature": 0.7},
        "gemini-2.0-flash": {"input_token_budget": 15000, "temperature": 0.7},
        "gemini-2.0-flash-lite": {"input_token_budget": 15000, "temperature": 0.7},
    },
    "openrouter": {
        "claude-3-sonnet-20240229": {"input_token_budget": 25000, "output_token_budget": 3000, "temperature": 0.7},
    },
}

# OpenAI reasoning families: no sampling parameters, max_completion_tokens only
OPENAI_REASONING_MODEL = re.compile(r"^(gpt-5|o\d)")


def get_model_profile(provider_id: Optional[str], model_id: Optional[str]) -> ModelProfile:
    """
    Look up a model's profile.

    Tries the exact (provider, model) entry, then the provider's "default"
    entry, then the global default. Fields an entry leaves out take the
    global default values. Unlisted OpenAI reasoning models (gpt-5*, o1,
    o3, ...) are flagged as such.
    """
    provider_profiles = MODEL_PROFILES.get(provider_id or "", {})
    overrides = provider_profiles.get(model_id or "") or provider_profiles.get("default") or {}

    values = dict(DEFAULT_PROFILE)
    values.update(overrides)
    if provider_id == "openai" and model_id and OPENAI_REASONING_MODEL.match(model_id):
        values["reasoning"] = True
    return ModelProfile(**values)
