"""
Registry of summarization providers.
"""

from typing import Dict, List, Optional, Type

from .base import BaseProvider
from .anthropic import AnthropicProvider
from .google import GoogleProvider
from .ollama import OllamaProvider, list_ollama_models
from .openai_compat import OpenAIProvider, OpenRouterProvider
from .passthrough import PassthroughProvider
from .profiles import get_model_profile

_REGISTRY: Dict[str, BaseProvider] = {}


def register_provider(provider_cls: Type[BaseProvider]) -> Type[BaseProvider]:
    """Add a provider class to the registry, keyed by its provider_id."""
    if not provider_cls.provider_id:
        raise ValueError(f"{provider_cls.__name__} has no provider_id")
    _REGISTRY[provider_cls.provider_id] = provider_cls()
    return provider_cls


def get_provider(provider_id: Optional[str]) -> Optional[BaseProvider]:
    """The registered provider for an id, or None."""
    if not provider_id:
        return None
    return _REGISTRY.get(provider_id)


def available_providers() -> List[str]:
    """Ids of all registered providers, in registration order."""
    return list(_REGISTRY)


for _provider_cls in (
    PassthroughProvider,
    OpenAIProvider,
    AnthropicProvider,
    GoogleProvider,
    OpenRouterProvider,
    OllamaProvider,
):
    register_provider(_provider_cls)


__all__ = [
    "BaseProvider",
    "AnthropicProvider",
    "GoogleProvider",
    "OllamaProvider",
    "OpenAIProvider",
    "OpenRouterProvider",
    "PassthroughProvider",
    "register_provider",
    "get_provider",
    "available_providers",
    "get_model_profile",
    "list_ollama_models",
]
