"""
Providers speaking the OpenAI Chat Completions format (OpenAI, OpenRouter).
"""

from typing import Any

from .base import BaseProvider
from ..config import OPENAI_API_URL, OPENROUTER_API_URL
from ..models import HttpRequest, ProviderRequest


class OpenAIProvider(BaseProvider):
    """Summaries through the OpenAI Chat Completions API."""

    provider_id = "openai"
    api_url = OPENAI_API_URL
    # max_tokens is rejected by reasoning models
    max_tokens_field = "max_completion_tokens"

    def build_request(self, request: ProviderRequest) -> HttpRequest:
        params = request.parameters

        headers = {
            "Authorization": f"Bearer {request.credential}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": request.model_id,
            "messages": [
                {"role": "system", "content": request.system_prompt},
                {"role": "user", "content": request.user_prompt},
            ],
        }
        if not params.reasoning:
            payload.update({
                "temperature": params.temperature,
                "top_p": params.top_p if params.top_p is not None else 1,
                "frequency_penalty": params.frequency_penalty or 0,
                "presence_penalty": params.presence_penalty or 0,
            })
        if params.max_output_tokens:
            payload[self.max_tokens_field] = params.max_output_tokens

        return HttpRequest(url=self.api_url, headers=headers, body=payload)

    def parse_response(self, data: Any) -> str:
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            self.logger.warning(f"{self.provider_id} response has no message content")
            return ""
        return (content or "").strip()


class OpenRouterProvider(OpenAIProvider):
    """OpenRouter speaks the OpenAI format but names the output limit max_tokens."""

    provider_id = "openrouter"
    api_url = OPENROUTER_API_URL
    max_tokens_field = "max_tokens"
