"""
Anthropic Messages API provider.
"""

from typing import Any

from .base import BaseProvider
from ..config import ANTHROPIC_API_URL, ANTHROPIC_API_VERSION, DEFAULT_OUTPUT_TOKEN_BUDGET
from ..models import HttpRequest, ProviderRequest


class AnthropicProvider(BaseProvider):
    """Summaries through the Anthropic Messages API."""

    provider_id = "anthropic"

    def build_request(self, request: ProviderRequest) -> HttpRequest:
        params = request.parameters

        headers = {
            "x-api-key": request.credential,
            "anthropic-version": ANTHROPIC_API_VERSION,
            "content-type": "application/json",
        }

        payload = {
            "model": request.model_id,
            "system": request.system_prompt,
            "messages": [{"role": "user", "content": request.user_prompt}],
            # Required by the API
            "max_tokens": params.max_output_tokens or DEFAULT_OUTPUT_TOKEN_BUDGET,
            "temperature": params.temperature,
        }
        if params.top_p is not None:
            payload["top_p"] = params.top_p

        return HttpRequest(url=ANTHROPIC_API_URL, headers=headers, body=payload)

    def parse_response(self, data: Any) -> str:
        blocks = data.get("content") if isinstance(data, dict) else None
        if not isinstance(blocks, list):
            self.logger.warning("anthropic response has no content blocks")
            return ""

        text = "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type", "text") == "text"
        )
        return text.strip()
