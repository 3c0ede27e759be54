"""
Google Gemini generateContent provider.
"""

from typing import Any

from .base import BaseProvider
from ..config import GOOGLE_API_URL
from ..models import HttpRequest, ProviderRequest


class GoogleProvider(BaseProvider):
    """Summaries through the Gemini API."""

    provider_id = "google"

    def build_request(self, request: ProviderRequest) -> HttpRequest:
        params = request.parameters

        generation_config = {"temperature": params.temperature}
        if params.top_p is not None:
            generation_config["topP"] = params.top_p
        if params.max_output_tokens:
            generation_config["maxOutputTokens"] = params.max_output_tokens

        payload = {
            "systemInstruction": {"parts": [{"text": request.system_prompt}]},
            "contents": [{"role": "user", "parts": [{"text": request.user_prompt}]}],
            "generationConfig": generation_config,
        }

        return HttpRequest(
            url=GOOGLE_API_URL.format(request.model_id),
            headers={
                "x-goog-api-key": request.credential,
                "Content-Type": "application/json",
            },
            body=payload,
        )

    def parse_response(self, data: Any) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            self.logger.warning("google response has no candidate content")
            return ""

        return "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()
