"""
Ollama provider for models running on a local server.
"""

from typing import Any, List, Optional

from .base import BaseProvider
from ..config import OLLAMA_BASE_URL, OLLAMA_GENERATE_ENDPOINT, OLLAMA_TAGS_ENDPOINT, DEFAULT_TIMEOUT
from ..errors import SummarizationError
from ..models import HttpRequest, ProviderClass, ProviderRequest
from ..transport import HttpTransport
from ..logging_config import get_logger

logger = get_logger(__name__)


class OllamaProvider(BaseProvider):
    """
    Summaries from a local Ollama server.

    Local models get the whole thread: no credential is needed and the input
    is never truncated.
    """

    provider_id = "ollama"
    provider_class = ProviderClass.LOCAL
    requires_credential = False
    truncates_input = False

    def build_request(self, request: ProviderRequest) -> HttpRequest:
        base_url = (request.base_url or OLLAMA_BASE_URL).rstrip("/")

        payload = {
            "model": request.model_id,
            "system": request.system_prompt,
            "prompt": request.user_prompt,
            "stream": False,
        }

        return HttpRequest(
            url=f"{base_url}{OLLAMA_GENERATE_ENDPOINT}",
            headers={"Content-Type": "application/json"},
            body=payload,
        )

    def parse_response(self, data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        return (data.get("response") or "").strip()


def list_ollama_models(transport: Optional[HttpTransport] = None, url: Optional[str] = None) -> List[str]:
    """
    Names of the models installed on an Ollama server.

    Returns an empty list when the server cannot be reached.
    """
    transport = transport or HttpTransport()
    base_url = (url or OLLAMA_BASE_URL).rstrip("/")

    try:
        data = transport.request(f"{base_url}{OLLAMA_TAGS_ENDPOINT}", timeout=DEFAULT_TIMEOUT)
    except SummarizationError as e:
        logger.warning(f"Could not list Ollama models at {base_url}: {e}")
        return []

    models = data.get("models", []) if isinstance(data, dict) else []
    return [model["name"] for model in models if isinstance(model, dict) and model.get("name")]
