"""
The "none" provider: no AI call, the formatted thread is the output.
"""

from typing import Any

from .base import BaseProvider
from ..errors import RequestNotSupportedError
from ..models import HttpRequest, ProviderClass, ProviderRequest


class PassthroughProvider(BaseProvider):
    """Shows the formatted thread itself instead of a summary."""

    provider_id = "none"
    provider_class = ProviderClass.LOCAL
    requires_credential = False
    requires_model = False
    truncates_input = False
    short_circuit = True

    def build_request(self, request: ProviderRequest) -> HttpRequest:
        raise RequestNotSupportedError("The 'none' provider never sends a request")

    def parse_response(self, data: Any) -> str:
        return data if isinstance(data, str) else ""
