"""
Base class for summarization providers.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models import HttpRequest, ProviderClass, ProviderRequest
from ..logging_config import get_logger


class BaseProvider(ABC):
    """
    One entry of the provider registry.

    A provider knows how to turn a ProviderRequest into an HTTP call and how
    to pull the summary text out of the response. Class attributes describe
    the policy the gateway applies before calling it.
    """

    provider_id: str = ""
    provider_class: ProviderClass = ProviderClass.CLOUD
    requires_credential: bool = True
    requires_model: bool = True
    truncates_input: bool = True
    short_circuit: bool = False
    # Hard ceiling on thread size, for providers that cannot cope with big threads
    max_comments: Optional[int] = None

    def __init__(self):
        self.logger = get_logger(self.__class__.__name__)

    def missing_fields(self, text: str, model_id: Optional[str], credential: Optional[str]) -> List[str]:
        """Names of required inputs that are absent for this provider."""
        missing = []
        if not text:
            missing.append("text")
        if self.requires_model and not model_id:
            missing.append("model")
        if self.requires_credential and not credential:
            missing.append("API key")
        return missing

    @abstractmethod
    def build_request(self, request: ProviderRequest) -> HttpRequest:
        """
        Shape the outbound HTTP call for this provider.

        Args:
            request: Prompts, model, credential and sampling parameters

        Returns:
            The URL, headers and JSON body to send
        """
        pass

    @abstractmethod
    def parse_response(self, data: Any) -> str:
        """
        Extract the summary text from a decoded response.

        Returns:
            The summary text, or "" when the response carries none
        """
        pass
