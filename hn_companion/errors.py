"""
Error taxonomy, typed exceptions and user-facing error messages.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ErrorKind(Enum):
    """Fixed set of failure categories shown to the user."""
    MISSING_CONFIGURATION = "missing_configuration"
    INVALID_CREDENTIAL = "invalid_credential"
    ELIGIBILITY_REJECTED = "eligibility_rejected"
    EMPTY_SUMMARY = "empty_summary"
    TIMEOUT = "timeout"
    TRANSPORT_FAILURE = "transport_failure"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    UNCLASSIFIED = "unclassified"


class SummarizationError(Exception):
    """Base class for failures raised while producing a summary."""
    kind = ErrorKind.UNCLASSIFIED


class MissingConfigurationError(SummarizationError):
    """A provider, model or credential required for the call is absent."""
    kind = ErrorKind.MISSING_CONFIGURATION


class RequestTimeoutError(SummarizationError):
    """The outbound call did not complete within its timeout."""
    kind = ErrorKind.TIMEOUT


class TransportError(SummarizationError):
    """Network, HTTP or payload failure other than a timeout."""
    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EmptySummaryError(SummarizationError):
    """The provider answered but produced no usable text."""
    kind = ErrorKind.EMPTY_SUMMARY


class InputBudgetError(SummarizationError):
    """Nothing of the thread fits the model's input token budget."""


class RequestNotSupportedError(SummarizationError):
    """The provider produces its output without an outbound request."""


# Checked in order; first match wins.
_SIGNATURES = [
    (ErrorKind.MISSING_CONFIGURATION, ("Missing AI configuration", "AI provider not configured")),
    (ErrorKind.INVALID_CREDENTIAL, ("API key", "401", "Unauthorized")),
    (ErrorKind.RATE_LIMITED, ("429", "rate limit")),
    (ErrorKind.QUOTA_EXCEEDED, ("current quota", "quota exceeded", "insufficient_quota")),
    (ErrorKind.TIMEOUT, ("Request timeout",)),
    (ErrorKind.TRANSPORT_FAILURE, ("Failed to fetch", "NetworkError", "network", "Connection")),
]

# Kinds whose signature is matched case-insensitively.
_CASE_INSENSITIVE = {ErrorKind.RATE_LIMITED}


def classify_error(error: Union[BaseException, str, None]) -> ErrorKind:
    """
    Map an error to the user-facing taxonomy.

    Typed exceptions carry their own kind, except for transport errors whose
    message reveals something more specific (an HTTP 429 or an invalid key).
    Anything else is matched against known message signatures. An HTTP error
    status without a known signature is unclassified; transport failure
    covers connection and payload errors only.
    """
    if error is None:
        return ErrorKind.UNCLASSIFIED

    message = error if isinstance(error, str) else str(error)

    if isinstance(error, SummarizationError) and not isinstance(error, TransportError):
        return error.kind

    for kind, signatures in _SIGNATURES:
        haystack = message.lower() if kind in _CASE_INSENSITIVE else message
        for signature in signatures:
            needle = signature.lower() if kind in _CASE_INSENSITIVE else signature
            if needle in haystack:
                return kind

    # A server that answered with an error status is reachable
    if isinstance(error, TransportError) and error.status_code is None:
        return ErrorKind.TRANSPORT_FAILURE
    return ErrorKind.UNCLASSIFIED


@dataclass
class ErrorMessage:
    """Human-readable rendering of a failure."""
    title: str
    description: str
    hint: Optional[str] = None


_MESSAGES = {
    ErrorKind.MISSING_CONFIGURATION: ErrorMessage(
        title="AI Provider Not Configured",
        description="To generate summaries, you need to select an AI provider and add your API key in the settings.",
        hint="You can use cloud AI services or run models locally.",
    ),
    ErrorKind.INVALID_CREDENTIAL: ErrorMessage(
        title="Invalid API Key",
        description="Your API key appears to be invalid or expired. Please check your API key in the settings.",
        hint="Make sure the API key is entered correctly without extra spaces.",
    ),
    ErrorKind.ELIGIBILITY_REJECTED: ErrorMessage(
        title="Summarization not recommended",
        description="This thread is not a good fit for the selected AI provider.",
        hint="Configure a local AI provider like Ollama to summarize it anyway.",
    ),
    ErrorKind.EMPTY_SUMMARY: ErrorMessage(
        title="Empty Summary",
        description="The AI provider returned an empty response.",
        hint="Try again, or pick a different model.",
    ),
    ErrorKind.TIMEOUT: ErrorMessage(
        title="Request Timed Out",
        description="The AI service took too long to respond.",
        hint="Large threads take longer; try again or use a faster model.",
    ),
    ErrorKind.TRANSPORT_FAILURE: ErrorMessage(
        title="Connection Failed",
        description="Could not connect to the AI service. Please check your internet connection and try again.",
        hint="If using Ollama, make sure it's running locally.",
    ),
    ErrorKind.RATE_LIMITED: ErrorMessage(
        title="Rate Limit Exceeded",
        description="You've made too many requests. Please wait a moment before trying again.",
        hint="This usually resolves itself within a few minutes.",
    ),
    ErrorKind.QUOTA_EXCEEDED: ErrorMessage(
        title="API Quota Exceeded",
        description="Your API usage quota has been exceeded. Please check your billing settings with your AI provider.",
        hint="You may need to add credits or upgrade your plan.",
    ),
}

_OLLAMA_CONNECTION_MESSAGE = ErrorMessage(
    title="Cannot Connect to Ollama",
    description="Could not connect to the Ollama server. Please make sure Ollama is running locally.",
    hint='Run "ollama serve" in your terminal to start Ollama.',
)


def describe_error(
    kind: ErrorKind,
    detail: Optional[str] = None,
    provider_id: Optional[str] = None,
) -> ErrorMessage:
    """Build the message shown to the user for a failure kind."""
    if kind == ErrorKind.TRANSPORT_FAILURE and provider_id == "ollama":
        return _OLLAMA_CONNECTION_MESSAGE

    message = _MESSAGES.get(kind)
    if message is not None:
        return message

    return ErrorMessage(
        title="Summary Generation Failed",
        description=detail or "An unexpected error occurred while generating the summary.",
        hint="Try again or run with --log-level DEBUG for more details.",
    )
