"""
Provider gateway: one summarization call against one provider.
"""

import re
import time
from typing import Any, List, Mapping, Optional

from .config import SUMMARIZE_TIMEOUT, TOKENS_PER_CHAR
from .errors import (
    EmptySummaryError,
    InputBudgetError,
    MissingConfigurationError,
    SummarizationError,
    classify_error,
)
from .models import CallState, GenerationParameters, ProviderRequest, SummaryResult
from .prompts import build_system_prompt, build_user_prompt
from .providers import get_provider, get_model_profile
from .transport import HttpTransport, dumps
from .logging_config import get_logger

_ANCHOR_PATTERN = re.compile(r"<a\b[^>]*>.*?</a>", re.DOTALL)


def strip_anchors(text: str) -> str:
    """Remove anchor elements, link text included."""
    return _ANCHOR_PATTERN.sub("", text or "")


def estimate_tokens(text: str) -> float:
    return len(text) * TOKENS_PER_CHAR


def truncate_to_token_budget(text: str, budget: int) -> str:
    """
    Keep whole lines from the start of text while they fit the token budget.

    Each kept line is charged with its newline. Text that already fits is
    returned unchanged.
    """
    if estimate_tokens(text) <= budget:
        return text

    kept: List[str] = []
    used = 0.0
    for line in text.split("\n"):
        cost = (len(line) + 1) * TOKENS_PER_CHAR
        if used + cost > budget:
            break
        kept.append(line)
        used += cost

    return "\n".join(kept)


class _Call:
    """State bookkeeping for a single gateway call."""

    def __init__(self, provider_id: Optional[str], model_id: Optional[str]):
        self.provider_id = provider_id
        self.model_id = model_id
        self.state = CallState.IDLE
        self.transitions = [CallState.IDLE]
        self.start_time = time.time()

    def move(self, state: CallState) -> None:
        self.state = state
        self.transitions.append(state)

    def result(self, **kwargs) -> SummaryResult:
        return SummaryResult(
            state=self.state,
            provider_id=self.provider_id,
            model_id=self.model_id,
            duration=time.time() - self.start_time,
            transitions=list(self.transitions),
            **kwargs,
        )


class ProviderGateway:
    """
    Runs one summarization call through the provider registry.

    Every call ends in a SummaryResult; provider and transport failures are
    reported on the result instead of raised. There is no automatic retry.
    """

    def __init__(
        self,
        transport: Optional[HttpTransport] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ):
        self.transport = transport or HttpTransport()
        self.settings = settings or {}
        self.logger = get_logger(self.__class__.__name__)

    def summarize(
        self,
        text: str,
        provider_id: Optional[str],
        model_id: Optional[str] = None,
        credential: Optional[str] = None,
        title: str = "",
        base_url: Optional[str] = None,
    ) -> SummaryResult:
        """
        Summarize formatted thread text with the selected provider.

        Args:
            text: Formatted thread text
            provider_id: Registered provider id
            model_id: Model to request from the provider
            credential: API key, for providers that need one
            title: Post title, substituted into the user prompt
            base_url: Server URL for self-hosted providers

        Returns:
            SummaryResult with state SUCCEEDED or FAILED
        """
        call = _Call(provider_id, model_id)
        call.move(CallState.VALIDATING)

        provider = get_provider(provider_id)
        if provider is None:
            return self._fail(call, MissingConfigurationError(f"Missing AI configuration: unknown provider '{provider_id}'"))

        missing = provider.missing_fields(text, model_id, credential)
        if missing:
            return self._fail(call, MissingConfigurationError(
                f"Missing AI configuration for {provider_id}: {', '.join(missing)}"
            ))

        if provider.short_circuit:
            call.move(CallState.SHORT_CIRCUITED)
            call.move(CallState.SUCCEEDED)
            self.logger.info(f"Provider '{provider_id}' returns the formatted thread without an AI call")
            return call.result(summary=text)

        profile = get_model_profile(provider_id, model_id)
        thread_text = strip_anchors(text)
        if provider.truncates_input:
            truncated = truncate_to_token_budget(thread_text, profile.input_token_budget)
            if len(truncated) < len(thread_text):
                self.logger.info(
                    f"Truncated thread from {len(thread_text)} to {len(truncated)} characters "
                    f"to fit {profile.input_token_budget} tokens for {provider_id}/{model_id}"
                )
            if not truncated.strip():
                return self._fail(call, InputBudgetError(
                    f"No comment fits the {profile.input_token_budget}-token input budget"
                ))
            thread_text = truncated

        request = ProviderRequest(
            provider_id=provider_id,
            model_id=model_id,
            credential=credential,
            system_prompt=build_system_prompt(self.settings),
            user_prompt=build_user_prompt(self.settings, title, thread_text),
            parameters=GenerationParameters(
                temperature=profile.temperature,
                top_p=profile.top_p,
                frequency_penalty=profile.frequency_penalty,
                presence_penalty=profile.presence_penalty,
                max_output_tokens=profile.output_token_budget,
                reasoning=profile.reasoning,
            ),
            base_url=base_url,
        )

        call.move(CallState.REQUESTING)
        try:
            http_request = provider.build_request(request)
            self.logger.debug(f"Sending {provider_id} request: {dumps({'model': model_id, 'url': http_request.url})}")

            data = self.transport.request(
                http_request.url,
                method=http_request.method,
                headers=http_request.headers,
                body=http_request.body,
                timeout=SUMMARIZE_TIMEOUT,
            )

            summary = provider.parse_response(data)
            if not summary:
                raise EmptySummaryError(f"Empty summary returned by {provider_id}")
        except SummarizationError as e:
            return self._fail(call, e)

        call.move(CallState.SUCCEEDED)
        result = call.result(summary=summary)
        self.logger.info(f"Summary generated by {provider_id}/{model_id} in {result.duration:.2f}s")
        return result

    def _fail(self, call: _Call, error: SummarizationError) -> SummaryResult:
        call.move(CallState.FAILED)
        kind = classify_error(error)
        message = f"{call.provider_id} ({call.model_id or 'no model'}): {error}"

        if isinstance(error, MissingConfigurationError):
            self.logger.warning(message)
        else:
            self.logger.error(f"Summarization failed [{kind.value}]: {message}")

        return call.result(error_kind=kind, error_message=message)
