"""
HTTP transport shared by every outbound call.
"""

import json
from typing import Any, Dict, Optional

import requests

from .config import DEFAULT_USER_AGENT, DEFAULT_TIMEOUT
from .errors import RequestTimeoutError, TransportError
from .logging_config import get_logger


class HttpTransport:
    """Thin wrapper around a requests session with typed failures."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": DEFAULT_USER_AGENT})
        self.logger = get_logger(self.__class__.__name__)

    def request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
        timeout: float = DEFAULT_TIMEOUT,
        is_404_expected: bool = False,
    ) -> Any:
        """
        Perform a request and return the decoded JSON body.

        Args:
            url: Target URL
            method: HTTP method
            headers: Extra request headers
            body: JSON-serializable payload, sent as the request body
            timeout: Seconds before the call is abandoned
            is_404_expected: Return a 404 as data instead of raising

        Returns:
            Parsed JSON, or {"status": 404, "message": ...} for an expected 404

        Raises:
            RequestTimeoutError: The call exceeded its timeout
            TransportError: Connection failure, non-2xx status or bad JSON
        """
        self.logger.debug(f"{method} {url} (timeout: {timeout}s)")

        try:
            response = self.session.request(
                method,
                url,
                headers=headers,
                json=body,
                timeout=timeout,
            )
        except requests.Timeout as e:
            raise RequestTimeoutError(f"Request timeout after {int(timeout * 1000)}ms: {url}") from e
        except requests.ConnectionError as e:
            raise TransportError(f"Failed to fetch {url}: {e}") from e
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not response.ok:
            if response.status_code == 404 and is_404_expected:
                self.logger.debug(f"Expected 404 from {url}")
                return {"status": 404, "message": response.text or "Not found"}

            raise TransportError(
                f"API Error: HTTP error code: {response.status_code}, URL: {url} \nBody: {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Invalid JSON from {url}: {e}") from e

    def get_text(self, url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
        """Fetch a page body as text (for HTML sources)."""
        self.logger.debug(f"GET {url} as text (timeout: {timeout}s)")

        try:
            response = self.session.get(url, timeout=timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise RequestTimeoutError(f"Request timeout after {int(timeout * 1000)}ms: {url}") from e
        except requests.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TransportError(f"API Error: HTTP error code: {status_code}, URL: {url}", status_code=status_code) from e
        except requests.RequestException as e:
            raise TransportError(f"Failed to fetch {url}: {e}") from e

        return response.text


def dumps(payload: Any) -> str:
    """Compact JSON used for debug logging of payloads."""
    return json.dumps(payload, separators=(",", ":"), default=str)
