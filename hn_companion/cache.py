"""
Lookup of previously generated summaries on the shared cache server.
"""

from datetime import datetime, timezone
from typing import Optional

from .config import CACHE_API_URL
from .errors import SummarizationError
from .models import CachedSummary
from .transport import HttpTransport
from .logging_config import get_logger


class SummaryCache:
    """Read-only client for the summary cache server."""

    def __init__(self, transport: Optional[HttpTransport] = None):
        self.transport = transport or HttpTransport()
        self.logger = get_logger(self.__class__.__name__)

    def get(self, thread_id) -> Optional[CachedSummary]:
        """
        Return the cached summary for a thread, or None.

        A 404 is the normal "not cached" answer and is only logged at DEBUG.
        Any other failure is logged as an error and also yields None, so
        summarization can go ahead without the cache.
        """
        url = CACHE_API_URL.format(thread_id)

        try:
            data = self.transport.request(url, is_404_expected=True)
        except SummarizationError as e:
            self.logger.error(f"Failed to retrieve cache for post {thread_id}: {e}")
            return None

        if not isinstance(data, dict):
            self.logger.debug(f"Cache miss: post {thread_id} returned invalid data from the cache server")
            return None

        if data.get("status") == 404:
            self.logger.debug(f"Cache miss: post {thread_id} not found on the cache server")
            return None

        summary = data.get("summary")
        if not summary:
            self.logger.debug(f"Cache miss: post {thread_id} has no summary on the cache server")
            return None

        self.logger.debug(f"Cache hit: found summary for post {thread_id}")
        return CachedSummary(summary_text=summary, created_at=data.get("created_at"))


def time_ago(created_at: Optional[str], now: Optional[datetime] = None) -> str:
    """Describe how long ago an ISO timestamp was, e.g. "3 hours"."""
    if not created_at:
        return "some time"

    try:
        created = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
    except ValueError:
        return "some time"

    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = max(int((now - created).total_seconds()), 0)
    for unit, size in (("day", 86400), ("hour", 3600), ("minute", 60)):
        if seconds >= size:
            count = seconds // size
            return f"{count} {unit}{'s' if count != 1 else ''}"
    return "less than a minute"
