"""
Core functionality for fetching, reconciling and summarizing Hacker News threads
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .cache import SummaryCache
from .eligibility import check_eligibility, check_structural_limit
from .errors import ErrorKind
from .fetchers import HackerNewsAPI, CommentPageScraper
from .formatter import format_thread
from .gateway import ProviderGateway
from .models import EligibilityStatus, SummaryResult, ThreadData
from .providers import get_provider
from .reconciler import enrich_comments
from .references import (
    normalize_cached_links,
    qualify_references,
    replace_comment_backlinks,
)
from .sanitize import sanitize_to_soup, enforce_safe_links
from .settings import SettingsStore, get_credential
from .transport import HttpTransport
from .logging_config import get_logger, log_performance

ELIGIBILITY_MESSAGES = {
    EligibilityStatus.TOO_SHORT: (
        "Thread too brief to use the selected cloud AI {provider}. It is concise enough to read "
        "directly; configure a local provider like Ollama to summarize it anyway."
    ),
    EligibilityStatus.TOO_SHALLOW: (
        "Thread not deep enough to use the selected cloud AI {provider}. Configure a local "
        "provider like Ollama to summarize it anyway."
    ),
    EligibilityStatus.TOO_DEEP: (
        "Thread too deep for the selected AI {provider}. Configure another provider like "
        "Ollama or a cloud AI service to summarize it."
    ),
}


@dataclass
class ThreadSummary:
    """A summary of one thread, fresh or from the cache server, or the reason there is none."""
    item_id: int
    provider_id: Optional[str] = None
    model_id: Optional[str] = None
    summary: Optional[str] = None
    thread: Optional[ThreadData] = None
    from_cache: bool = False
    cached_at: Optional[str] = None
    duration: float = 0.0
    eligibility: EligibilityStatus = EligibilityStatus.OK
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error_kind is None and bool(self.summary)

    @property
    def path_index(self) -> Dict[str, int]:
        # Cached summaries already carry comment URLs
        if self.from_cache or self.thread is None:
            return {}
        return self.thread.formatted.path_index

    def export_text(self) -> str:
        """Summary text for use outside the display, with [path] references as comment URLs."""
        if not self.summary:
            return ""
        if self.from_cache:
            return self.summary
        return qualify_references(self.summary, self.path_index, self.item_id)

    def render_html(self, markdown_renderer: Callable[[str], str]) -> str:
        """
        Render the summary for display.

        Args:
            markdown_renderer: Converts markdown to HTML, e.g. markdown.markdown

        Returns:
            Sanitized HTML with comment references as navigation markers
        """
        if not self.summary:
            return ""

        html = markdown_renderer(normalize_cached_links(self.summary))
        soup = sanitize_to_soup(html)
        authors = self.thread.authors if self.thread is not None else {}
        replace_comment_backlinks(soup, self.path_index, authors)
        enforce_safe_links(soup)
        return str(soup)


class ThreadSummarizer:
    """Main class for fetching and summarizing Hacker News discussion threads"""

    def __init__(
        self,
        settings_store: Optional[SettingsStore] = None,
        transport: Optional[HttpTransport] = None,
        settings: Optional[Dict[str, Any]] = None,
    ):
        self.logger = get_logger(self.__class__.__name__)
        self.settings_store = settings_store or SettingsStore()
        self.settings = settings if settings is not None else self.settings_store.get()

        self.transport = transport or HttpTransport()
        self.api_client = HackerNewsAPI(self.transport)
        self.scraper = CommentPageScraper(self.transport)
        self.cache = SummaryCache(self.transport)
        self.gateway = ProviderGateway(self.transport, self.settings)

        self.logger.debug(
            f"ThreadSummarizer initialized with provider: {self.settings.get('providerSelection')}"
        )

    @log_performance(get_logger("ThreadSummarizer.get_thread"), "loading thread")
    def get_thread(self, item_id: int) -> Optional[ThreadData]:
        """
        Fetch both views of a thread, reconcile them and format the result.

        Returns:
            ThreadData, or None when a source is unavailable or no comment
            appears in both views
        """
        tree = self.api_client.get_comment_tree(item_id)
        if tree is None:
            self.logger.error(f"Could not get the comment tree for item {item_id}")
            return None

        page = self.scraper.get_page(item_id)
        if page is None:
            self.logger.error(f"Could not get the discussion page for item {item_id}")
            return None

        comments = enrich_comments(tree, page.comments)
        if not comments:
            self.logger.warning(f"No comments to summarize for item {item_id}")
            return None

        formatted = format_thread(comments)
        self.logger.info(f"Loaded thread {item_id} with {len(comments)} comments")
        return ThreadData(item_id=item_id, title=page.title, comments=comments, formatted=formatted)

    def summarize(
        self,
        item_id: int,
        skip_cache: bool = False,
        provider_id: Optional[str] = None,
        model_id: Optional[str] = None,
        credential: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> ThreadSummary:
        """
        Summarize a thread, preferring the cache server's copy.

        Args:
            item_id: Story or comment id; a comment id summarizes its subthread
            skip_cache: Ignore the cache server and generate a fresh summary
            provider_id: Overrides the configured provider
            model_id: Overrides the configured model
            credential: Overrides the configured API key
            base_url: Overrides the configured server URL (Ollama)
        """
        provider_id = provider_id or self.settings.get("providerSelection")

        if self.settings.get("serverCacheEnabled") and not skip_cache:
            cached = self.cache.get(item_id)
            if cached is not None:
                self.logger.info(f"Using cached summary from the cache server for post {item_id}")
                return ThreadSummary(
                    item_id=item_id,
                    summary=cached.summary_text,
                    from_cache=True,
                    cached_at=cached.created_at,
                )
            self.logger.info(f"No cached summary for post {item_id}. Generating a fresh summary")

        thread = self.get_thread(item_id)
        if thread is None:
            return ThreadSummary(
                item_id=item_id,
                provider_id=provider_id,
                error_kind=ErrorKind.UNCLASSIFIED,
                error_message=f"Could not get the thread for summarization. item id: {item_id}",
            )

        provider = get_provider(provider_id)
        if provider is None:
            self.logger.info("AI provider not configured")
            return ThreadSummary(
                item_id=item_id,
                provider_id=provider_id,
                thread=thread,
                error_kind=ErrorKind.MISSING_CONFIGURATION,
                error_message=f"AI provider not configured: {provider_id!r}",
            )

        status = check_structural_limit(thread.comment_count, provider.max_comments)
        if status == EligibilityStatus.OK:
            status = check_eligibility(thread.formatted.text, thread.comment_count, provider.provider_class)
        if status != EligibilityStatus.OK:
            self.logger.info(f"Summarization not recommended for item {item_id} with {provider_id}: {status.value}")
            return ThreadSummary(
                item_id=item_id,
                provider_id=provider_id,
                thread=thread,
                eligibility=status,
                error_kind=ErrorKind.ELIGIBILITY_REJECTED,
                error_message=ELIGIBILITY_MESSAGES[status].format(provider=provider_id),
            )

        provider_settings = self.settings.get(provider_id) or {}
        model_id = model_id or provider_settings.get("model") or None
        if credential is None and provider.requires_credential:
            credential = get_credential(self.settings, provider_id)
        base_url = base_url or provider_settings.get("url")

        result = self.gateway.summarize(
            thread.formatted.text,
            provider_id,
            model_id,
            credential,
            title=thread.title,
            base_url=base_url,
        )
        return self._to_summary(item_id, thread, result)

    def _to_summary(self, item_id: int, thread: ThreadData, result: SummaryResult) -> ThreadSummary:
        return ThreadSummary(
            item_id=item_id,
            provider_id=result.provider_id,
            model_id=result.model_id,
            summary=result.summary if result.succeeded else None,
            thread=thread,
            duration=result.duration,
            error_kind=result.error_kind,
            error_message=result.error_message,
        )
