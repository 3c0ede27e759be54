"""
HN Companion
Summarizes Hacker News discussions with the AI provider of your choice
"""

from .summarizer import ThreadSummarizer, ThreadSummary
from .models import ApiCommentNode, RenderedComment, EnrichedComment, FormattedThread, ThreadData
from .fetchers import HackerNewsAPI, CommentPageScraper
from .reconciler import enrich_comments
from .formatter import format_thread
from .references import resolve_references, qualify_references
from .eligibility import check_eligibility
from .gateway import ProviderGateway
from .cache import SummaryCache
from .settings import SettingsStore

__version__ = "0.1.0"

__all__ = [
    "ThreadSummarizer",
    "ThreadSummary",
    "ApiCommentNode",
    "RenderedComment",
    "EnrichedComment",
    "FormattedThread",
    "ThreadData",
    "HackerNewsAPI",
    "CommentPageScraper",
    "enrich_comments",
    "format_thread",
    "resolve_references",
    "qualify_references",
    "check_eligibility",
    "ProviderGateway",
    "SummaryCache",
    "SettingsStore",
]
