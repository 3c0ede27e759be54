"""
Content fetching functionality for HN Companion.
"""

import html
import re
from typing import Any, Dict, Optional

from bs4 import BeautifulSoup

from .config import (
    ALGOLIA_API_BASE_URL,
    ALGOLIA_ITEM_ENDPOINT,
    ALGOLIA_USER_ENDPOINT,
    HN_ITEM_PAGE_URL,
    USER_INFO_TIMEOUT,
    DOWNVOTE_CLASS_PATTERN,
    DOWNVOTE_LEVELS,
)
from .errors import SummarizationError
from .models import ApiCommentNode, NodeType, RenderedComment, RenderedPage, UserInfo
from .transport import HttpTransport
from .logging_config import get_logger, log_performance

_URL_PATTERN = re.compile(r"((https?://|www\.)[^\s<]+)")


class HackerNewsAPI:
    """Client for the Algolia Hacker News API."""

    def __init__(self, transport: Optional[HttpTransport] = None):
        self.base_url = ALGOLIA_API_BASE_URL
        self.transport = transport or HttpTransport()
        self.user_cache: Dict[str, UserInfo] = {}
        self.logger = get_logger(self.__class__.__name__)
        self.logger.debug(f"Initialized HackerNewsAPI with base URL: {self.base_url}")

    @log_performance(get_logger("HackerNewsAPI.get_comment_tree"), "fetching comment tree")
    def get_comment_tree(self, item_id: int) -> Optional[ApiCommentNode]:
        """Fetch the full comment tree rooted at an item."""
        url = f"{self.base_url}{ALGOLIA_ITEM_ENDPOINT.format(item_id)}"
        self.logger.debug(f"Fetching comment tree for {item_id} from: {url}")

        try:
            data = self.transport.request(url)
        except SummarizationError as e:
            self.logger.error(f"Failed to fetch comment tree for {item_id}: {e}")
            return None

        tree = parse_comment_tree(data)
        if tree is None:
            self.logger.warning(f"Malformed comment tree for {item_id}")
        return tree

    def get_user(self, username: str) -> UserInfo:
        """Fetch a user's profile, memoized for the life of this client."""
        if username in self.user_cache:
            return self.user_cache[username]

        url = f"{self.base_url}{ALGOLIA_USER_ENDPOINT.format(username)}"
        try:
            data = self.transport.request(url, timeout=USER_INFO_TIMEOUT)
        except SummarizationError as e:
            self.logger.warning(f"Failed to fetch user {username}: {e}")
            return UserInfo(karma="User info error", about="No about information")

        about = html.unescape(data.get("about") or "No about information")
        if "<a href=" not in about:
            about = _URL_PATTERN.sub(_linkify, about)

        info = UserInfo(karma=data.get("karma") or "Not found", about=about)
        self.user_cache[username] = info
        return info


def _linkify(match: "re.Match") -> str:
    url = match.group(1)
    href = f"https://{url}" if url.startswith("www.") else url
    return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{url}</a>'


def parse_comment_tree(data: Any) -> Optional[ApiCommentNode]:
    """Convert an Algolia item payload into ApiCommentNode objects."""
    if not isinstance(data, dict) or data.get("id") is None:
        return None

    try:
        node_id = int(data["id"])
    except (TypeError, ValueError):
        return None

    node_type = NodeType.STORY if data.get("type") == "story" else NodeType.COMMENT
    children = []
    for child in data.get("children") or []:
        parsed = parse_comment_tree(child)
        if parsed is not None:
            children.append(parsed)

    return ApiCommentNode(
        id=node_id,
        author=data.get("author"),
        type=node_type,
        children=children,
    )


class CommentPageScraper:
    """Extracts the rendered, vote-ordered comments from a discussion page."""

    def __init__(self, transport: Optional[HttpTransport] = None):
        self.transport = transport or HttpTransport()
        self.logger = get_logger(self.__class__.__name__)
        self.logger.debug("Initialized CommentPageScraper")

    @log_performance(get_logger("CommentPageScraper.get_page"), "discussion page extraction")
    def get_page(self, item_id: int) -> Optional[RenderedPage]:
        """Fetch and parse the discussion page for an item."""
        url = HN_ITEM_PAGE_URL.format(item_id)
        self.logger.debug(f"Fetching discussion page from: {url}")

        try:
            page_html = self.transport.get_text(url)
        except SummarizationError as e:
            self.logger.error(f"Failed to fetch discussion page {url}: {e}")
            return None

        page = parse_rendered_page(page_html)
        self.logger.info(f"Extracted {len(page.comments)} visible comments from {url}")
        return page


def parse_rendered_page(page_html: str) -> RenderedPage:
    """Parse a discussion page into its title and visible comments."""
    soup = BeautifulSoup(page_html, "html.parser")

    title_element = soup.select_one(".titleline > a") or soup.select_one(".titleline")
    title = title_element.get_text().strip() if title_element else ""

    return RenderedPage(title=title, comments=parse_rendered_comments(soup))


def parse_rendered_comments(source) -> Dict[int, RenderedComment]:
    """
    Read comment rows from page markup in display order.

    Positions count every comment row, including the collapsed or flagged
    ones that are skipped, so they reflect where a comment sits on the page.
    """
    soup = source if isinstance(source, BeautifulSoup) else BeautifulSoup(source, "html.parser")
    logger = get_logger(__name__)

    comments: Dict[int, RenderedComment] = {}
    rows = soup.select("tr.comtr")
    skipped = 0

    for position, row in enumerate(rows):
        row_classes = row.get("class") or []
        text_element = row.select_one(".commtext")
        if "coll" in row_classes or "noshow" in row_classes or text_element is None:
            skipped += 1
            continue

        try:
            comment_id = int(row.get("id"))
        except (TypeError, ValueError):
            skipped += 1
            continue

        comments[comment_id] = RenderedComment(
            id=comment_id,
            position=position,
            text=_clean_comment_text(text_element),
            downvotes=_downvote_level(text_element),
        )

    logger.debug(f"Comment rows: {len(rows)}. Skipped (flagged): {skipped}. Remaining: {len(comments)}")
    return comments


def _clean_comment_text(text_element) -> str:
    """Comment text without links and code, flattened to one line."""
    clone = BeautifulSoup(str(text_element), "html.parser")

    for element in clone.find_all(["a", "code", "pre"]):
        element.decompose()
    for paragraph in clone.find_all("p"):
        paragraph.replace_with(paragraph.get_text())

    return re.sub(r"\n+", " ", clone.get_text())


def _downvote_level(text_element) -> int:
    """Decode the grey-out color class HN uses for downvoted comments."""
    for class_name in text_element.get("class") or []:
        class_name = class_name.lower()
        if re.search(DOWNVOTE_CLASS_PATTERN, class_name):
            return DOWNVOTE_LEVELS.get(class_name, 0)
    return 0
