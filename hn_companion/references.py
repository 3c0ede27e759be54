"""
Resolves comment references in summaries.

Summaries cite comments either as [path] notation (fresh summaries, resolved
through the path index of the same run) or as fully-qualified comment URLs
(cached summaries). On the way to display both become navigation markers;
on the way out (copy/export) [path] becomes a comment URL again.
"""

import re
from typing import Mapping, Optional

from bs4 import BeautifulSoup, NavigableString

from .config import HN_COMMENT_URL
from .logging_config import get_logger

logger = get_logger(__name__)

PATH_REFERENCE = re.compile(r"\[(\d+(?:\.\d+)*)](?:\s*\([^)]+\))?")
BARE_PATH_REFERENCE = re.compile(r"\[(\d+(?:\.\d+)*)](?!\()")
COMMENT_URL = re.compile(r"^https?://news\.ycombinator\.com/item\?id=\d+#(\d+)")
CACHED_LINK = re.compile(
    r"\[comment #\d+]\((https?://news\.ycombinator\.com/item\?id=\d+#\d+)\)\s*\(([^)]+)\)"
)

MARKER_CLASS = "summary-comment-link"


def normalize_cached_links(markdown: Optional[str]) -> str:
    """Rewrite "[comment #N](url) (author)" as "[author](url)"."""
    if not markdown:
        return ""
    return CACHED_LINK.sub(lambda match: f"[{match.group(2)}]({match.group(1)})", markdown)


def create_marker(soup: BeautifulSoup, comment_id: int, author: Optional[str] = None):
    """Build the anchor that jumps to a comment on the discussion page."""
    marker = soup.new_tag("a", href="#")
    marker["class"] = MARKER_CLASS
    marker["data-comment-link"] = "true"
    marker["data-comment-id"] = str(comment_id)

    if author:
        marker.string = author
        marker["title"] = f"Jump to {author}'s comment"
    else:
        marker.string = f"comment #{comment_id}"
        marker["title"] = f"Jump to comment #{comment_id}"
    return marker


def _is_marker(element) -> bool:
    return element is not None and element.name == "a" and element.get("data-comment-link") == "true"


def replace_comment_backlinks(
    soup: BeautifulSoup,
    path_index: Optional[Mapping[str, int]] = None,
    authors: Optional[Mapping[int, str]] = None,
) -> BeautifulSoup:
    """
    Turn comment references in parsed markup into navigation markers.

    Links to comment URLs are replaced using the id in their fragment. Text
    [path] references are looked up in the path index; unknown paths are left
    exactly as written. Running this again on its own output changes nothing.
    """
    path_index = path_index or {}
    authors = authors or {}

    for link in soup.find_all("a", href=True):
        if _is_marker(link):
            continue
        match = COMMENT_URL.match(link["href"])
        if not match:
            continue
        comment_id = int(match.group(1))
        link_text = link.get_text().strip()
        if link_text.startswith("comment #"):
            link_text = ""
        label = authors.get(comment_id) or link_text or None
        link.replace_with(create_marker(soup, comment_id, label))

    for node in list(soup.find_all(string=True)):
        if type(node) is not NavigableString or "[" not in node:
            continue
        if any(_is_marker(parent) for parent in node.parents):
            continue
        replacement = _resolve_text(soup, str(node), path_index, authors)
        if replacement is not None:
            for piece in replacement:
                node.insert_before(piece)
            node.extract()

    return soup


def _resolve_text(soup, text, path_index, authors):
    """Split text around [path] references; None when there are none."""
    pieces = []
    last_index = 0
    matched = False

    for match in PATH_REFERENCE.finditer(text):
        matched = True
        if match.start() > last_index:
            pieces.append(NavigableString(text[last_index:match.start()]))

        comment_id = path_index.get(match.group(1))
        if comment_id is not None:
            pieces.append(create_marker(soup, comment_id, authors.get(comment_id)))
        else:
            pieces.append(NavigableString(match.group(0)))
        last_index = match.end()

    if not matched:
        return None

    if last_index < len(text):
        pieces.append(NavigableString(text[last_index:]))
    return pieces


def resolve_references(
    markup: str,
    path_index: Optional[Mapping[str, int]] = None,
    authors: Optional[Mapping[int, str]] = None,
) -> str:
    """String-in, string-out form of replace_comment_backlinks."""
    soup = BeautifulSoup(markup or "", "html.parser")
    return str(replace_comment_backlinks(soup, path_index, authors))


def qualify_references(text: Optional[str], path_index: Mapping[str, int], thread_id) -> str:
    """
    Rewrite [path] references in raw summary text as comment URLs.

    Used when a summary leaves the display, e.g. copied to the clipboard or
    written to a file. "[1.2] (alice)" becomes
    "[comment #123](https://news.ycombinator.com/item?id=1#123) (alice)".
    Paths missing from the index stay as written.
    """
    if not text:
        return ""

    pieces = []
    last_index = 0
    for match in BARE_PATH_REFERENCE.finditer(text):
        pieces.append(text[last_index:match.start()])

        comment_id = path_index.get(match.group(1))
        if comment_id is None:
            pieces.append(match.group(0))
        else:
            url = HN_COMMENT_URL.format(thread_id, comment_id)
            pieces.append(f"[comment #{comment_id}]({url})")
        last_index = match.end()

    pieces.append(text[last_index:])
    return "".join(pieces)
