"""
HTML sanitization for rendered summaries.
"""

from urllib.parse import urlparse

from bs4 import BeautifulSoup

ALLOWED_TAGS = {
    "p", "br", "strong", "em", "b", "i", "a", "code", "pre",
    "ul", "ol", "li", "h1", "h2", "h3", "h4", "h5",
    "blockquote", "hr", "img",
}

ALLOWED_ATTRS = {
    "href", "src", "alt", "title", "target", "rel", "class",
    "data-comment-link", "data-comment-id",
}

# Removed together with their content
DROPPED_TAGS = {"script", "style", "iframe", "object", "embed", "template"}

SAFE_PROTOCOLS = {"http", "https", "mailto"}


def sanitize_html(markup: str) -> str:
    """Restrict markup to the allowed tags and attributes."""
    return str(sanitize_to_soup(markup))


def sanitize_to_soup(markup: str) -> BeautifulSoup:
    soup = BeautifulSoup(markup or "", "html.parser")

    for element in soup.find_all(DROPPED_TAGS):
        element.decompose()

    for element in soup.find_all(True):
        if element.name not in ALLOWED_TAGS:
            element.unwrap()
            continue
        for attr in list(element.attrs):
            if attr not in ALLOWED_ATTRS:
                del element[attr]

    return soup


def enforce_safe_links(soup: BeautifulSoup) -> BeautifulSoup:
    """Strip hrefs with unsafe protocols; harden links opening a new tab."""
    for link in soup.find_all("a"):
        href = link.get("href")
        if not href or href.startswith("#"):
            continue

        try:
            scheme = urlparse(href.strip()).scheme.lower()
        except ValueError:
            scheme = None

        # Relative links have no scheme and stay on the same site
        if scheme is None or (scheme and scheme not in SAFE_PROTOCOLS):
            del link["href"]
            if link.has_attr("target"):
                del link["target"]
            continue

        if link.get("target") == "_blank":
            link["rel"] = "noopener noreferrer"

    return soup
