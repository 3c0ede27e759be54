"""
Tests for HTML sanitization.
"""

from bs4 import BeautifulSoup

from hn_companion.sanitize import sanitize_html, sanitize_to_soup, enforce_safe_links


def _safe(markup):
    return str(enforce_safe_links(sanitize_to_soup(markup)))


class TestSanitizeHtml:

    def test_allowed_markup_kept(self):
        markup = "<h2>Title</h2><p><strong>bold</strong> and <em>em</em></p><ul><li>item</li></ul>"

        assert sanitize_html(markup) == markup

    def test_script_removed_with_content(self):
        assert sanitize_html("<p>Hi<script>alert(1)</script></p>") == "<p>Hi</p>"

    def test_disallowed_tag_unwrapped(self):
        assert sanitize_html("<div><span>text</span></div>") == "text"

    def test_disallowed_attributes_removed(self):
        result = sanitize_html('<p onclick="evil()" style="color:red" class="note">x</p>')

        assert result == '<p class="note">x</p>'

    def test_marker_attributes_kept(self):
        markup = '<a class="summary-comment-link" data-comment-id="1" data-comment-link="true" href="#">a</a>'

        link = BeautifulSoup(sanitize_html(markup), "html.parser").a
        assert link["data-comment-id"] == "1"
        assert link["data-comment-link"] == "true"


class TestEnforceSafeLinks:

    def test_javascript_link_neutralized(self):
        link = BeautifulSoup(_safe('<a href="javascript:alert(1)" target="_blank">x</a>'), "html.parser").a

        assert not link.has_attr("href")
        assert not link.has_attr("target")
        assert link.get_text() == "x"

    def test_https_link_kept(self):
        link = BeautifulSoup(_safe('<a href="https://example.com">x</a>'), "html.parser").a

        assert link["href"] == "https://example.com"

    def test_mailto_and_fragment_kept(self):
        result = BeautifulSoup(_safe('<a href="mailto:a@b.c">m</a><a href="#top">t</a>'), "html.parser")

        assert [a["href"] for a in result.find_all("a")] == ["mailto:a@b.c", "#top"]

    def test_new_tab_link_gets_rel(self):
        link = BeautifulSoup(_safe('<a href="https://example.com" target="_blank">x</a>'), "html.parser").a

        assert " ".join(link["rel"]) == "noopener noreferrer"

    def test_data_url_removed(self):
        link = BeautifulSoup(_safe('<a href="data:text/html;base64,AAAA">x</a>'), "html.parser").a

        assert not link.has_attr("href")
