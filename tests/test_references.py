"""
Tests for comment reference resolution.
"""

from bs4 import BeautifulSoup

from hn_companion.references import (
    COMMENT_URL,
    normalize_cached_links,
    qualify_references,
    resolve_references,
)


def _markers(markup):
    soup = BeautifulSoup(markup, "html.parser")
    return soup.find_all("a", attrs={"data-comment-link": "true"})


class TestResolveReferences:

    def setup_method(self):
        self.path_index = {"1": 11, "1.1": 12, "2": 21}
        self.authors = {11: "alice", 12: "bob"}

    def test_path_reference_becomes_marker(self):
        result = resolve_references("<p>As noted in [1.1] the API is slow.</p>", self.path_index, self.authors)

        markers = _markers(result)
        assert len(markers) == 1
        assert markers[0]["data-comment-id"] == "12"
        assert markers[0].get_text() == "bob"
        assert "[1.1]" not in result
        assert ">bob</a> the API is slow." in result

    def test_author_parenthetical_is_consumed(self):
        result = resolve_references("<p>Agreed [1] (alice).</p>", self.path_index, self.authors)

        assert "(alice)" not in result
        assert _markers(result)[0]["data-comment-id"] == "11"

    def test_unknown_path_kept_literally(self):
        result = resolve_references("<p>See [9.4] and [2].</p>", self.path_index, self.authors)

        assert "[9.4]" in result
        markers = _markers(result)
        assert [m["data-comment-id"] for m in markers] == ["21"]
        assert markers[0].get_text() == "comment #21"

    def test_comment_url_link_becomes_marker(self):
        markup = '<p>Per <a href="https://news.ycombinator.com/item?id=100#42">carol</a>.</p>'

        result = resolve_references(markup)

        markers = _markers(result)
        assert markers[0]["data-comment-id"] == "42"
        assert markers[0].get_text() == "carol"
        assert markers[0]["href"] == "#"

    def test_generic_link_label_falls_back_to_comment_id(self):
        markup = '<a href="https://news.ycombinator.com/item?id=100#42">comment #42</a>'

        result = resolve_references(markup)

        assert _markers(result)[0].get_text() == "comment #42"

    def test_other_links_untouched(self):
        markup = '<p><a href="https://example.com/page">example</a></p>'

        assert resolve_references(markup, self.path_index) == markup

    def test_forward_transform_is_idempotent(self):
        markup = "<p>[1] (alice) says X, [2] says Y, [7] is unknown.</p>"

        once = resolve_references(markup, self.path_index, self.authors)
        twice = resolve_references(once, self.path_index, self.authors)

        assert once == twice

    def test_references_inside_nested_elements(self):
        result = resolve_references("<ul><li><strong>Speed</strong>: [1] and [1.1]</li></ul>", self.path_index)

        assert [m["data-comment-id"] for m in _markers(result)] == ["11", "12"]

    def test_text_without_references_unchanged(self):
        markup = "<p>Nothing [to] see here.</p>"

        assert resolve_references(markup, self.path_index) == markup


class TestNormalizeCachedLinks:

    def test_cached_link_with_author(self):
        text = "Good point [comment #42](https://news.ycombinator.com/item?id=1#42) (bob) here"

        assert normalize_cached_links(text) == "Good point [bob](https://news.ycombinator.com/item?id=1#42) here"

    def test_plain_text_untouched(self):
        assert normalize_cached_links("Just [1] text") == "Just [1] text"

    def test_empty(self):
        assert normalize_cached_links(None) == ""


class TestQualifyReferences:

    def test_path_becomes_comment_url(self):
        result = qualify_references("Point [1.2] (alice) and [3]", {"1.2": 7}, 1)

        assert result == "Point [comment #7](https://news.ycombinator.com/item?id=1#7) (alice) and [3]"

    def test_existing_markdown_links_untouched(self):
        text = "[1](https://example.com) stays"

        assert qualify_references(text, {"1": 5}, 9) == text

    def test_every_path_maps_back_to_its_comment(self):
        path_index = {"1": 101, "1.1": 102, "1.1.1": 103, "2": 201}

        for path, comment_id in path_index.items():
            qualified = qualify_references(f"[{path}]", path_index, 77)
            url = qualified[qualified.index("(") + 1:qualified.index(")")]
            assert int(COMMENT_URL.match(url).group(1)) == comment_id

    def test_cached_summary_round_trip(self):
        exported = qualify_references("Summary [1] (alice)", {"1": 11}, 100)

        normalized = normalize_cached_links(exported)

        assert normalized == "Summary [alice](https://news.ycombinator.com/item?id=100#11)"
