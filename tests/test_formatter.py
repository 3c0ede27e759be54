"""
Tests for the thread formatter.
"""

from hn_companion.formatter import format_comment, format_thread
from hn_companion.models import EnrichedComment


def _comment(comment_id, path, **kwargs):
    values = dict(
        id=comment_id,
        author=f"user{comment_id}",
        replies=0,
        position=0,
        text=f"Comment {comment_id}.",
        downvotes=0,
        path=path,
        score=1000,
    )
    values.update(kwargs)
    return EnrichedComment(**values)


class TestFormatter:

    def test_format_comment_line(self):
        comment = _comment(7, "1.2", author="pg", replies=3, downvotes=2, score=640, text="Hello there.")

        line = format_comment(comment)

        assert line == "[1.2] (score: 640) <replies: 3> {downvotes: 2} pg: Hello there.\n"

    def test_format_thread_keeps_order_and_builds_index(self):
        comments = {
            5: _comment(5, "1"),
            9: _comment(9, "1.1"),
            3: _comment(3, "2"),
        }

        result = format_thread(comments)

        lines = result.text.splitlines()
        assert [line.split(" ")[0] for line in lines] == ["[1]", "[1.1]", "[2]"]
        assert result.path_index == {"1": 5, "1.1": 9, "2": 3}
        assert result.text.endswith("\n")

    def test_format_empty_thread(self):
        result = format_thread({})

        assert result.text == ""
        assert result.path_index == {}
