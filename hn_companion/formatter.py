"""
Serializes enriched comments into the line format sent to the model.
"""

from typing import Dict, Mapping

from .models import EnrichedComment, FormattedThread
from .logging_config import get_logger

logger = get_logger(__name__)


def format_comment(comment: EnrichedComment) -> str:
    """
    One comment as a prompt line.

    The model is told to cite comments by the leading [path], so field order
    and the bracket, paren, angle and brace delimiters must stay as they are.
    """
    return " ".join([
        f"[{comment.path}]",
        f"(score: {comment.score})",
        f"<replies: {comment.replies}>",
        f"{{downvotes: {comment.downvotes}}}",
        f"{comment.author}:",
        comment.text,
    ]) + "\n"


def format_thread(comments: Mapping[int, EnrichedComment]) -> FormattedThread:
    """Format comments in their given order and build the path lookup table."""
    path_index: Dict[str, int] = {}
    lines = []

    for comment_id, comment in comments.items():
        path_index[comment.path] = comment_id
        lines.append(format_comment(comment))

    text = "".join(lines)
    logger.debug(f"Formatted {len(lines)} comments into {len(text)} characters")
    return FormattedThread(text=text, path_index=path_index)
