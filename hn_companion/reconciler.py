"""
Thread reconciliation: merges the API comment tree with the rendered page.

The API tree knows who replied to whom; the rendered page knows the order
comments are shown in (which reflects voting) and which ones are visible.
Reconciliation keeps only comments present in both, orders them as rendered,
and assigns each a hierarchical path and a popularity score.
"""

import math
from typing import Dict, List, Mapping, Optional

from .config import MAX_SCORE, MAX_DOWNVOTES
from .models import ApiCommentNode, EnrichedComment, NodeType, RenderedComment
from .logging_config import get_logger

logger = get_logger(__name__)


def enrich_comments(
    tree: Optional[ApiCommentNode],
    rendered: Mapping[int, RenderedComment],
) -> Dict[int, EnrichedComment]:
    """
    Merge an API comment tree with the rendered comments of the same thread.

    Args:
        tree: Root of the API tree (usually the story)
        rendered: Rendered comments keyed by comment id

    Returns:
        Enriched comments keyed by id, ordered by render position. Empty when
        either source is missing; this function never raises.
    """
    if tree is None or not rendered:
        logger.debug("Nothing to reconcile: missing comment tree or rendered comments")
        return {}

    flat, visited, skipped = _flatten(tree, rendered)
    logger.debug(f"Comments from API: {visited}. Skipped: {skipped}. Remaining: {len(flat)}")

    # Sorted is stable, so equal positions keep tree order
    ordered = sorted(flat, key=lambda comment: comment.position)
    comments = {comment.id: comment for comment in ordered}

    _assign_paths(comments)
    _assign_scores(comments)
    return comments


def _flatten(tree: ApiCommentNode, rendered: Mapping[int, RenderedComment]):
    """Depth-first walk emitting one record per comment visible on the page."""
    flat: List[EnrichedComment] = []
    visited = 0
    skipped = 0

    # (node, parent id the node's record would carry)
    stack = [(tree, None)]
    while stack:
        node, parent_id = stack.pop()

        if node.type == NodeType.STORY:
            child_parent_id = None
        else:
            visited += 1
            shown = rendered.get(node.id)
            if shown is None:
                # Hidden comment: its replies move up to the nearest shown ancestor
                skipped += 1
                child_parent_id = parent_id
            else:
                flat.append(EnrichedComment(
                    id=node.id,
                    author=node.author,
                    replies=len(node.children),
                    position=shown.position,
                    text=shown.text,
                    downvotes=shown.downvotes,
                    parent_id=parent_id,
                ))
                child_parent_id = node.id

        for child in reversed(node.children):
            stack.append((child, child_parent_id))

    return flat, visited, skipped


def _assign_paths(comments: Dict[int, EnrichedComment]) -> None:
    """
    Number comments depth-first in render order, e.g. "2", "2.1", "2.1.3".

    A child's index counts every earlier record sharing its parent, so
    siblings are numbered by their relative render order.
    """
    top_level_counter = 1
    sibling_counts: Dict[int, int] = {}

    for comment in comments.values():
        parent = comments.get(comment.parent_id) if comment.parent_id is not None else None

        if comment.parent_id is not None:
            sibling_counts[comment.parent_id] = sibling_counts.get(comment.parent_id, 0) + 1

        if parent is None or parent.path is None:
            comment.path = str(top_level_counter)
            top_level_counter += 1
        else:
            comment.path = f"{parent.path}.{sibling_counts[comment.parent_id]}"


def _assign_scores(comments: Dict[int, EnrichedComment]) -> None:
    total = len(comments)
    for comment in comments.values():
        comment.score = calculate_score(comment.position, comment.downvotes, total)


def calculate_score(position: int, downvotes: int, total: int) -> int:
    """
    Score a comment by where it is rendered, penalized per downvote level.

    The penalty per downvote is a tenth of the comment's own base score, so
    low-ranked comments lose proportionally rather than dropping straight to 0.
    """
    if total <= 0:
        return 0

    base = math.floor(MAX_SCORE - (position * MAX_SCORE / total))
    penalty_per_downvote = base / MAX_DOWNVOTES
    penalty = penalty_per_downvote * (downvotes or 0)

    return math.floor(max(base - penalty, 0))
