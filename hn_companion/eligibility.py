"""
Pre-flight policy: is a thread worth sending to the selected provider?
"""

import re
from typing import List, Optional

from .config import MIN_SENTENCE_COUNT, MIN_COMMENT_COUNT
from .models import EligibilityStatus, ProviderClass


def split_sentences(text: str) -> List[str]:
    """Split on runs of sentence punctuation, dropping empty fragments."""
    return [s for s in re.split(r"[.!?]+", text or "") if s.strip()]


def check_eligibility(
    text: str,
    comment_count: int,
    provider_class: ProviderClass,
) -> EligibilityStatus:
    """
    Decide whether a thread should be summarized by a provider class.

    Local providers accept anything. Cloud providers need more than
    MIN_SENTENCE_COUNT sentences and more than MIN_COMMENT_COUNT comments;
    the sentence check runs first.
    """
    if provider_class != ProviderClass.CLOUD:
        return EligibilityStatus.OK

    if len(split_sentences(text)) <= MIN_SENTENCE_COUNT:
        return EligibilityStatus.TOO_SHORT

    if comment_count <= MIN_COMMENT_COUNT:
        return EligibilityStatus.TOO_SHALLOW

    return EligibilityStatus.OK


def check_structural_limit(comment_count: int, max_comments: Optional[int]) -> EligibilityStatus:
    """Ceiling check for providers that cannot handle large threads at all."""
    if max_comments is not None and comment_count > max_comments:
        return EligibilityStatus.TOO_DEEP
    return EligibilityStatus.OK
