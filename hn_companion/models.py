"""
Data models and type definitions for HN Companion.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum

from .errors import ErrorKind


class NodeType(Enum):
    """Kinds of node in the API comment tree."""
    STORY = "story"
    COMMENT = "comment"


class ProviderClass(Enum):
    """Families of summarization backend."""
    CLOUD = "cloud"
    LOCAL = "local"


class EligibilityStatus(Enum):
    """Outcome of the pre-flight eligibility check."""
    OK = "ok"
    TOO_SHORT = "too_short"
    TOO_SHALLOW = "too_shallow"
    TOO_DEEP = "too_deep"


class CallState(Enum):
    """States of a single summarization call."""
    IDLE = "idle"
    VALIDATING = "validating"
    SHORT_CIRCUITED = "short_circuited"
    REQUESTING = "requesting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class RenderedComment:
    """A comment as it appears on the rendered discussion page."""
    id: int
    position: int
    text: str
    downvotes: int = 0


@dataclass
class ApiCommentNode:
    """A node of the API comment tree."""
    id: int
    author: Optional[str] = None
    type: NodeType = NodeType.COMMENT
    children: List["ApiCommentNode"] = field(default_factory=list)


@dataclass
class EnrichedComment:
    """A comment present in both the API tree and the rendered page."""
    id: int
    author: Optional[str]
    replies: int
    position: int
    text: str
    downvotes: int
    parent_id: Optional[int] = None
    path: Optional[str] = None
    score: int = 0


@dataclass
class FormattedThread:
    """LLM-ready text for a thread plus the path lookup table."""
    text: str
    path_index: Dict[str, int]


@dataclass
class RenderedPage:
    """What the discussion page adapter extracts from one item page."""
    title: str
    comments: Dict[int, RenderedComment]


@dataclass
class UserInfo:
    """Profile details for a Hacker News user."""
    karma: Any
    about: str


@dataclass
class ModelProfile:
    """Token budgets and sampling defaults for a provider model."""
    input_token_budget: int
    output_token_budget: Optional[int]
    temperature: float
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    # Reasoning models accept only default sampling
    reasoning: bool = False


@dataclass
class GenerationParameters:
    """Sampling parameters sent with a provider request."""
    temperature: float
    top_p: Optional[float] = None
    frequency_penalty: Optional[float] = None
    presence_penalty: Optional[float] = None
    max_output_tokens: Optional[int] = None
    reasoning: bool = False


@dataclass
class ProviderRequest:
    """Everything a provider needs to build one outbound call."""
    provider_id: str
    model_id: str
    credential: Optional[str]
    system_prompt: str
    user_prompt: str
    parameters: GenerationParameters
    base_url: Optional[str] = None


@dataclass
class HttpRequest:
    """A provider-shaped HTTP call, ready for the transport."""
    url: str
    method: str = "POST"
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None


@dataclass
class SummaryResult:
    """Outcome of one provider gateway call."""
    state: CallState
    provider_id: Optional[str] = None
    model_id: Optional[str] = None
    summary: Optional[str] = None
    duration: float = 0.0
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None
    transitions: List[CallState] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == CallState.SUCCEEDED


@dataclass
class CachedSummary:
    """A summary previously stored on the cache server."""
    summary_text: str
    created_at: Optional[str] = None


@dataclass
class ThreadData:
    """A reconciled and formatted thread ready for summarization."""
    item_id: int
    title: str
    comments: Dict[int, EnrichedComment]
    formatted: FormattedThread

    @property
    def comment_count(self) -> int:
        return len(self.formatted.path_index)

    @property
    def authors(self) -> Dict[int, str]:
        return {
            comment_id: comment.author
            for comment_id, comment in self.comments.items()
            if comment.author
        }
