"""
System and user prompts for thread summarization.
"""

from typing import Any, Mapping, Optional

TITLE_PLACEHOLDER = "${title}"
TEXT_PLACEHOLDER = "${text}"

DEFAULT_SYSTEM_PROMPT = """You are an assistant that summarizes Hacker News discussion threads.

Each comment is given on its own line in this format:
[path] (score: N) <replies: N> {downvotes: N} author: comment text

- [path] is the comment's position in the thread: "1" is the first top-level comment, "1.2" is the second reply to it, and so on.
- score (0 to 1000) reflects how prominently the comment is ranked; weigh high-scoring comments more.
- replies is the number of direct replies the comment received.
- downvotes (0 to 9) indicates how heavily the comment was downvoted; treat heavily downvoted comments with caution.

Write the summary in markdown:
- Start with a short overview of the discussion.
- Group the main themes under headings, covering agreement and disagreement.
- Support each point by citing the comments it comes from as [path] (author), e.g. [1.2] (pg). Only cite paths that appear in the input.
- Be concise and neutral; do not invent facts that are not in the comments."""

DEFAULT_USER_PROMPT_TEMPLATE = """Summarize the discussion of the Hacker News post titled "${title}".

Comments:

${text}"""


def build_system_prompt(settings: Optional[Mapping[str, Any]] = None) -> str:
    """The custom system prompt when customization is on, else the default."""
    settings = settings or {}
    if settings.get("promptCustomization") and settings.get("systemPrompt"):
        return settings["systemPrompt"]
    return DEFAULT_SYSTEM_PROMPT


def build_user_prompt(settings: Optional[Mapping[str, Any]], title: str, text: str) -> str:
    """Fill the user prompt template with the post title and thread text."""
    settings = settings or {}
    template = DEFAULT_USER_PROMPT_TEMPLATE
    if settings.get("promptCustomization") and settings.get("userPrompt"):
        template = settings["userPrompt"]

    # Title first: the thread text may itself contain a literal "${title}"
    return template.replace(TITLE_PLACEHOLDER, title or "").replace(TEXT_PLACEHOLDER, text or "")
