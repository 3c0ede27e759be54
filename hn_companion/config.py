"""
Configuration constants and settings for HN Companion.
"""

import os

# Hacker News settings
HN_ITEM_PAGE_URL = "https://news.ycombinator.com/item?id={}"
HN_COMMENT_URL = "https://news.ycombinator.com/item?id={}#{}"

# Algolia HN API settings
ALGOLIA_API_BASE_URL = "https://hn.algolia.com/api/v1"
ALGOLIA_ITEM_ENDPOINT = "/items/{}"
ALGOLIA_USER_ENDPOINT = "/users/{}"

# Summary cache server
CACHE_API_URL = "https://app.hncompanion.com/api/posts/{}"

# HTTP settings
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
DEFAULT_TIMEOUT = 60  # seconds
SUMMARIZE_TIMEOUT = 180  # seconds
USER_INFO_TIMEOUT = 10  # seconds

# Rendered comment page settings
DOWNVOTE_CLASS_PATTERN = r"c[0-9a-f]{2}"
DOWNVOTE_LEVELS = {
    "c00": 0,
    "c5a": 1,
    "c73": 2,
    "c82": 3,
    "c88": 4,
    "c9c": 5,
    "cae": 6,
    "cbe": 7,
    "cce": 8,
    "cdd": 9,
}

# Scoring settings
MAX_SCORE = 1000
MAX_DOWNVOTES = 10

# Token budgeting
TOKENS_PER_CHAR = 0.25

# Eligibility settings for cloud providers
MIN_SENTENCE_COUNT = 8
MIN_COMMENT_COUNT = 3

# Default model profile
DEFAULT_INPUT_TOKEN_BUDGET = 15000
DEFAULT_OUTPUT_TOKEN_BUDGET = 4000
DEFAULT_TEMPERATURE = 0.7

# OpenAI API settings
OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

# OpenRouter API settings
OPENROUTER_API_URL = "https://openrouter.ai/api/v1/chat/completions"

# Anthropic API settings
ANTHROPIC_API_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_API_VERSION = "2023-06-01"

# Google Gemini API settings
GOOGLE_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{}:generateContent"

# Ollama settings
OLLAMA_BASE_URL = "http://localhost:11434"
OLLAMA_GENERATE_ENDPOINT = "/api/generate"
OLLAMA_TAGS_ENDPOINT = "/api/tags"
OLLAMA_DEFAULT_MODEL = "llama3.1"

# Settings store
SETTINGS_ENV_VAR = "HN_COMPANION_SETTINGS"
DEFAULT_SETTINGS_PATH = os.path.join(
    os.path.expanduser("~"), ".config", "hn-companion", "settings.json"
)
