"""
Application configuration (env, settings, constants).

Responsibility: Centralize config loading, environment variables, and app-wide
constants. Keeps the rest of the app decoupled from how config is sourced.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("[config] %s=%r is not an integer; using default %d", name, raw, default)
        return default


# Horoscope App API (no key required)
HOROSCOPE_API_BASE: str = (
    os.getenv("HOROSCOPE_API_BASE", "https://horoscope-app-api.vercel.app").strip().rstrip("/")
    or "https://horoscope-app-api.vercel.app"
)
HOROSCOPE_DAILY_PATH: str = "/api/v1/get-horoscope/daily"

# API timeouts (seconds)
HTTP_TIMEOUT: float = 15.0
LLM_API_TIMEOUT: float = 120.0

# OpenAI-compatible chat completions. OPENAI_BASE_URL lets one gateway serve
# models from several vendors (the researcher mixes OpenAI and Anthropic ids).
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "").strip()
OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "").strip()

# Tool-calling loop
MAX_TOOL_ROUNDS: int = _env_int("MAX_TOOL_ROUNDS", 6)
LLM_MAX_TOKENS: int = _env_int("LLM_MAX_TOKENS", 4096)
FETCH_PAGE_MAX_CHARS: int = 6000
WEB_SEARCH_MAX_RESULTS: int = 5

# Researcher agent
RESEARCHER_RESPONSE_FORMAT: str = os.getenv("RESEARCHER_RESPONSE_FORMAT", "markdown").strip() or "markdown"
RESEARCHER_MAX_WORD_COUNT: int = _env_int("RESEARCHER_MAX_WORD_COUNT", 300)
RESEARCHER_MAX_ROUNDS: int = _env_int("RESEARCHER_MAX_ROUNDS", 3)
RESEARCHER_CATEGORIZER_MODEL: str = os.getenv("RESEARCHER_CATEGORIZER_MODEL", "gpt-4o-mini").strip() or "gpt-4o-mini"
RESEARCHER_OPENAI_MODEL: str = os.getenv("RESEARCHER_OPENAI_MODEL", "gpt-4.1").strip() or "gpt-4.1"
RESEARCHER_CLAUDE_MODEL: str = (
    os.getenv("RESEARCHER_CLAUDE_MODEL", "claude-sonnet-4-5").strip() or "claude-sonnet-4-5"
)
RESEARCHER_CRITIC_MODEL: str = os.getenv("RESEARCHER_CRITIC_MODEL", "gpt-4.1").strip() or "gpt-4.1"
RESEARCHER_MERGE_MODEL: str = os.getenv("RESEARCHER_MERGE_MODEL", "gpt-4.1").strip() or "gpt-4.1"
RESEARCHER_PERSONA_NAME: str = os.getenv("RESEARCHER_PERSONA_NAME", "Sherlock").strip()
RESEARCHER_PERSONA_DESCRIPTION: str = os.getenv(
    "RESEARCHER_PERSONA_DESCRIPTION", "A resourceful researcher who checks every source"
).strip()
RESEARCHER_PERSONA_VOICE: str = os.getenv("RESEARCHER_PERSONA_VOICE", "Clear, precise and concise").strip()
RESEARCHER_PERSONA_OBJECTIVE: str = os.getenv(
    "RESEARCHER_PERSONA_OBJECTIVE", "Find reliable, well-referenced answers"
).strip()
