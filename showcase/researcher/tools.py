"""
Research tools: definitions and execution for tool-calling mode.

Tools: web_search (ddgs), fetch_page (httpx GET, text only).
execute_tool always returns a string for the LLM; failures are reported in the string.
"""

import html
import logging
import re
from typing import Any

import httpx
from ddgs import DDGS

from showcase.core.config import FETCH_PAGE_MAX_CHARS, HTTP_TIMEOUT, WEB_SEARCH_MAX_RESULTS

logger = logging.getLogger(__name__)

# OpenAI function-calling format
WEB_TOOLS = [
    {
        "type": "function",
        "function": {
            "name": "web_search",
            "description": "Search the web. Returns titles, snippets and URLs of the top results.",
            "parameters": {
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Search query for the web"}
                },
                "required": ["query"],
            },
        },
    },
    {
        "type": "function",
        "function": {
            "name": "fetch_page",
            "description": "Fetch a web page by URL and return its readable text (truncated). Use after web_search to read a source.",
            "parameters": {
                "type": "object",
                "properties": {
                    "url": {"type": "string", "description": "Absolute http(s) URL"}
                },
                "required": ["url"],
            },
        },
    },
]

_SCRIPT_RE = re.compile(r"<(script|style|noscript)[^>]*>.*?</\1>", re.DOTALL | re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


def html_to_text(markup: str) -> str:
    """Crude readable-text extraction: drop scripts/styles and tags, collapse whitespace."""
    text = _SCRIPT_RE.sub(" ", markup or "")
    text = _TAG_RE.sub(" ", text)
    return _WS_RE.sub(" ", html.unescape(text)).strip()


def web_search(query: str, max_results: int = WEB_SEARCH_MAX_RESULTS) -> str:
    q = (query or "").strip()
    if not q:
        return "Error: empty query"
    try:
        with DDGS() as ddgs:
            results = list(ddgs.text(q, max_results=max_results))
    except Exception as e:
        logger.warning("[tools] web_search failed: %s", e)
        return f"Web search failed: {e}"
    if not results:
        return "No results found."
    lines = []
    for i, r in enumerate(results[:max_results], 1):
        title = (r.get("title") or "").strip()
        body = (r.get("body") or "").strip()
        href = (r.get("href") or "").strip()
        lines.append(f"{i}. {title}\n{body}\nURL: {href}")
    return "\n\n".join(lines)


def fetch_page(
    url: str,
    max_chars: int = FETCH_PAGE_MAX_CHARS,
    transport: httpx.BaseTransport | None = None,
) -> str:
    url = (url or "").strip()
    if not url.startswith(("http://", "https://")):
        return "Error: url must start with http:// or https://"
    try:
        with httpx.Client(timeout=HTTP_TIMEOUT, follow_redirects=True, transport=transport) as client:
            response = client.get(url, headers={"User-Agent": "showcase-researcher/0.1"})
    except httpx.TimeoutException:
        return f"Fetching {url} timed out."
    except httpx.HTTPError as e:
        logger.warning("[tools] fetch_page failed url=%s: %s", url, e)
        return f"Fetching {url} failed: {e}"
    if response.status_code != 200:
        return f"Fetching {url} returned {response.status_code}."
    content_type = response.headers.get("content-type", "")
    text = html_to_text(response.text) if "html" in content_type else response.text.strip()
    if len(text) > max_chars:
        text = text[:max_chars] + " ..."
    return text or "Page has no readable text."


def execute_tool(name: str, arguments: dict[str, Any]) -> str:
    """
    Execute a tool by name with the given arguments. Returns a string result for the LLM.
    """
    args = arguments or {}
    logger.info("[tools] execute_tool name=%r arguments=%r", name, args)

    if name == "web_search":
        return web_search(args.get("query") or "")

    if name == "fetch_page":
        return fetch_page(args.get("url") or "")

    return f"Unknown tool: {name}"
