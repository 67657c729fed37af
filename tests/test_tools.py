"""
Unit tests for the research tools. DDGS is patched and fetch_page runs on httpx.MockTransport; no network.
"""

from unittest.mock import MagicMock, patch

import httpx

from showcase.core.config import FETCH_PAGE_MAX_CHARS
from showcase.researcher.tools import execute_tool, fetch_page, html_to_text


def test_html_to_text_strips_markup() -> None:
    markup = "<html><head><style>p{}</style><script>var x=1;</script></head><body><p>Hello&nbsp;<b>world</b></p></body></html>"
    assert html_to_text(markup) == "Hello world"


def test_fetch_page_rejects_non_http_url() -> None:
    assert fetch_page("file:///etc/passwd").startswith("Error:")


def _serving(status: int, body: str, content_type: str = "text/html") -> httpx.MockTransport:
    return httpx.MockTransport(
        lambda request: httpx.Response(status, text=body, headers={"content-type": content_type})
    )


def test_fetch_page_returns_readable_text() -> None:
    page = "<html><body><h1>Galileo</h1><script>track()</script><p>Built a telescope in 1609.</p></body></html>"
    out = fetch_page("https://example.com/galileo", transport=_serving(200, page))
    assert out == "Galileo Built a telescope in 1609."


def test_fetch_page_truncates_long_pages() -> None:
    body = "a" * (FETCH_PAGE_MAX_CHARS + 50)
    out = fetch_page("https://example.com/long", transport=_serving(200, body, "text/plain"))
    assert out == "a" * FETCH_PAGE_MAX_CHARS + " ..."


def test_fetch_page_reports_error_status() -> None:
    out = fetch_page("https://example.com/missing", transport=_serving(404, "not here"))
    assert out == "Fetching https://example.com/missing returned 404."


def test_fetch_page_reports_timeout() -> None:
    def slow(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    out = fetch_page("https://example.com/slow", transport=httpx.MockTransport(slow))
    assert out == "Fetching https://example.com/slow timed out."


def test_web_search_formats_results() -> None:
    ddgs = MagicMock()
    ddgs.__enter__.return_value.text.return_value = [
        {"title": "Telescope", "body": "Invented in 1608.", "href": "https://example.com/t"},
    ]
    with patch("showcase.researcher.tools.DDGS", return_value=ddgs):
        out = execute_tool("web_search", {"query": "telescope"})
    assert out == "1. Telescope\nInvented in 1608.\nURL: https://example.com/t"


def test_web_search_empty_query() -> None:
    assert execute_tool("web_search", {"query": "  "}) == "Error: empty query"


def test_web_search_failure_is_reported() -> None:
    with patch("showcase.researcher.tools.DDGS", side_effect=RuntimeError("rate limited")):
        assert execute_tool("web_search", {"query": "x"}) == "Web search failed: rate limited"


def test_unknown_tool() -> None:
    assert execute_tool("calculator", {}) == "Unknown tool: calculator"
