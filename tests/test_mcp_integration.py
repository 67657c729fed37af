"""
Integration tests for MCP tool endpoints.

Uses mocks for the horoscope API and web search so tests do not require network access.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from showcase.main import app
from showcase.services import people_service


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def test_mcp_tool_discovery(client: TestClient) -> None:
    """GET /mcp/tools lists the exposed tools."""
    response = client.get("/mcp/tools")
    assert response.status_code == 200
    names = [t["name"] for t in response.json()["tools"]]
    assert names == ["daily_horoscope", "web_search", "list_people"]


# --- daily_horoscope ---

def test_mcp_daily_horoscope_returns_text(client: TestClient) -> None:
    """POST /mcp/tools/daily_horoscope returns 200 and { sign, horoscope }."""
    with patch("showcase.mcp.server.daily_horoscope", return_value="Bright day.") as lookup:
        response = client.post("/mcp/tools/daily_horoscope", json={"sign": "Aries"})
    assert response.status_code == 200
    assert response.json() == {"sign": "aries", "horoscope": "Bright day."}
    lookup.assert_called_once_with("aries")


def test_mcp_daily_horoscope_unknown_sign_returns_400(client: TestClient) -> None:
    with patch("showcase.mcp.server.daily_horoscope") as lookup:
        response = client.post("/mcp/tools/daily_horoscope", json={"sign": "unicorn"})
    assert response.status_code == 400
    lookup.assert_not_called()


def test_mcp_daily_horoscope_missing_body_returns_422(client: TestClient) -> None:
    """POST without body returns 422."""
    response = client.post("/mcp/tools/daily_horoscope")
    assert response.status_code == 422


# --- web_search ---

def test_mcp_web_search_returns_result(client: TestClient) -> None:
    with patch("showcase.mcp.server.web_search", return_value="1. Result\nbody\nURL: https://x") as search:
        response = client.post("/mcp/tools/web_search", json={"query": "telescope"})
    assert response.status_code == 200
    assert response.json() == {"result": "1. Result\nbody\nURL: https://x"}
    search.assert_called_once_with("telescope")


def test_mcp_web_search_empty_query_returns_empty_result(client: TestClient) -> None:
    """POST with empty query returns 200 and empty result (web_search not called)."""
    with patch("showcase.mcp.server.web_search") as search:
        response = client.post("/mcp/tools/web_search", json={"query": ""})
    assert response.status_code == 200
    assert response.json() == {"result": ""}
    search.assert_not_called()


# --- list_people ---

def test_mcp_list_people(client: TestClient) -> None:
    people_service.clear_people()
    person = people_service.create_person("Ada", "leo")
    try:
        response = client.post("/mcp/tools/list_people", json={})
    finally:
        people_service.clear_people()
    assert response.status_code == 200
    assert response.json() == {"people": [{"id": person.id, "name": "Ada", "sign": "leo"}]}
