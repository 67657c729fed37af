"""
Minimal MCP-style tool server: exposes the horoscope lookup, web search and the
people directory as a standardized tool interface for external agents.
"""

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from showcase.api.handlers import call_service, validate_sign
from showcase.researcher.tools import web_search
from showcase.services.horoscope_service import daily_horoscope
from showcase.services.people_service import list_people

logger = logging.getLogger(__name__)

# MCP tool schema for discovery / documentation
tools = [
    {
        "name": "daily_horoscope",
        "description": "Today's horoscope for a zodiac sign",
        "input_schema": {"sign": "string"},
    },
    {
        "name": "web_search",
        "description": "Search the web; returns titles, snippets and URLs",
        "input_schema": {"query": "string"},
    },
    {
        "name": "list_people",
        "description": "List people stored in the directory with their signs",
        "input_schema": {},
    },
]

mcp_router = APIRouter(tags=["mcp"])


@mcp_router.get("/tools", summary="MCP tool discovery")
def mcp_list_tools() -> dict[str, list[dict[str, Any]]]:
    return {"tools": tools}


class DailyHoroscopeRequest(BaseModel):
    """Request body for MCP tool daily_horoscope."""
    sign: str


@mcp_router.post(
    "/tools/daily_horoscope",
    summary="MCP tool: daily_horoscope",
    description="Today's horoscope for a zodiac sign.",
)
def mcp_daily_horoscope(body: DailyHoroscopeRequest) -> dict[str, str]:
    logger.info("MCP tool called: daily_horoscope")
    sign = validate_sign(body.sign)
    return {"sign": sign, "horoscope": call_service(lambda: daily_horoscope(sign))}


# --- web_search ---

class WebSearchRequest(BaseModel):
    """Request body for MCP tool web_search."""
    query: str = ""


@mcp_router.post(
    "/tools/web_search",
    summary="MCP tool: web_search",
    description="Search the web; empty query returns an empty result.",
)
def mcp_web_search(body: WebSearchRequest) -> dict[str, str]:
    logger.info("MCP tool called: web_search")
    query = (body.query or "").strip()
    if not query:
        return {"result": ""}
    return {"result": web_search(query)}


# --- list_people ---

@mcp_router.post(
    "/tools/list_people",
    summary="MCP tool: list_people",
    description="List people stored in the directory.",
)
def mcp_list_people() -> dict[str, list[dict[str, Any]]]:
    logger.info("MCP tool called: list_people")
    return {"people": [p.model_dump() for p in list_people()]}
