# Run from project root: uvicorn showcase.main:app --reload

import logging

from fastapi import FastAPI

from showcase.api.routes import router
from showcase.mcp.server import mcp_router

logging.basicConfig(level=logging.INFO)


app = FastAPI(title="Agent Showcase")
app.include_router(router)
app.include_router(mcp_router, prefix="/mcp")


if __name__ == "__main__":
    print("Agent showcase booting...")
