"""MCP server exposing the page loader as a tool."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .loader import load_page

logger = logging.getLogger("page_loader.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="page-loader")


@mcp.tool()
async def save_page(
    url: str,
    output_dir: Optional[str] = None,
) -> str:
    """Save a web page and its same-origin assets; returns the page file path."""

    target = Path(output_dir).expanduser() if output_dir else Path.cwd()
    page_path = await asyncio.to_thread(load_page, url, target)
    return str(page_path)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
