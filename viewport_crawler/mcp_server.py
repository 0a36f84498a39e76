"""MCP server exposing the viewport crawler as a tool."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import List, Optional

from mcp.server.fastmcp import FastMCP

from .config import CrawlConfig
from .crawler import run_crawler
from .report import compose_report

logger = logging.getLogger("viewport_crawler.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="viewport-crawler")


async def _run_capture(config: CrawlConfig, relative_to: Optional[Path]) -> str:
    report = await run_crawler(config)
    if not report.pages:
        raise RuntimeError(f"No pages could be captured from {config.seed_url}")
    return compose_report(report, relative_to=relative_to)


@mcp.tool()
async def capture_site(
    url: str,
    resolutions: Optional[List[str]] = None,
    output: Optional[str] = None,
) -> str:
    """Crawl a site from ``url`` and return a Markdown list of saved screenshots.

    Screenshots go to ``output`` when given and are listed relative to it.
    Otherwise they are kept in a new temporary directory and listed by
    absolute path.
    """
    if output:
        output_root = Path(output).expanduser().resolve()
        relative_to: Optional[Path] = output_root
    else:
        output_root = Path(tempfile.mkdtemp(prefix="viewport-crawler-"))
        relative_to = None
    config = CrawlConfig.from_seed(url, resolutions=resolutions, output_root=output_root)
    return await _run_capture(config, relative_to)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
