"""Breadth-first orchestration of navigation, capture and link discovery."""

from __future__ import annotations

import logging
import time
from collections import deque
from pathlib import Path
from typing import Deque, List, Optional, Set

from .capture import capture_screenshots_for_page
from .config import CrawlConfig
from .links import extract_links
from .models import CrawlReport, CrawlState, PageCapture
from .renderer import (
    CaptureError,
    ExtractionError,
    NavigationError,
    Renderer,
    open_renderer,
)

logger = logging.getLogger("viewport_crawler")


class CrawlScheduler:
    """Owns the frontier and visited set and drives one renderer through the site.

    URLs are visited at most once, in the order they were discovered. A URL is
    marked visited before it is loaded, so pages that fail to load are never
    retried. Newly discovered links are only queued when they start with the
    seed URL.
    """

    def __init__(self, config: CrawlConfig, renderer: Renderer) -> None:
        self.config = config
        self.renderer = renderer
        self.frontier: Deque[str] = deque()
        self.visited: Set[str] = set()
        self.state = CrawlState.IDLE

    async def run(self) -> CrawlReport:
        if self.state is not CrawlState.IDLE:
            raise RuntimeError(f"Crawl already started (state={self.state.value})")

        report = CrawlReport(seed_url=self.config.seed_url, domain=self.config.domain)
        overall_start = time.perf_counter()
        self.frontier.append(self.config.seed_url)
        self.state = CrawlState.RUNNING
        logger.info("Starting crawl at %s", self.config.seed_url)

        while self.frontier:
            logger.info("Items remaining in queue: %d", len(self.frontier))
            logger.info("Pages visited: %d", len(self.visited))

            url = self.frontier.popleft()
            self.state = CrawlState.RUNNING if self.frontier else CrawlState.DRAINING
            if url in self.visited:
                logger.debug("Skipping %s (visited)", url)
                continue

            logger.info("Visiting %s", url)
            self.visited.add(url)
            page = await self._process(url, report)
            if page is not None:
                report.pages.append(page)
            if self.frontier:
                self.state = CrawlState.RUNNING

        self.state = CrawlState.DONE
        report.visited_count = len(self.visited)
        report.total_seconds = time.perf_counter() - overall_start
        logger.info(
            "Visited %d pages (%d screenshots, %d failed, %d skipped)",
            report.visited_count,
            report.screenshot_count,
            len(report.failed_urls),
            len(report.skipped_urls),
        )
        return report

    async def _process(self, url: str, report: CrawlReport) -> Optional[PageCapture]:
        start = time.perf_counter()
        try:
            await self.renderer.navigate(url, self.config.navigation_timeout)
        except NavigationError as exc:
            logger.warning("Navigation failed for %s: %s", url, exc)
            report.failed_urls.append(url)
            return None

        files: List[Path] = []
        try:
            files = await capture_screenshots_for_page(
                url, self.renderer, self.config.resolutions, self.config.output_root
            )
            title = await self.renderer.current_title()
            logger.info("Getting links from page: %s", title)
            links = await extract_links(self.renderer, self.config.domain)
        except (CaptureError, ExtractionError) as exc:
            if self.config.fail_fast:
                raise
            logger.exception("Skipping rest of %s", url)
            report.skipped_urls.append(url)
            report.skipped_files.extend(exc.files or files)
            return None

        enqueued = self._enqueue(links)
        return PageCapture(
            url=url,
            title=title,
            files=files,
            links_found=len(links),
            links_enqueued=enqueued,
            total_seconds=time.perf_counter() - start,
        )

    def _enqueue(self, links: List[str]) -> int:
        if not links:
            logger.info("No links found")
            return 0
        enqueued = 0
        for link in links:
            if link not in self.visited and link.startswith(self.config.seed_url):
                logger.debug("[OK] Adding %s to queue", link)
                self.frontier.append(link)
                enqueued += 1
            else:
                logger.debug("[FAIL] Skipping %s (visited or outside seed)", link)
        return enqueued


async def run_crawler(config: CrawlConfig) -> CrawlReport:
    """Launch a browser and crawl the site described by ``config``."""
    async with open_renderer(config) as renderer:
        return await CrawlScheduler(config, renderer).run()
