"""Browser rendering capability backed by Playwright."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, List, Optional, Protocol, Tuple

from bs4 import BeautifulSoup
from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import CrawlConfig

logger = logging.getLogger("viewport_crawler")

AnchorHref = Tuple[Optional[str], str]


class RenderError(Exception):
    """Base class for failures reported by the rendering engine."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{url}: {message}")
        self.url = url
        # Screenshots already written for the page when the error was raised.
        self.files: List[Path] = []


class NavigationError(RenderError):
    """The page could not be loaded within the navigation timeout."""


class CaptureError(RenderError):
    """A screenshot could not be produced for the current page."""


class ExtractionError(RenderError):
    """Anchors could not be read from the current page."""


class Renderer(Protocol):
    """The subset of a browser page the crawler drives."""

    @property
    def url(self) -> str:
        ...

    async def navigate(self, url: str, timeout: float) -> None:
        ...

    async def set_viewport(self, width: int, height: int) -> None:
        ...

    async def screenshot_full_page(self) -> bytes:
        ...

    async def current_title(self) -> str:
        ...

    async def query_anchor_hrefs(self) -> List[AnchorHref]:
        ...


def parse_anchor_hrefs(html: str, base_url: str) -> List[AnchorHref]:
    """Return ``(href, base_url)`` for every anchor in document order."""
    soup = BeautifulSoup(html, "html.parser")
    return [(anchor.get("href"), base_url) for anchor in soup.find_all("a")]


class PlaywrightRenderer:
    """Drive a single Playwright page through navigation, capture and extraction."""

    def __init__(
        self,
        page: Page,
        wait_until: str = "load",
        wait_after_load: float = 0.0,
    ) -> None:
        self._page = page
        self.wait_until = wait_until
        self.wait_after_load = wait_after_load

    @property
    def url(self) -> str:
        return self._page.url

    async def navigate(self, url: str, timeout: float) -> None:
        try:
            await self._page.goto(
                url, timeout=timeout * 1000, wait_until=self.wait_until
            )
        except PlaywrightTimeoutError as exc:
            raise NavigationError(url, f"timed out after {timeout:.0f}s") from exc
        except PlaywrightError as exc:
            # Download responses abort navigation with a generic error.
            raise NavigationError(url, exc.message) from exc
        if self.wait_after_load:
            await self._page.wait_for_timeout(int(self.wait_after_load * 1000))

    async def set_viewport(self, width: int, height: int) -> None:
        try:
            await self._page.set_viewport_size({"width": width, "height": height})
        except PlaywrightError as exc:
            raise CaptureError(self.url, exc.message) from exc

    async def screenshot_full_page(self) -> bytes:
        try:
            return await self._page.screenshot(full_page=True, type="png")
        except PlaywrightError as exc:
            raise CaptureError(self.url, exc.message) from exc

    async def current_title(self) -> str:
        try:
            return await self._page.title()
        except PlaywrightError as exc:
            raise ExtractionError(self.url, exc.message) from exc

    async def query_anchor_hrefs(self) -> List[AnchorHref]:
        try:
            html = await self._page.content()
        except PlaywrightError as exc:
            raise ExtractionError(self.url, exc.message) from exc
        return parse_anchor_hrefs(html, self.url)


@asynccontextmanager
async def open_renderer(config: CrawlConfig) -> AsyncIterator[PlaywrightRenderer]:
    """Launch Chromium with one page and close the browser on exit."""
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=config.headless)
        try:
            page = await browser.new_page()
            logger.debug("Launched Chromium (headless=%s)", config.headless)
            yield PlaywrightRenderer(
                page,
                wait_until=config.wait_until,
                wait_after_load=config.wait_after_load,
            )
        finally:
            await browser.close()
