import asyncio

import pytest
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from conftest import PNG_HEADER
from viewport_crawler.renderer import (
    CaptureError,
    ExtractionError,
    NavigationError,
    PlaywrightRenderer,
)


class StubPage:
    """Mimics the handful of Playwright ``Page`` coroutines the renderer calls."""

    def __init__(self, goto_error=None, screenshot_error=None, content_error=None):
        self.url = "about:blank"
        self.goto_error = goto_error
        self.screenshot_error = screenshot_error
        self.content_error = content_error
        self.calls = []

    async def goto(self, url, timeout=None, wait_until=None):
        self.calls.append(("goto", url, timeout, wait_until))
        if self.goto_error:
            raise self.goto_error
        self.url = url

    async def wait_for_timeout(self, ms):
        self.calls.append(("wait", ms))

    async def set_viewport_size(self, size):
        self.calls.append(("viewport", size))

    async def screenshot(self, full_page=False, type=None):
        self.calls.append(("screenshot", full_page, type))
        if self.screenshot_error:
            raise self.screenshot_error
        return PNG_HEADER

    async def title(self):
        return "Example"

    async def content(self):
        if self.content_error:
            raise self.content_error
        return '<a href="/a">A</a><a href="mailto:x@y.com">M</a>'


def test_navigate_passes_timeout_in_milliseconds():
    page = StubPage()
    renderer = PlaywrightRenderer(page, wait_until="networkidle", wait_after_load=0.5)
    asyncio.run(renderer.navigate("https://example.com/", 30.0))
    assert page.calls == [
        ("goto", "https://example.com/", 30000.0, "networkidle"),
        ("wait", 500),
    ]
    assert renderer.url == "https://example.com/"


@pytest.mark.parametrize(
    "error",
    [
        PlaywrightTimeoutError("Timeout 30000ms exceeded."),
        PlaywrightError("net::ERR_ABORTED; Download is starting"),
    ],
)
def test_navigate_wraps_playwright_errors(error):
    renderer = PlaywrightRenderer(StubPage(goto_error=error))
    with pytest.raises(NavigationError) as excinfo:
        asyncio.run(renderer.navigate("https://example.com/file.zip", 30.0))
    assert excinfo.value.url == "https://example.com/file.zip"


def test_full_page_screenshot():
    page = StubPage()
    renderer = PlaywrightRenderer(page)
    asyncio.run(renderer.set_viewport(360, 640))
    data = asyncio.run(renderer.screenshot_full_page())
    assert data == PNG_HEADER
    assert page.calls == [
        ("viewport", {"width": 360, "height": 640}),
        ("screenshot", True, "png"),
    ]


def test_screenshot_failure_becomes_capture_error():
    renderer = PlaywrightRenderer(StubPage(screenshot_error=PlaywrightError("Target closed")))
    with pytest.raises(CaptureError):
        asyncio.run(renderer.screenshot_full_page())


def test_query_anchor_hrefs_uses_current_url():
    page = StubPage()
    page.url = "https://example.com/docs/"
    renderer = PlaywrightRenderer(page)
    assert asyncio.run(renderer.query_anchor_hrefs()) == [
        ("/a", "https://example.com/docs/"),
        ("mailto:x@y.com", "https://example.com/docs/"),
    ]
    assert asyncio.run(renderer.current_title()) == "Example"


def test_content_failure_becomes_extraction_error():
    renderer = PlaywrightRenderer(StubPage(content_error=PlaywrightError("detached")))
    with pytest.raises(ExtractionError):
        asyncio.run(renderer.query_anchor_hrefs())
