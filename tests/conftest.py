import pytest

from viewport_crawler.config import CrawlConfig
from viewport_crawler.renderer import CaptureError, ExtractionError, NavigationError

PNG_HEADER = b"\x89PNG\r\n\x1a\n" + b"\x00" * 24


class FakeRenderer:
    """In-memory stand-in for a browser page.

    ``pages`` maps a URL to the raw hrefs of its anchors. URLs missing from the
    map render as pages without links.
    """

    def __init__(self, pages, failing=(), broken_capture=(), broken_links=()):
        self.pages = pages
        self.failing = set(failing)
        self.broken_capture = set(broken_capture)
        self.broken_links = set(broken_links)
        self.url = "about:blank"
        self.viewport = None
        self.navigations = []
        self.captures = []
        self.timeouts = []

    async def navigate(self, url, timeout):
        self.navigations.append(url)
        self.timeouts.append(timeout)
        if url in self.failing:
            raise NavigationError(url, "Download is starting")
        self.url = url

    async def set_viewport(self, width, height):
        self.viewport = (width, height)

    async def screenshot_full_page(self):
        if self.url in self.broken_capture:
            raise CaptureError(self.url, "Target closed")
        self.captures.append((self.url, self.viewport))
        return PNG_HEADER + self.url.encode()

    async def current_title(self):
        return f"Title of {self.url}"

    async def query_anchor_hrefs(self):
        if self.url in self.broken_links:
            raise ExtractionError(self.url, "Execution context was destroyed")
        return [(href, self.url) for href in self.pages.get(self.url, [])]


@pytest.fixture
def make_config(tmp_path):
    def _make(seed_url="https://example.com/", resolutions=("800x600", "1024x768"), **kwargs):
        kwargs.setdefault("output_root", tmp_path)
        return CrawlConfig.from_seed(seed_url, resolutions=resolutions, **kwargs)

    return _make
