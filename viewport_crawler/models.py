"""Data models used throughout the crawler pipeline."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


class CrawlState(enum.Enum):
    """Lifecycle of a crawl scheduler."""

    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    DONE = "done"


@dataclass
class PageCapture:
    """Screenshots and link statistics for one visited page."""

    url: str
    title: Optional[str]
    files: List[Path]
    links_found: int = 0
    links_enqueued: int = 0
    total_seconds: float = 0.0


@dataclass
class CrawlReport:
    """Outcome of a full crawl."""

    seed_url: str
    domain: str
    pages: List[PageCapture] = field(default_factory=list)
    failed_urls: List[str] = field(default_factory=list)
    skipped_urls: List[str] = field(default_factory=list)
    # Screenshots written for skipped pages before the error.
    skipped_files: List[Path] = field(default_factory=list)
    visited_count: int = 0
    total_seconds: float = 0.0

    @property
    def screenshot_count(self) -> int:
        return sum(len(page.files) for page in self.pages)
