"""Configuration objects and constants for the crawler."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional
from urllib.parse import urlparse

DEFAULT_RESOLUTIONS = (
    "1920x1080",
    "1366x768",
    "360x640",
    "414x896",
    "1536x864",
    "375x667",
)
WAIT_UNTIL_CHOICES = ("load", "domcontentloaded", "networkidle", "commit")


@dataclass(frozen=True)
class Resolution:
    """A viewport size in CSS pixels."""

    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Resolution dimensions must be positive (got {self.width}x{self.height})"
            )

    @classmethod
    def parse(cls, value: str) -> "Resolution":
        """Parse the compact ``WxH`` form, e.g. ``1920x1080``."""
        parts = value.strip().lower().split("x")
        if len(parts) != 2:
            raise ValueError(f"Invalid resolution {value!r}; expected WIDTHxHEIGHT")
        try:
            width, height = (int(part) for part in parts)
        except ValueError:
            raise ValueError(
                f"Invalid resolution {value!r}; expected WIDTHxHEIGHT"
            ) from None
        return cls(width, height)

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def parse_resolutions(values: Iterable[str]) -> List[Resolution]:
    """Parse resolution strings, keeping the order they were given in."""
    resolutions = [Resolution.parse(value) for value in values]
    if not resolutions:
        raise ValueError("At least one resolution is required")
    return resolutions


@dataclass
class CrawlConfig:
    """Top-level settings that control crawling and capture behaviour."""

    seed_url: str
    domain: str
    resolutions: List[Resolution] = field(
        default_factory=lambda: parse_resolutions(DEFAULT_RESOLUTIONS)
    )
    output_root: Path = Path("output")
    navigation_timeout: float = 30.0
    wait_until: str = "load"
    wait_after_load: float = 0.0
    headless: bool = True
    fail_fast: bool = False

    @classmethod
    def from_seed(
        cls,
        seed_url: str,
        resolutions: Optional[Iterable[str]] = None,
        domain: Optional[str] = None,
        **kwargs,
    ) -> "CrawlConfig":
        """Build a config, deriving the crawl domain from the seed when omitted."""
        parsed = urlparse(seed_url)
        if not parsed.scheme or not parsed.hostname:
            raise ValueError(f"Seed URL must be absolute: {seed_url!r}")
        return cls(
            seed_url=seed_url,
            domain=(domain or parsed.hostname).lower(),
            resolutions=parse_resolutions(
                DEFAULT_RESOLUTIONS if resolutions is None else resolutions
            ),
            **kwargs,
        )
