"""Utility helpers for mapping URLs onto screenshot paths."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from .config import Resolution

ILLEGAL_PATH_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
SCHEME_SEGMENTS = {"https:", "http:"}
DOT_SEGMENTS = {"", ".", ".."}
IMAGES_DIRNAME = "images"


def sanitize_segment(segment: str) -> str:
    """Strip characters that are not allowed in path components."""
    return ILLEGAL_PATH_CHARS.sub("", segment)


def url_segments(url: str) -> List[str]:
    """Split a URL on ``/`` into hostname followed by its sanitized path segments."""
    segments = [
        segment for segment in url.split("/") if segment and segment not in SCHEME_SEGMENTS
    ]
    if not segments or segments[0] in DOT_SEGMENTS:
        raise ValueError(f"Cannot derive an output path from {url!r}")
    hostname, rest = segments[0], segments[1:]
    # Sanitizing can turn e.g. "..*" into "..", which would climb out of the host directory.
    cleaned = (sanitize_segment(segment) for segment in rest)
    return [hostname] + [segment for segment in cleaned if segment not in DOT_SEGMENTS]


def build_output_dir(url: str, root_dir: Path) -> Path:
    """Create (if needed) and return the screenshot directory for ``url``."""
    output_dir = Path(root_dir, IMAGES_DIRNAME, *url_segments(url))
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def screenshot_filename(resolution: Resolution) -> str:
    return f"{resolution.width}x{resolution.height}.png"
