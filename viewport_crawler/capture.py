"""Full-page screenshot capture at configured viewport sizes."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from filetype import guess

from .config import Resolution
from .renderer import CaptureError, Renderer
from .utils import build_output_dir, screenshot_filename

logger = logging.getLogger("viewport_crawler")


def detect_image_format(data: bytes) -> Optional[str]:
    """Detect image type using filetype; returns lowercase extension."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        return kind.extension.lower()
    return None


async def capture_screenshot(renderer: Renderer, resolution: Resolution) -> bytes:
    """Resize the viewport and return a PNG of the whole scrollable page."""
    logger.info("Screenshot [%s]", resolution)
    await renderer.set_viewport(resolution.width, resolution.height)
    data = await renderer.screenshot_full_page()
    if detect_image_format(data) != "png":
        raise CaptureError(
            renderer.url,
            f"renderer returned non-PNG data at {resolution}",
        )
    return data


async def capture_screenshots_for_page(
    url: str,
    renderer: Renderer,
    resolutions: Sequence[Resolution],
    output_root: Path,
) -> List[Path]:
    """Capture one screenshot per resolution, in order, and save them under ``output_root``."""
    output_dir = build_output_dir(url, output_root)
    saved: List[Path] = []
    for resolution in resolutions:
        try:
            data = await capture_screenshot(renderer, resolution)
        except CaptureError as exc:
            exc.files = list(saved)
            raise
        destination = output_dir / screenshot_filename(resolution)
        destination.write_bytes(data)
        logger.info("Saved to %s", destination)
        saved.append(destination)
    return saved
