"""Link discovery on the currently rendered page."""

from __future__ import annotations

import logging
from typing import List

from .renderer import Renderer
from .urls import check_href

logger = logging.getLogger("viewport_crawler")


async def extract_links(renderer: Renderer, domain: str) -> List[str]:
    """Return admitted URLs for every anchor on the page, in document order."""
    anchors = await renderer.query_anchor_hrefs()
    logger.debug("Found %d potential links", len(anchors))

    links: List[str] = []
    for index, (href, base_url) in enumerate(anchors, start=1):
        logger.debug("Checking href of link [%d/%d]: %s", index, len(anchors), href)
        absolute, reason = check_href(href, base_url, domain)
        if absolute is None:
            logger.debug("[FAIL] Skipping link (%s)", reason)
            continue
        logger.debug("[OK] %s", absolute)
        links.append(absolute)
    return links
