"""Admission checks for links discovered while crawling."""

from __future__ import annotations

from typing import Optional, Tuple
from urllib.parse import urljoin, urlparse

ILLEGAL_HREF_MARKERS = ("mailto:", "tel:", "javascript:", "#")

ADMITTED = "admitted"
REJECT_ILLEGAL = "illegal characters"
REJECT_UNPARSEABLE = "unparseable"
REJECT_FOREIGN = "foreign domain"


def is_illegal_href(raw_href: Optional[str]) -> bool:
    """Return True for empty hrefs or ones containing a disallowed marker anywhere."""
    if not raw_href:
        return True
    return any(marker in raw_href for marker in ILLEGAL_HREF_MARKERS)


def check_href(
    raw_href: Optional[str], base_url: str, domain: str
) -> Tuple[Optional[str], str]:
    """Return ``(absolute_url, ADMITTED)`` or ``(None, <rejection reason>)``."""
    if is_illegal_href(raw_href):
        return None, REJECT_ILLEGAL
    try:
        absolute = urljoin(base_url, raw_href.strip())
        hostname = urlparse(absolute).hostname
    except ValueError:
        return None, REJECT_UNPARSEABLE
    if hostname is None:
        return None, REJECT_UNPARSEABLE
    if hostname != domain:
        return None, REJECT_FOREIGN
    return absolute, ADMITTED


def admit(raw_href: Optional[str], base_url: str, domain: str) -> Optional[str]:
    """Resolve ``raw_href`` against ``base_url`` and return it if it may be crawled.

    Returns ``None`` when the href is empty, contains one of
    ``ILLEGAL_HREF_MARKERS``, cannot be resolved, or resolves to a hostname
    other than ``domain``. Hostnames are compared exactly, so subdomains of
    ``domain`` are rejected too.
    """
    return check_href(raw_href, base_url, domain)[0]
