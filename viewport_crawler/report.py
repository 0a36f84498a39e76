"""Markdown summaries of finished crawls."""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import List, Optional

from .models import CrawlReport


def _display_path(path: Path, relative_to: Optional[Path]) -> str:
    if relative_to is not None:
        try:
            return str(path.relative_to(relative_to))
        except ValueError:
            pass
    return str(path)


def compose_report(report: CrawlReport, relative_to: Optional[Path] = None) -> str:
    """Generate a Markdown report with front matter listing every screenshot."""
    timestamp = (
        dt.datetime.now(dt.timezone.utc)
        .replace(microsecond=0)
        .isoformat()
        .replace("+00:00", "Z")
    )
    lines: List[str] = [
        "---",
        f"seed_url: {report.seed_url}",
        f"domain: {report.domain}",
        f"retrieved_at: {timestamp}",
        f"visited: {report.visited_count}",
        f"failed: {len(report.failed_urls)}",
        f"skipped: {len(report.skipped_urls)}",
        "---",
        "",
    ]

    for page in report.pages:
        heading = page.title or page.url
        lines.append(f"## {heading}")
        lines.append("")
        lines.append(f"Source: {page.url}")
        lines.append("")
        for path in page.files:
            lines.append(f"- {_display_path(path, relative_to)}")
        lines.append("")

    if report.failed_urls:
        lines.append("## Failed to load")
        lines.append("")
        lines.extend(f"- {url}" for url in report.failed_urls)
        lines.append("")
    if report.skipped_urls:
        lines.append("## Skipped after errors")
        lines.append("")
        lines.extend(f"- {url}" for url in report.skipped_urls)
        lines.append("")
    if report.skipped_files:
        lines.append("## Partial screenshots of skipped pages")
        lines.append("")
        lines.extend(f"- {_display_path(path, relative_to)}" for path in report.skipped_files)
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"
