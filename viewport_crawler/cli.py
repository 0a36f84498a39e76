"""Command-line entry point for the viewport crawler."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_RESOLUTIONS, WAIT_UNTIL_CHOICES, CrawlConfig
from .crawler import run_crawler
from .report import compose_report

logger = logging.getLogger("viewport_crawler.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Crawl a site breadth-first with Playwright and save full-page "
            "screenshots of every page at several viewport sizes."
        ),
    )
    parser.add_argument("seed_url", help="Absolute URL to start crawling from")
    parser.add_argument(
        "--domain",
        default=None,
        help="Hostname links must match exactly (default: the seed's hostname)",
    )
    parser.add_argument(
        "--resolution",
        dest="resolutions",
        action="append",
        metavar="WxH",
        help=(
            "Viewport size to capture; repeat for several, captured in the order given "
            f"(default: {' '.join(DEFAULT_RESOLUTIONS)})"
        ),
    )
    parser.add_argument(
        "--output",
        default="output",
        type=Path,
        help="Directory under which the images/ tree is written",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--wait",
        type=float,
        default=0.0,
        help="Seconds to wait after the page loads before capturing",
    )
    parser.add_argument(
        "--wait-until",
        choices=WAIT_UNTIL_CHOICES,
        default="load",
        help="Navigation event that counts as loaded",
    )
    parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window instead of running headless",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        help="Abort the crawl on screenshot or link extraction errors instead of skipping the page",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--mcp",
        action="store_true",
        help="Emit the crawl report to STDOUT as Markdown (suitable for MCP)",
    )
    return parser


def build_config(args: argparse.Namespace) -> CrawlConfig:
    return CrawlConfig.from_seed(
        args.seed_url,
        resolutions=args.resolutions,
        domain=args.domain,
        output_root=Path(args.output).resolve(),
        navigation_timeout=args.timeout,
        wait_until=args.wait_until,
        wait_after_load=args.wait,
        headless=not args.headed,
        fail_fast=args.fail_fast,
    )


def parse_args(argv: Sequence[str] | None = None) -> tuple[argparse.Namespace, CrawlConfig]:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))
    return args, config


def main(argv: Sequence[str] | None = None) -> int:
    args, config = parse_args(argv)
    level = logging.DEBUG if args.verbose else logging.INFO
    if args.mcp and not args.verbose:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    try:
        report = asyncio.run(run_crawler(config))
    except Exception:  # pylint: disable=broad-except
        logger.exception("Crawl of %s aborted", config.seed_url)
        return 1

    logger.info(
        "Finished in %.2fs (%d pages captured, %d screenshots, %d failed, %d skipped)",
        report.total_seconds,
        len(report.pages),
        report.screenshot_count,
        len(report.failed_urls),
        len(report.skipped_urls),
    )

    if args.verbose:
        for page in report.pages:
            logger.debug(
                "Timing for %s -> total: %.2fs | links: %d found, %d queued",
                page.url,
                page.total_seconds,
                page.links_found,
                page.links_enqueued,
            )

    if args.mcp:
        sys.stdout.write(compose_report(report, relative_to=config.output_root))
        sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
