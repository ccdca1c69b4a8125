"""Fixed-window batch scraping and cross-site aggregation."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from typing import Any, Awaitable, Callable, Coroutine, Sequence

from .models import BatchSummary, ScrapingReport
from .scoring import quality_tier

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 5
COMMON_ISSUE_LIMIT = 5

ScrapeFn = Callable[[str], Awaitable[ScrapingReport]]
# Async callback receiving (event_name, payload), used to stream batch progress.
EventCallback = Callable[[str, dict[str, Any]], Coroutine[Any, Any, None]]


def split_windows(urls: Sequence[str], size: int) -> list[list[str]]:
    """Split *urls* into consecutive, non-overlapping windows of *size*."""
    if size < 1:
        raise ValueError(f"window size must be positive, got {size}")
    return [list(urls[i : i + size]) for i in range(0, len(urls), size)]


async def _emit(on_event: EventCallback | None, event: str, data: dict[str, Any]) -> None:
    if on_event is not None:
        await on_event(event, data)


async def scrape_multiple(
    scrape: ScrapeFn,
    urls: Sequence[str],
    *,
    window_size: int = DEFAULT_WINDOW_SIZE,
    on_event: EventCallback | None = None,
) -> list[ScrapingReport]:
    """Run *scrape* over *urls*, *window_size* at a time.

    Each window runs concurrently and is awaited in full before the next one
    starts, so a slow URL holds back the following window. Reports come back
    in input order, one per URL. *scrape* must not raise.
    """
    windows = split_windows(urls, window_size)
    logger.info("batch scrape started", extra={"url_count": len(urls), "windows": len(windows)})
    await _emit(on_event, "started", {"total": len(urls), "windows": len(windows)})

    reports: list[ScrapingReport] = []
    for index, window in enumerate(windows):
        await _emit(on_event, "window", {"index": index, "size": len(window), "offset": len(reports)})
        window_reports = await asyncio.gather(*(scrape(url) for url in window))
        for report in window_reports:
            await _emit(
                on_event,
                "report",
                {"position": len(reports), "report": report.model_dump(mode="json", by_alias=True)},
            )
            reports.append(report)
        logger.debug(
            "batch window completed",
            extra={"window": index, "size": len(window), "failed": sum(1 for r in window_reports if not r.success)},
        )

    logger.info(
        "batch scrape completed",
        extra={"url_count": len(urls), "successful": sum(1 for r in reports if r.success)},
    )
    return reports


def generate_report_summary(reports: Sequence[ScrapingReport]) -> BatchSummary:
    """Aggregate per-site reports into one cross-site summary.

    Averages and common issues only consider successful reports; averages are
    0 when there are none.
    """
    successful = [r for r in reports if r.success and r.content is not None]
    succeeded = sum(1 for r in reports if r.success)

    if successful:
        average_seo = sum(r.summary.seo_score for r in successful) / len(successful)
        average_accessibility = sum(r.summary.accessibility_score for r in successful) / len(successful)
    else:
        average_seo = average_accessibility = 0.0

    frequency: Counter[str] = Counter()
    for report in successful:
        frequency.update(report.summary.technical_issues)

    return BatchSummary(
        total_sites=len(reports),
        successful=succeeded,
        failed=len(reports) - succeeded,
        average_seo_score=average_seo,
        average_accessibility_score=average_accessibility,
        common_issues=[issue for issue, _ in frequency.most_common(COMMON_ISSUE_LIMIT)],
        overall_quality=quality_tier((average_seo + average_accessibility) / 2, (60, 75, 90)),
    )
