"""Service layer running scraper operations for the API routes."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime, timezone
from typing import Any, AsyncGenerator

from src.api.schemas import (
    AnalysisResult,
    BatchResult,
    ReportOverview,
    ScrapeRequest,
    UrlValidation,
    ValidationBatch,
)
from src.scraper import ScrapingReport, WebScraper

logger = logging.getLogger(__name__)


class AnalysisFailed(Exception):
    """The page behind an analysis request could not be scraped."""

    def __init__(self, report: ScrapingReport) -> None:
        self.report = report
        super().__init__("; ".join(report.errors))


async def run_scrape_task(
    scraper: WebScraper,
    body: ScrapeRequest,
) -> ScrapingReport | BatchResult | ValidationBatch:
    """Dispatch a POST /scrape request on its ``task``."""
    urls = body.urls
    logger.info("scrape task received", extra={"task": body.task, "url_count": len(urls)})

    if body.task == "validate-urls":
        return ValidationBatch(
            validations=[UrlValidation(url=u, validation=scraper.validate_url(u)) for u in urls],
            timestamp=datetime.now(timezone.utc),
        )

    if body.task == "scrape-multiple":
        reports = await scraper.scrape_multiple_websites(urls)
        return BatchResult(
            reports=reports,
            summary=scraper.generate_report_summary(reports),
            timestamp=datetime.now(timezone.utc),
        )

    if len(urls) != 1:
        raise ValueError("scrape-single expects exactly one URL")
    return await scraper.scrape_website(urls[0])


async def analyze_url(
    scraper: WebScraper,
    url: str,
    query: str | None = None,
) -> AnalysisResult:
    """Scrape *url* and run the research analysis over the extracted content.

    Raises:
        AnalysisFailed: the scrape did not produce content.
    """
    report = await scraper.scrape_website(url)
    if not report.success or report.content is None:
        raise AnalysisFailed(report)

    analysis = scraper.analyze_content(report.validation_result.url, report.content, query=query)
    logger.info(
        "url analysed",
        extra={
            "url": url,
            "source_type": analysis.source_type,
            "credibility_score": analysis.credibility_score,
            "research_value": analysis.research_value,
        },
    )
    return AnalysisResult(
        scraped_content=report.content,
        enhanced_analysis=analysis,
        scraping_report=ReportOverview(
            success=report.success,
            summary=report.summary,
            errors=report.errors,
            warnings=report.warnings,
        ),
    )


async def stream_batch(
    scraper: WebScraper,
    urls: list[str],
) -> AsyncGenerator[dict[str, str], None]:
    """Yield SSE-formatted progress events while a batch scrape runs.

    The final ``summary`` event carries the cross-site aggregate; ``done``
    always closes the stream, after ``error`` if the batch blew up.
    """
    queue: asyncio.Queue[tuple[str, dict[str, Any]] | None] = asyncio.Queue()

    async def on_event(event: str, data: dict[str, Any]) -> None:
        await queue.put((event, data))

    async def run_and_signal_done() -> None:
        try:
            reports = await scraper.scrape_multiple_websites(urls, on_event=on_event)
            summary = scraper.generate_report_summary(reports)
            await queue.put(("summary", summary.model_dump(mode="json", by_alias=True)))
        except Exception:
            logger.exception("streaming batch failed", extra={"url_count": len(urls)})
            await queue.put(("error", {"message": "Batch scrape failed"}))
        finally:
            await queue.put(("done", {}))
            await queue.put(None)  # sentinel

    task = asyncio.create_task(run_and_signal_done())

    try:
        while True:
            item = await queue.get()
            if item is None:
                break
            event, data = item
            yield {"event": event, "data": json.dumps(data)}
    finally:
        if not task.done():
            task.cancel()
