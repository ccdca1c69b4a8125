"""WebScraper: the validate, fetch, extract and score pipeline."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Sequence

import httpx

from src.config import Settings

from .analysis import analyze_content
from .batch import EventCallback, generate_report_summary, scrape_multiple
from .errors import ScraperError, URLValidationError
from .extractor import extract_content
from .fetcher import FetchedPage, fetch_page
from .models import (
    BatchSummary,
    EnhancedAnalysis,
    ScrapedContent,
    ScrapingReport,
    URLValidationResult,
)
from .scoring import generate_summary
from .validator import validate_url

logger = logging.getLogger(__name__)


class WebScraper:
    """Scrapes and scores web pages.

    Holds configuration and an optional shared ``httpx.AsyncClient`` only;
    nothing about previous scrapes is retained, so one instance can serve
    concurrent calls. Without an injected client each fetch opens its own.
    """

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._client = client

    def validate_url(self, url: str) -> URLValidationResult:
        return validate_url(url)

    async def _fetch(self, url: str) -> FetchedPage:
        kwargs = dict(
            timeout=self._settings.scraper_timeout,
            max_content_size=self._settings.scraper_max_content_size,
            user_agent=self._settings.scraper_user_agent,
            stream_size_limit=self._settings.scraper_stream_size_limit,
        )
        if self._client is not None:
            return await fetch_page(self._client, url, **kwargs)
        async with httpx.AsyncClient(timeout=self._settings.scraper_timeout) as client:
            return await fetch_page(client, url, **kwargs)

    async def scrape_website(self, url: str) -> ScrapingReport:
        """Scrape a single URL. Never raises; failures land in ``report.errors``."""
        started = time.perf_counter()
        timestamp = datetime.now(timezone.utc)
        validation = validate_url(url)

        def failed(errors: list[str]) -> ScrapingReport:
            return ScrapingReport(
                url=url,
                timestamp=timestamp,
                success=False,
                validation_result=validation,
                content=None,
                errors=errors,
                warnings=validation.warnings,
            )

        try:
            if not validation.is_valid:
                raise URLValidationError(validation.errors)

            page = await self._fetch(validation.url)
            content = extract_content(
                page.html,
                validation.url,
                status_code=page.status_code,
                response_time=page.response_time,
                load_time=(time.perf_counter() - started) * 1000,
                content_length=page.content_length,
                content_type=page.content_type,
            )
            summary = generate_summary(content, slow_response_ms=self._settings.scraper_slow_response_ms)
        except URLValidationError as exc:
            logger.info("url rejected", extra={"url": url, "errors": exc.errors})
            return failed(exc.errors)
        except ScraperError as exc:
            logger.warning("scrape failed", extra={"url": url, "error": str(exc)})
            return failed([str(exc)])
        except Exception as exc:
            logger.exception("unexpected scrape failure", extra={"url": url})
            return failed([str(exc) or "Unknown error occurred"])

        logger.info(
            "scrape completed",
            extra={
                "url": validation.url,
                "status_code": page.status_code,
                "word_count": content.metadata.word_count,
                "seo_score": summary.seo_score,
                "accessibility_score": summary.accessibility_score,
                "elapsed_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return ScrapingReport(
            url=url,
            timestamp=timestamp,
            success=True,
            validation_result=validation,
            content=content,
            errors=[],
            warnings=validation.warnings,
            summary=summary,
        )

    async def scrape_multiple_websites(
        self,
        urls: Sequence[str],
        on_event: EventCallback | None = None,
    ) -> list[ScrapingReport]:
        """Scrape *urls* in fixed concurrent windows; one report per URL, in order."""
        return await scrape_multiple(
            self.scrape_website,
            urls,
            window_size=self._settings.scraper_batch_concurrency,
            on_event=on_event,
        )

    @staticmethod
    def generate_report_summary(reports: Sequence[ScrapingReport]) -> BatchSummary:
        return generate_report_summary(reports)

    @staticmethod
    def analyze_content(url: str, content: ScrapedContent, query: str | None = None) -> EnhancedAnalysis:
        return analyze_content(url, content, query=query)
