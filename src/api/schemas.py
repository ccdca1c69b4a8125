"""Request/response Pydantic models."""

from datetime import datetime
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.scraper.models import (
    BatchSummary,
    EnhancedAnalysis,
    ReportSummary,
    ScrapedContent,
    ScrapingReport,
    URLValidationResult,
)

ScrapeTask = Literal["scrape-single", "scrape-multiple", "validate-urls"]


class ScrapeRequest(BaseModel):
    url: str | list[str] = Field(validation_alias=AliasChoices("url", "urls"))
    task: ScrapeTask = "scrape-single"

    @property
    def urls(self) -> list[str]:
        return self.url if isinstance(self.url, list) else [self.url]


class StreamScrapeRequest(BaseModel):
    urls: list[str] = Field(min_length=1)


class AnalyzeRequest(BaseModel):
    url: str
    query: str | None = None


class _Response(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UrlValidation(_Response):
    url: str
    validation: URLValidationResult


class ValidationBatch(_Response):
    validations: list[UrlValidation]
    timestamp: datetime


class BatchResult(_Response):
    reports: list[ScrapingReport]
    summary: BatchSummary
    timestamp: datetime


class ReportOverview(_Response):
    success: bool
    summary: ReportSummary
    errors: list[str] = []
    warnings: list[str] = []


class AnalysisResult(_Response):
    scraped_content: ScrapedContent
    enhanced_analysis: EnhancedAnalysis
    scraping_report: ReportOverview


class ErrorResponse(BaseModel):
    error: str
    details: str | list[str] | None = None
