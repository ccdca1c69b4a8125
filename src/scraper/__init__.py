"""Web content extraction and quality-scoring engine."""

from __future__ import annotations

from .analysis import analyze_content
from .batch import generate_report_summary, scrape_multiple, split_windows
from .engine import WebScraper
from .errors import ExtractionError, FetchError, ScraperError, URLValidationError
from .extractor import extract_content
from .fetcher import FetchedPage, fetch_page
from .models import (
    BatchSummary,
    EnhancedAnalysis,
    ReportSummary,
    ScrapedContent,
    ScrapingReport,
    URLValidationResult,
)
from .scoring import generate_summary
from .validator import validate_url

__all__ = [
    "BatchSummary",
    "EnhancedAnalysis",
    "ExtractionError",
    "FetchError",
    "FetchedPage",
    "ReportSummary",
    "ScrapedContent",
    "ScraperError",
    "ScrapingReport",
    "URLValidationError",
    "URLValidationResult",
    "WebScraper",
    "analyze_content",
    "extract_content",
    "fetch_page",
    "generate_report_summary",
    "generate_summary",
    "scrape_multiple",
    "split_windows",
    "validate_url",
]
