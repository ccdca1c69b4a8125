"""Scraper exception hierarchy."""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for failures inside the scrape pipeline."""


class URLValidationError(ScraperError):
    """The input string is not a fetchable http(s) URL."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "Invalid URL")


class FetchError(ScraperError):
    """The page could not be retrieved or was rejected by a response guard."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ExtractionError(ScraperError):
    """The fetched document could not be parsed."""
