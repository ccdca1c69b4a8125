"""Test data builders: sample pages, mocked transports and report factories."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import httpx

from src.scraper.models import (
    Headings,
    ImageInfo,
    PageMetadata,
    PageStructure,
    PerformanceSignals,
    ReportSummary,
    ScrapedContent,
    ScrapingReport,
    TechnicalInfo,
    URLValidationResult,
)

API_KEY = "test-secret-key"

ARTICLE_URL = "https://example.com/blog/post"

ARTICLE_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Understanding Async Python</title>
  <meta name="description" content="A practical guide to asyncio.">
  <meta name="author" content="Jane Doe">
  <meta property="article:published_time" content="2024-03-01T10:00:00Z">
  <meta name="date" content="2020-01-01">
  <meta property="article:modified_time" content="2024-03-05T10:00:00Z">
  <meta name="keywords" content="python, asyncio, , concurrency">
  <meta property="og:title" content="Async Python">
  <meta property="og:type" content="article">
  <meta name="twitter:card" content="summary">
  <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/theme.css">
  <script src="/app.js"></script>
</head>
<body>
  <header><h1>Site Header</h1></header>
  <nav><a href="/nav-link">Nav</a></nav>
  <div class="ad-slot">Buy stuff</div>
  <div id="top_banner">Banner text</div>
  <div class="popup">Subscribe now</div>
  <div aria-hidden="true">Hidden text</div>
  <main>
    <p>Main wrapper text.</p>
    <article>
      <h1>Understanding Async Python</h1>
      <p class="read-more">Asyncio lets you write concurrent code.</p>
      <h2>Event loops</h2>
      <p>The event loop schedules <b>coroutines</b>.</p>
      <ul><li>One</li></ul>
      <ol><li>Two</li></ol>
      <table><tr><td>cell</td></tr></table>
      <a href="/docs/intro">Intro</a>
      <a href="https://example.com/other">Same host</a>
      <a href="https://other.org/page">Elsewhere</a>
      <a href="#section">Skip</a>
      <a href="javascript:void(0)">JS</a>
      <a href="http://[::1">Broken</a>
      <img src="/img/a.png" alt="Diagram">
      <img src="b.png" title="No alt" loading="lazy">
    </article>
  </main>
  <aside>Related</aside>
  <form><input name="q"></form>
  <footer>Footer text</footer>
</body>
</html>
"""

Handler = Callable[[httpx.Request], httpx.Response]



def mock_client(handler: Handler) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by *handler* instead of the network."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def html_page(body: str = ARTICLE_HTML, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, html=body)


def make_content(
    *,
    url: str = "https://example.com/",
    title: str = "A good title",
    description: str | None = "A short description",
    word_count: int = 700,
    h1: tuple[str, ...] = ("Main heading",),
    h2: tuple[str, ...] = (),
    images: tuple[ImageInfo, ...] = (),
    language: str | None = "en",
    has_lazy_loading: bool = False,
    has_cdn: bool = True,
    status_code: int = 200,
    response_time: float = 120.0,
    content: str = "",
    **metadata,
) -> ScrapedContent:
    return ScrapedContent(
        url=url,
        title=title,
        description=description,
        content=content,
        metadata=PageMetadata(language=language, word_count=word_count, **metadata),
        images=list(images),
        technical=TechnicalInfo(status_code=status_code, response_time=response_time, content_type="text/html"),
        structure=PageStructure(headings=Headings(h1=list(h1), h2=list(h2))),
        performance=PerformanceSignals(has_lazy_loading=has_lazy_loading, has_cdn=has_cdn),
    )


def make_report(
    url: str = "https://example.com/",
    *,
    success: bool = True,
    seo_score: int = 100,
    accessibility_score: int = 100,
    technical_issues: tuple[str, ...] = (),
) -> ScrapingReport:
    return ScrapingReport(
        url=url,
        timestamp=datetime(2026, 1, 1, tzinfo=timezone.utc),
        success=success,
        validation_result=URLValidationResult(is_valid=True, url=url, protocol="https", domain="example.com"),
        content=make_content(url=url) if success else None,
        errors=[] if success else ["HTTP 500: Internal Server Error"],
        summary=ReportSummary(
            content_quality="excellent" if success else "poor",
            seo_score=seo_score if success else 0,
            accessibility_score=accessibility_score if success else 0,
            technical_issues=list(technical_issues),
        ),
    )
