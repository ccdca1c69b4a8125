"""POST /scrape, GET /scrape/validate, POST /scrape/stream, POST /analyze handlers."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sse_starlette.sse import EventSourceResponse

from src.api.schemas import AnalyzeRequest, ErrorResponse, ScrapeRequest, StreamScrapeRequest
from src.api.service import AnalysisFailed, analyze_url, run_scrape_task, stream_batch
from src.auth.dependencies import require_api_key
from src.scraper import WebScraper

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_api_key)])


def _get_scraper(request: Request) -> WebScraper:
    return request.app.state.scraper


def _error(status_code: int, error: str, details: str | list[str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error, details=details).model_dump(),
    )


@router.post("/scrape")
async def scrape(
    body: ScrapeRequest,
    scraper: WebScraper = Depends(_get_scraper),
):
    try:
        result = await run_scrape_task(scraper, body)
    except ValueError as exc:
        return _error(422, "Invalid scraping request", str(exc))
    except Exception as exc:
        logger.exception("scrape request failed", extra={"task": body.task})
        return _error(500, "Failed to process scraping request", str(exc) or "Unknown error")
    return {"success": True, "data": result}


@router.get("/scrape/validate")
async def validate(
    url: str = Query(..., min_length=1),
    scraper: WebScraper = Depends(_get_scraper),
):
    return {"validation": scraper.validate_url(url)}


@router.post("/scrape/stream")
async def scrape_stream(
    body: StreamScrapeRequest,
    scraper: WebScraper = Depends(_get_scraper),
):
    return EventSourceResponse(stream_batch(scraper, body.urls))


@router.post("/analyze")
async def analyze(
    body: AnalyzeRequest,
    scraper: WebScraper = Depends(_get_scraper),
):
    try:
        result = await analyze_url(scraper, body.url, body.query)
    except AnalysisFailed as exc:
        return _error(400, "Failed to scrape website", exc.report.errors)
    except Exception as exc:
        logger.exception("analysis request failed", extra={"url": body.url})
        return _error(500, "Internal server error", str(exc) or "Unknown error")
    return {"success": True, "data": result}
