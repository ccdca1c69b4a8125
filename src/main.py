"""FastAPI app entrypoint."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from src.api.routes import router
from src.config import get_settings
from src.logging_config import setup_logging
from src.scraper import WebScraper

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Logging first so startup itself is logged as JSON
    setup_logging(settings.log_level)
    logger.info("starting scraper service")

    client = httpx.AsyncClient(timeout=settings.scraper_timeout)
    app.state.settings = settings
    app.state.scraper = WebScraper(settings, client=client)

    logger.info(
        "scraper service ready",
        extra={
            "timeout_s": settings.scraper_timeout,
            "max_content_size": settings.scraper_max_content_size,
            "batch_concurrency": settings.scraper_batch_concurrency,
            "stream_size_limit": settings.scraper_stream_size_limit,
        },
    )

    yield

    logger.info("shutting down scraper service")
    await client.aclose()


app = FastAPI(title="Scraper Service", lifespan=lifespan)
app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
