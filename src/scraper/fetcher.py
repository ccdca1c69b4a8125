"""Single bounded HTTP GET with size and content-type guards."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

import httpx

from src.config import DEFAULT_USER_AGENT

from .errors import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_CONTENT_SIZE = 10 * 1024 * 1024

_HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


@dataclass(frozen=True)
class FetchedPage:
    """Raw HTML plus the transport metadata the extractor needs."""

    url: str
    final_url: str
    status_code: int
    content_type: str
    content_length: int
    html: str
    response_time: float  # ms until response headers arrived
    charset: str | None = None


def build_headers(user_agent: str = DEFAULT_USER_AGENT) -> dict[str, str]:
    """Browser-like request headers, enough to get past trivial bot blocking."""
    return {
        "User-Agent": user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
        "Accept-Encoding": "gzip, deflate, br",
        "DNT": "1",
        "Connection": "keep-alive",
        "Upgrade-Insecure-Requests": "1",
    }


def _declared_length(response: httpx.Response) -> int:
    try:
        return max(0, int(response.headers.get("content-length") or 0))
    except ValueError:
        return 0


def _check_response(response: httpx.Response, max_content_size: int) -> None:
    """Reject the response from its status line and headers alone."""
    if not response.is_success:
        raise FetchError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            status_code=response.status_code,
        )

    content_length = _declared_length(response)
    if content_length > max_content_size:
        raise FetchError(
            f"Content too large: {content_length} bytes (max: {max_content_size} bytes)",
            status_code=response.status_code,
        )

    content_type = response.headers.get("content-type", "")
    if not any(t in content_type.lower() for t in _HTML_CONTENT_TYPES):
        raise FetchError(
            f"Unsupported content type: {content_type or 'unknown'}",
            status_code=response.status_code,
        )


async def _read_body(response: httpx.Response, limit: int | None) -> bytes:
    if limit is None:
        return await response.aread()

    chunks: list[bytes] = []
    received = 0
    async for chunk in response.aiter_bytes():
        received += len(chunk)
        if received > limit:
            raise FetchError(
                f"Content too large: more than {limit} bytes received (max: {limit} bytes)",
                status_code=response.status_code,
            )
        chunks.append(chunk)
    return b"".join(chunks)


def _decode(body: bytes, encoding: str | None) -> str:
    try:
        return body.decode(encoding or "utf-8", errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


async def _get(
    client: httpx.AsyncClient,
    url: str,
    headers: dict[str, str],
    max_content_size: int,
    stream_size_limit: bool,
) -> FetchedPage:
    started = time.perf_counter()
    async with client.stream("GET", url, headers=headers, follow_redirects=True) as response:
        response_time = (time.perf_counter() - started) * 1000
        _check_response(response, max_content_size)
        body = await _read_body(response, max_content_size if stream_size_limit else None)

        declared = _declared_length(response)
        return FetchedPage(
            url=url,
            final_url=str(response.url),
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
            content_length=declared or len(body),
            html=_decode(body, response.encoding),
            response_time=response_time,
            charset=response.charset_encoding,
        )


async def fetch_page(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    max_content_size: int = DEFAULT_MAX_CONTENT_SIZE,
    user_agent: str = DEFAULT_USER_AGENT,
    stream_size_limit: bool = False,
) -> FetchedPage:
    """Fetch *url* once, without retries.

    The whole exchange is bounded by *timeout*. Only the ``Content-Length``
    header is checked against *max_content_size* unless *stream_size_limit*
    is set, in which case the body is also counted while it is read.

    Raises:
        FetchError: non-2xx status, timeout, oversized or non-HTML response,
            or any transport failure.
    """
    logger.debug("fetching", extra={"url": url})
    try:
        page = await asyncio.wait_for(
            _get(client, url, build_headers(user_agent), max_content_size, stream_size_limit),
            timeout=timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
        raise FetchError(f"Request timed out after {timeout:g}s") from exc
    except httpx.HTTPError as exc:
        raise FetchError(f"Request failed: {str(exc) or type(exc).__name__}") from exc

    logger.debug(
        "fetched",
        extra={
            "url": url,
            "status_code": page.status_code,
            "bytes": page.content_length,
            "elapsed_ms": round(page.response_time, 1),
        },
    )
    return page
