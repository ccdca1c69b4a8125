"""URL normalisation and sanity checks, run before any network access."""

from __future__ import annotations

import logging
import re
from urllib.parse import SplitResult, urlsplit

from .models import URLValidationResult

logger = logging.getLogger(__name__)

_VALID_SCHEMES = {"http", "https"}
_MAX_HOSTNAME_LENGTH = 253

_HTTP_PREFIX_RE = re.compile(r"^https?://", re.IGNORECASE)
_EXPLICIT_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*://")
_BAD_NETLOC_CHARS_RE = re.compile(r"[\x00-\x20\x7f<>\"{}|\\^`]")

PROTOCOL_ADDED_WARNING = "Protocol added (defaulted to HTTPS)"
LOCALHOST_WARNING = "Localhost detected - may not be accessible"


def parse_url(url: str) -> SplitResult:
    """Split *url*, raising ``ValueError`` for anything a browser would refuse."""
    parts = urlsplit(url)
    if _BAD_NETLOC_CHARS_RE.search(parts.netloc):
        raise ValueError(f"invalid character in host {parts.netloc!r}")
    # Accessing .port validates it
    _ = parts.port
    return parts


def validate_url(raw: str) -> URLValidationResult:
    """Normalise *raw* into an absolute http(s) URL and report problems.

    Never raises: malformed input produces ``is_valid=False`` with a
    descriptive error.
    """
    errors: list[str] = []
    warnings: list[str] = []

    normalized = (raw or "").strip()
    if not _HTTP_PREFIX_RE.match(normalized) and not _EXPLICIT_SCHEME_RE.match(normalized):
        normalized = "https://" + normalized
        warnings.append(PROTOCOL_ADDED_WARNING)

    try:
        parts = parse_url(normalized)
    except ValueError as exc:
        logger.debug("url parse failed", extra={"url": raw, "reason": str(exc)})
        return URLValidationResult(
            is_valid=False,
            url=raw,
            errors=[f"Invalid URL format: {exc}"],
            warnings=warnings,
        )

    scheme = parts.scheme.lower()
    hostname = parts.hostname or ""

    if scheme not in _VALID_SCHEMES:
        errors.append("Invalid protocol. Only HTTP and HTTPS are supported")

    if not hostname:
        errors.append("Invalid domain name")

    if "localhost" in hostname or "127.0.0.1" in hostname:
        warnings.append(LOCALHOST_WARNING)

    if len(hostname) > _MAX_HOSTNAME_LENGTH:
        errors.append("Domain name too long")

    return URLValidationResult(
        is_valid=not errors,
        url=normalized,
        protocol=scheme,
        domain=hostname,
        errors=errors,
        warnings=warnings,
    )
