"""HTML parsing into the structured ``ScrapedContent`` page model.

Everything here is a pure function of the HTML string and the transport
metadata handed in by the caller; no network access happens in this module.
"""

from __future__ import annotations

import logging
import math
import re
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup, Tag

from .errors import ExtractionError
from .models import (
    Headings,
    ImageInfo,
    LinkInventory,
    PageMetadata,
    PageStructure,
    PerformanceSignals,
    ScrapedContent,
    SocialTags,
    TechnicalInfo,
)
from .validator import parse_url

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 200

_NOISE_TAGS = ["script", "style", "noscript", "iframe", "footer", "header", "nav", "aside"]
_NOISE_SELECTORS = (
    '[aria-hidden="true"], [hidden], .hidden, '
    ".popup, .modal, .overlay, .sidebar"
)
# Class/id tokens such as "ad", "ads", "ad-slot", "top_banner", "advertisement".
_AD_TOKEN_RE = re.compile(r"(?:^|[-_])(?:ads?|adverts?|advertisements?|banners?)(?:$|[-_])", re.IGNORECASE)

# Priority order: the first selector that matches wins.
MAIN_CONTENT_SELECTORS = (
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".main-content",
    ".post-content",
    ".entry-content",
    "#content",
    "#main",
)

_CDN_RE = re.compile(r"cdn|cloudflare|jsdelivr|unpkg|\.cloudfront\.net|\.fastly\.net", re.IGNORECASE)
_CHARSET_RE = re.compile(r"charset=([^;]+)", re.IGNORECASE)


def clean_text(text: str) -> str:
    """Collapse runs of whitespace and blank lines."""
    text = re.sub(r"\s\s+", " ", text)
    text = re.sub(r"\n\s*\n", "\n", text)
    return text.strip()


def _inline_text(tag: Tag) -> str:
    return " ".join(tag.get_text(" ").split())


def _is_ad(tag: Tag) -> bool:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = classes.split()
    ident = tag.get("id") or ""
    return any(_AD_TOKEN_RE.search(c) for c in classes) or bool(_AD_TOKEN_RE.search(ident))


def _strip_noise(soup: BeautifulSoup) -> None:
    doomed = soup.find_all(_NOISE_TAGS) + soup.select(_NOISE_SELECTORS) + soup.find_all(_is_ad)
    for tag in doomed:
        # Descendants of an already removed subtree are marked decomposed too
        if not tag.decomposed:
            tag.decompose()


def _meta(soup: BeautifulSoup, attrs: dict[str, str]) -> str | None:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    value = (tag.get("content") or "").strip()
    return value or None


def _first_meta(soup: BeautifulSoup, *candidates: dict[str, str]) -> str | None:
    for attrs in candidates:
        value = _meta(soup, attrs)
        if value:
            return value
    return None


def _main_text(soup: BeautifulSoup) -> str:
    for selector in MAIN_CONTENT_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            text = clean_text(element.get_text(" "))
            if text:
                return text
            break
    scope = soup.body or soup
    return clean_text(scope.get_text(" "))


def _title(soup: BeautifulSoup) -> str:
    for name in ("title", "h1"):
        tag = soup.find(name)
        if tag is not None:
            text = _inline_text(tag)
            if text:
                return text
    return ""


def _language(soup: BeautifulSoup) -> str | None:
    html_tag = soup.find("html")
    if html_tag is not None:
        lang = (html_tag.get("lang") or "").strip()
        if lang:
            return lang
    return _meta(soup, {"http-equiv": "content-language"})


def _keywords(soup: BeautifulSoup) -> list[str]:
    raw = _meta(soup, {"name": "keywords"}) or ""
    return [k.strip() for k in raw.split(",") if k.strip()]


def _resolve(base_url: str, ref: str) -> tuple[str, str | None] | None:
    """Resolve *ref* against *base_url* into ``(url, hostname)``.

    Returns ``None`` for results the validator would reject as malformed:
    bad characters in the host, a non-numeric port, or an http(s) URL
    without a host.
    """
    resolved = urljoin(base_url, ref)
    try:
        parts = parse_url(resolved)
    except ValueError:
        return None
    if parts.scheme.lower() in ("http", "https") and not parts.hostname:
        return None
    return resolved, parts.hostname


def _links(soup: BeautifulSoup, base_url: str) -> LinkInventory:
    base_host = urlsplit(base_url).hostname
    internal: list[str] = []
    external: list[str] = []

    for anchor in soup.find_all("a", href=True):
        href = anchor["href"].strip()
        if not href or href.startswith("#") or href.lower().startswith("javascript:"):
            continue
        resolved = _resolve(base_url, href)
        if resolved is None:
            continue
        link, host = resolved
        if host == base_host:
            internal.append(link)
        else:
            external.append(link)

    return LinkInventory(internal=internal, external=external, total=len(internal) + len(external))


def _optional_attr(tag: Tag, name: str) -> str | None:
    value = tag.get(name)
    return value.strip() if isinstance(value, str) else None


def _images(soup: BeautifulSoup, base_url: str) -> list[ImageInfo]:
    images: list[ImageInfo] = []
    for img in soup.find_all("img", src=True):
        src = img["src"].strip()
        if not src:
            continue
        resolved = _resolve(base_url, src)
        if resolved is None:
            continue
        images.append(
            ImageInfo(src=resolved[0], alt=_optional_attr(img, "alt"), title=_optional_attr(img, "title"))
        )
    return images


def _social(soup: BeautifulSoup) -> SocialTags:
    open_graph: dict[str, str] = {}
    for tag in soup.select('meta[property^="og:"]'):
        if tag.get("content"):
            open_graph[tag["property"]] = tag["content"]

    twitter_card: dict[str, str] = {}
    for tag in soup.select('meta[name^="twitter:"]'):
        if tag.get("content"):
            twitter_card[tag["name"]] = tag["content"]

    return SocialTags(open_graph=open_graph, twitter_card=twitter_card)


def _structure(soup: BeautifulSoup) -> PageStructure:
    headings = Headings(
        **{
            level: [_inline_text(h) for h in soup.find_all(level)]
            for level in ("h1", "h2", "h3", "h4", "h5", "h6")
        }
    )
    return PageStructure(
        headings=headings,
        paragraphs=len(soup.find_all("p")),
        lists=len(soup.find_all(["ul", "ol"])),
        tables=len(soup.find_all("table")),
        forms=len(soup.find_all("form")),
    )


def _charset(soup: BeautifulSoup, content_type: str) -> str | None:
    tag = soup.find("meta", charset=True)
    if tag is not None and tag["charset"].strip():
        return tag["charset"].strip()
    match = _CHARSET_RE.search(content_type)
    return match.group(1).strip() if match else None


def extract_content(
    html: str,
    url: str,
    *,
    status_code: int = 200,
    response_time: float = 0.0,
    load_time: float = 0.0,
    content_length: int = 0,
    content_type: str = "text/html",
) -> ScrapedContent:
    """Parse *html* fetched from *url* into a ``ScrapedContent``.

    Lazy-loading, resource and CDN signals are read from the untouched
    document; everything else is read after noise (scripts, navigation,
    ads, hidden elements...) has been removed.

    Raises:
        ExtractionError: the parser could not build a tree from *html*.
    """
    try:
        soup = BeautifulSoup(html, "html.parser")
    except Exception as exc:
        raise ExtractionError(f"Failed to parse HTML: {exc}") from exc

    performance = PerformanceSignals(
        load_time=load_time,
        resource_count=len(soup.select("link, script, img, video, audio")),
        has_lazy_loading=soup.select_one('[loading="lazy"]') is not None,
        has_cdn=bool(_CDN_RE.search(html)),
    )

    _strip_noise(soup)

    content = _main_text(soup)
    word_count = len(content.split())

    metadata = PageMetadata(
        author=_first_meta(soup, {"name": "author"}, {"property": "article:author"}),
        publish_date=_first_meta(
            soup,
            {"property": "article:published_time"},
            {"name": "date"},
            {"property": "datePublished"},
        ),
        modified_date=_first_meta(
            soup,
            {"property": "article:modified_time"},
            {"name": "last-modified"},
        ),
        language=_language(soup),
        keywords=_keywords(soup),
        word_count=word_count,
        reading_time=math.ceil(word_count / WORDS_PER_MINUTE),
    )

    result = ScrapedContent(
        url=url,
        title=_title(soup),
        description=_first_meta(soup, {"name": "description"}, {"property": "og:description"}),
        content=content,
        metadata=metadata,
        links=_links(soup, url),
        images=_images(soup, url),
        social=_social(soup),
        technical=TechnicalInfo(
            status_code=status_code,
            response_time=response_time,
            content_type=content_type,
            size=content_length,
            charset=_charset(soup, content_type),
        ),
        structure=_structure(soup),
        performance=performance,
    )
    logger.debug(
        "content extracted",
        extra={
            "url": url,
            "word_count": word_count,
            "links": result.links.total,
            "images": len(result.images),
        },
    )
    return result
