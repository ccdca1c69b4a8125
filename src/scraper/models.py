"""Data models for validation results, page content and reports.

Attributes are snake_case in Python; the JSON wire form uses camelCase
aliases (``isValid``, ``validationResult``, ``seoScore``...) because that is
the shape downstream consumers read.

Models are frozen all the way down: sequences are tuples and tag maps are
read-only mappings, so a returned report cannot be edited in place. Both
still serialize as JSON arrays and objects.
"""

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Annotated, Literal, Mapping

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

ContentQuality = Literal["excellent", "good", "fair", "poor"]
Level = Literal["high", "medium", "low"]

# Read-only str -> str mapping, dumped as a plain dict
TagMap = Annotated[
    dict[str, str],
    AfterValidator(MappingProxyType),
    PlainSerializer(dict, return_type=dict[str, str]),
]


def _empty_tags() -> Mapping[str, str]:
    return MappingProxyType({})


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class URLValidationResult(_Model):
    is_valid: bool
    url: str
    protocol: str = ""
    domain: str = ""
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


class PageMetadata(_Model):
    author: str | None = None
    publish_date: str | None = None
    modified_date: str | None = None
    language: str | None = None
    keywords: tuple[str, ...] = ()
    word_count: int = 0
    reading_time: int = 0


class LinkInventory(_Model):
    internal: tuple[str, ...] = ()
    external: tuple[str, ...] = ()
    total: int = 0


class ImageInfo(_Model):
    src: str
    alt: str | None = None
    title: str | None = None


class SocialTags(_Model):
    open_graph: TagMap = Field(default_factory=_empty_tags)
    twitter_card: TagMap = Field(default_factory=_empty_tags)


class TechnicalInfo(_Model):
    status_code: int
    response_time: float
    content_type: str = ""
    size: int = 0
    charset: str | None = None


class Headings(_Model):
    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()
    h4: tuple[str, ...] = ()
    h5: tuple[str, ...] = ()
    h6: tuple[str, ...] = ()


class PageStructure(_Model):
    headings: Headings = Field(default_factory=Headings)
    paragraphs: int = 0
    lists: int = 0
    tables: int = 0
    forms: int = 0


class PerformanceSignals(_Model):
    load_time: float = 0.0
    resource_count: int = 0
    has_lazy_loading: bool = False
    has_cdn: bool = False


class ScrapedContent(_Model):
    """Structured model of a single parsed HTML page."""

    url: str
    title: str = ""
    description: str | None = None
    content: str = ""
    metadata: PageMetadata = Field(default_factory=PageMetadata)
    links: LinkInventory = Field(default_factory=LinkInventory)
    images: tuple[ImageInfo, ...] = ()
    social: SocialTags = Field(default_factory=SocialTags)
    technical: TechnicalInfo
    structure: PageStructure = Field(default_factory=PageStructure)
    performance: PerformanceSignals = Field(default_factory=PerformanceSignals)


class ReportSummary(_Model):
    content_quality: ContentQuality = "poor"
    seo_score: int = Field(default=0, ge=0, le=100)
    accessibility_score: int = Field(default=0, ge=0, le=100)
    technical_issues: tuple[str, ...] = ()
    recommendations: tuple[str, ...] = ()


class ScrapingReport(_Model):
    """Self-contained result of analysing one URL, produced even on failure."""

    url: str
    timestamp: datetime
    success: bool = False
    validation_result: URLValidationResult
    content: ScrapedContent | None = None
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    summary: ReportSummary = Field(default_factory=ReportSummary)


class BatchSummary(_Model):
    total_sites: int = 0
    successful: int = 0
    failed: int = 0
    average_seo_score: float = 0.0
    average_accessibility_score: float = 0.0
    common_issues: tuple[str, ...] = ()
    overall_quality: ContentQuality = "poor"


# --- Research analysis ---


class BiasAnalysis(_Model):
    political_lean: Literal["left", "center", "right", "unknown"] = "unknown"
    bias_level: Level = "medium"
    emotional_tone: Literal["neutral", "positive", "negative"] = "neutral"
    objectivity_score: float = 50.0


class FactCheckResults(_Model):
    claims: tuple[str, ...] = ()
    verifiability: Level = "low"
    sources_mentioned: int = 0
    citations_found: bool = False


class ContentQualityScores(_Model):
    depth_score: int = 0
    accuracy_score: int = 0
    uniqueness_score: int = 0
    timestamp: datetime


class EnhancedAnalysis(_Model):
    credibility_score: int = 0
    relevance_score: int = 0
    key_insights: tuple[str, ...] = ()
    research_value: Level = "low"
    suggested_tags: tuple[str, ...] = ()
    related_topics: tuple[str, ...] = ()
    source_type: Literal[
        "academic", "news", "blog", "documentation", "ecommerce", "government", "other"
    ] = "other"
    reading_difficulty: Literal["easy", "medium", "hard"] = "medium"
    bias_analysis: BiasAnalysis = Field(default_factory=BiasAnalysis)
    fact_check_results: FactCheckResults = Field(default_factory=FactCheckResults)
    content_quality: ContentQualityScores
    recommendations: tuple[str, ...] = ()
