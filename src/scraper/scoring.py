"""Content-quality tier, SEO and accessibility scoring of extracted pages."""

from __future__ import annotations

from dataclasses import dataclass, field

from .models import ContentQuality, ReportSummary, ScrapedContent

SLOW_RESPONSE_MS = 5000
TITLE_MAX_CHARS = 60
DESCRIPTION_MAX_CHARS = 160
ALT_PENALTY_PER_IMAGE = 2
ALT_PENALTY_CAP = 15
LAZY_LOADING_IMAGE_THRESHOLD = 5


def quality_tier(value: float, thresholds: tuple[float, float, float]) -> ContentQuality:
    """Map *value* onto poor/fair/good/excellent using ascending *thresholds*."""
    poor, fair, good = thresholds
    if value < poor:
        return "poor"
    if value < fair:
        return "fair"
    if value < good:
        return "good"
    return "excellent"


def clamp_score(score: int) -> int:
    return max(0, min(100, score))


@dataclass
class _Findings:
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def add(self, issue: str | None = None, recommendation: str | None = None) -> None:
        if issue and issue not in self.issues:
            self.issues.append(issue)
        if recommendation and recommendation not in self.recommendations:
            self.recommendations.append(recommendation)


def _score_content(content: ScrapedContent, findings: _Findings) -> ContentQuality:
    tier = quality_tier(content.metadata.word_count, (100, 300, 600))
    if tier == "poor":
        findings.add(
            "Content is too short",
            "Add more substantive content (minimum 300 words recommended)",
        )
    elif tier == "fair":
        findings.add(
            "Content could be more comprehensive",
            "Consider expanding the content to provide more value",
        )
    return tier


def _score_seo(content: ScrapedContent, findings: _Findings) -> int:
    score = 100

    if not content.title:
        score -= 20
        findings.add("Missing page title", "Add a descriptive title tag")
    elif len(content.title) > TITLE_MAX_CHARS:
        score -= 10
        findings.add(
            "Title too long for SEO",
            f"Keep title under {TITLE_MAX_CHARS} characters for optimal display",
        )

    if not content.description:
        score -= 15
        findings.add(
            "Missing meta description",
            "Add a compelling meta description (150-160 characters)",
        )
    elif len(content.description) > DESCRIPTION_MAX_CHARS:
        score -= 5
        findings.add(
            "Meta description too long",
            f"Keep meta description under {DESCRIPTION_MAX_CHARS} characters",
        )

    h1_count = len(content.structure.headings.h1)
    if h1_count == 0:
        score -= 15
        findings.add("Missing H1 tag", "Add a single H1 tag for the main topic")
    elif h1_count > 1:
        score -= 10
        findings.add("Multiple H1 tags", "Use only one H1 tag per page")

    missing_alt = sum(1 for img in content.images if not img.alt)
    if missing_alt:
        score -= min(ALT_PENALTY_CAP, missing_alt * ALT_PENALTY_PER_IMAGE)
        findings.add(
            f"{missing_alt} images missing alt text",
            "Add descriptive alt text to all images",
        )

    return clamp_score(score)


def _score_accessibility(content: ScrapedContent, findings: _Findings) -> int:
    score = 100

    if not content.metadata.language:
        score -= 10
        findings.add("Missing language attribute", "Add lang attribute to html tag")

    if len(content.structure.headings.h1) > 1:
        score -= 10
        findings.add("Multiple H1 tags affect accessibility", "Use only one H1 tag per page")

    if not content.performance.has_lazy_loading and len(content.images) > LAZY_LOADING_IMAGE_THRESHOLD:
        score -= 5
        findings.add("Consider lazy loading for better performance")

    return clamp_score(score)


def _capture_technical(content: ScrapedContent, findings: _Findings, slow_response_ms: float) -> None:
    if content.technical.status_code >= 400:
        findings.add(f"HTTP Error: {content.technical.status_code}")

    if content.technical.response_time > slow_response_ms:
        findings.add("Slow response time", "Optimize server response time")

    if not content.performance.has_cdn:
        findings.add(recommendation="Consider using a CDN for better performance")


def generate_summary(content: ScrapedContent, *, slow_response_ms: float = SLOW_RESPONSE_MS) -> ReportSummary:
    """Score *content*; always returns a fully populated summary."""
    findings = _Findings()
    content_quality = _score_content(content, findings)
    seo_score = _score_seo(content, findings)
    accessibility_score = _score_accessibility(content, findings)
    _capture_technical(content, findings, slow_response_ms)

    return ReportSummary(
        content_quality=content_quality,
        seo_score=seo_score,
        accessibility_score=accessibility_score,
        technical_issues=findings.issues,
        recommendations=findings.recommendations,
    )
