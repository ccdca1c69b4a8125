"""Heuristic research analysis of scraped pages.

Scores a page's credibility, bias, verifiability and depth from its
extracted model alone. Everything is keyword and structure based; no model
calls are made, so results are deterministic for a fixed ``now``.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from urllib.parse import urlsplit

from .models import (
    BiasAnalysis,
    ContentQualityScores,
    EnhancedAnalysis,
    FactCheckResults,
    ScrapedContent,
)

REPUTABLE_NEWS_SOURCES = (
    "bbc", "cnn", "reuters", "ap", "npr", "wsj", "nytimes", "washingtonpost",
    "theguardian", "economist", "bloomberg", "associatedpress",
)

_CITATION_PATTERNS = (
    re.compile(r"\[\d+\]"),
    re.compile(r"\(\d{4}\)"),
    re.compile(r"https?://\S+"),
    re.compile(r"doi:", re.IGNORECASE),
    re.compile(r"source:", re.IGNORECASE),
    re.compile(r"reference:", re.IGNORECASE),
)
_SPAM_PHRASES = ("click here", "buy now", "limited time", "act now", "free money")
_INSIGHT_MARKERS = ("important", "key", "significant", "critical", "essential", "main")

_LEFT_INDICATORS = ("progressive", "liberal", "democrat", "equality", "social justice")
_RIGHT_INDICATORS = ("conservative", "republican", "traditional", "free market", "individual rights")
_POSITIVE_WORDS = ("good", "great", "excellent", "amazing", "wonderful", "fantastic")
_NEGATIVE_WORDS = ("bad", "terrible", "awful", "horrible", "disgusting", "disappointing")
_OPINION_WORDS = ("think", "believe", "feel", "opinion", "subjectively")
_FACT_PHRASES = ("according to", "research shows", "data indicates", "evidence suggests")

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_STRONG_STATEMENT_RE = re.compile(r"\b(all|every|always|never|proven|guaranteed|certainly)\b", re.IGNORECASE)

_SOURCE_TYPE_VALUE = {
    "academic": 30,
    "government": 25,
    "news": 20,
    "documentation": 15,
    "blog": 10,
    "ecommerce": 5,
    "other": 5,
}


def _sentences(text: str) -> list[str]:
    return _SENTENCE_SPLIT_RE.split(text)


def _count_words(text: str, words: tuple[str, ...]) -> int:
    return sum(len(re.findall(rf"\b{re.escape(w)}\b", text, re.IGNORECASE)) for w in words)


def _parse_date(value: str) -> datetime | None:
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def has_citations(content: ScrapedContent) -> bool:
    return any(p.search(content.content) for p in _CITATION_PATTERNS)


def has_spam_indicators(content: ScrapedContent) -> bool:
    text = content.content.lower()
    word_count = content.metadata.word_count
    return (
        any(phrase in text for phrase in _SPAM_PHRASES)
        or len(content.content) < 100
        or 0 < word_count < 50
    )


def determine_source_type(content: ScrapedContent, url: str) -> str:
    domain = (urlsplit(url).hostname or "").lower()
    author = content.metadata.author or ""
    og_type = content.social.open_graph.get("og:type") or content.social.open_graph.get("type")

    if ".gov" in domain or ".edu" in domain:
        return "government"
    if any(k in domain for k in ("academic", "journal", "research")) or "PhD" in author or "Dr." in author:
        return "academic"
    if any(k in domain for k in ("news", "times", "post", "herald", "tribune", "gazette")) or og_type == "article":
        return "news"
    if any(k in domain for k in ("docs", "documentation", "dev")) or any(
        "documentation" in h.lower() for h in content.structure.headings.h1
    ):
        return "documentation"
    if any(k in domain for k in ("shop", "store", "amazon", "ebay")) or og_type == "product":
        return "ecommerce"
    if any(k in domain for k in ("blog", "medium", "substack")) or author:
        return "blog"
    return "other"


def calculate_credibility_score(content: ScrapedContent, url: str, now: datetime) -> int:
    score = 50
    domain = (urlsplit(url).hostname or "").lower()

    if ".gov" in domain or ".edu" in domain:
        score += 25
    elif ".org" in domain:
        score += 15
    elif any(source in domain for source in REPUTABLE_NEWS_SOURCES):
        score += 20

    if content.metadata.author:
        score += 15

    published = _parse_date(content.metadata.publish_date) if content.metadata.publish_date else None
    if published is not None:
        age_days = (now - published).total_seconds() / 86400
        if age_days <= 30:
            score += 10
        elif age_days <= 365:
            score += 5

    if content.metadata.word_count > 1000:
        score += 10
    if len(content.structure.headings.h2) > 3:
        score += 5
    if len(content.links.external) > 5:
        score += 5
    if has_citations(content):
        score += 15

    if content.technical.status_code >= 400:
        score -= 10
    if content.technical.response_time > 5000:
        score -= 5
    if "spam" in domain or has_spam_indicators(content):
        score -= 20

    return max(0, min(100, score))


def analyze_reading_difficulty(content: ScrapedContent) -> str:
    text = content.content
    sentences = [s for s in _sentences(text) if s.strip()]
    words = text.split()
    if not sentences or not words:
        return "medium"

    avg_sentence_length = sum(len(s.split()) for s in sentences) / len(sentences)
    complex_ratio = sum(1 for w in words if len(w) > 6) / len(words)

    if avg_sentence_length < 15 and complex_ratio < 0.15:
        return "easy"
    if avg_sentence_length < 25 and complex_ratio < 0.25:
        return "medium"
    return "hard"


def extract_key_insights(content: ScrapedContent) -> list[str]:
    headings = content.structure.headings
    insights = [h for h in headings.h1 + headings.h2[:3] if 10 < len(h) < 100]

    key_sentences = [
        s for s in _sentences(content.content)
        if any(marker in s.lower() for marker in _INSIGHT_MARKERS) and 20 < len(s) < 200
    ]
    insights.extend(s.strip() for s in key_sentences[:2])
    return insights[:5]


def determine_research_value(content: ScrapedContent, source_type: str, credibility_score: int) -> str:
    score = _SOURCE_TYPE_VALUE.get(source_type, 5) + credibility_score / 4

    word_count = content.metadata.word_count
    if word_count > 2000:
        score += 20
    elif word_count > 1000:
        score += 10
    elif word_count > 500:
        score += 5

    if len(content.structure.headings.h2) > 5:
        score += 10
    if len(content.structure.headings.h3) > 10:
        score += 5
    if len(content.links.external) > 10:
        score += 5

    if score >= 60:
        return "high"
    if score >= 30:
        return "medium"
    return "low"


def generate_suggested_tags(content: ScrapedContent, source_type: str) -> list[str]:
    tags = [source_type or "general"]
    tags.extend(content.metadata.keywords[:3])

    headings = content.structure.headings
    for heading in headings.h1 + headings.h2[:3]:
        for word in heading.lower().split():
            if len(word) > 4 and word not in tags and len(tags) < 10:
                tags.append(word)

    if content.metadata.word_count > 1000:
        tags.append("in-depth")
    if len(content.images) > 5:
        tags.append("visual")
    if has_citations(content):
        tags.append("researched")
    return tags[:8]


def generate_related_topics(content: ScrapedContent) -> list[str]:
    phrases: list[str] = []
    for sentence in _sentences(content.content):
        words = sentence.split()
        for first, second in zip(words, words[1:]):
            phrase = f"{first} {second}".lower()
            if 8 < len(phrase) < 30 and phrase not in phrases:
                phrases.append(phrase)
                if len(phrases) == 5:
                    return phrases
    return phrases


def analyze_bias(content: ScrapedContent) -> BiasAnalysis:
    text = content.content.lower()

    left = sum(1 for i in _LEFT_INDICATORS if i in text)
    right = sum(1 for i in _RIGHT_INDICATORS if i in text)
    if left > right + 2:
        lean = "left"
    elif right > left + 2:
        lean = "right"
    else:
        lean = "center"

    positive = _count_words(text, _POSITIVE_WORDS)
    negative = _count_words(text, _NEGATIVE_WORDS)
    if positive > negative * 1.5:
        tone = "positive"
    elif negative > positive * 1.5:
        tone = "negative"
    else:
        tone = "neutral"

    opinion = _count_words(text, _OPINION_WORDS)
    fact = _count_words(text, _FACT_PHRASES)
    objectivity = 50.0
    if opinion + fact:
        objectivity = max(0.0, min(100.0, fact / (opinion + fact) * 100))

    if objectivity >= 70 and tone == "neutral":
        bias_level = "low"
    elif objectivity < 40 and tone != "neutral":
        bias_level = "high"
    else:
        bias_level = "medium"

    return BiasAnalysis(
        political_lean=lean,
        bias_level=bias_level,
        emotional_tone=tone,
        objectivity_score=objectivity,
    )


def analyze_fact_checking(content: ScrapedContent) -> FactCheckResults:
    sources = len(content.links.external)
    citations = has_citations(content)

    claims = [
        s.strip() for s in _sentences(content.content)
        if (re.search(r"\d", s) or _STRONG_STATEMENT_RE.search(s)) and 20 < len(s) < 200
    ]

    if citations and sources >= 3:
        verifiability = "high"
    elif sources >= 1 or citations:
        verifiability = "medium"
    else:
        verifiability = "low"

    return FactCheckResults(
        claims=claims[:5],
        verifiability=verifiability,
        sources_mentioned=sources,
        citations_found=citations,
    )


def calculate_content_quality(content: ScrapedContent, now: datetime) -> ContentQualityScores:
    headings = content.structure.headings
    structure = content.structure
    word_count = content.metadata.word_count

    depth = 0
    if word_count > 2000:
        depth += 30
    elif word_count > 1000:
        depth += 20
    elif word_count > 500:
        depth += 10
    if len(headings.h2) > 5:
        depth += 20
    elif len(headings.h2) > 2:
        depth += 10
    if len(headings.h3) > 10:
        depth += 15
    elif len(headings.h3) > 5:
        depth += 8
    if structure.lists > 3:
        depth += 10
    if structure.tables > 1:
        depth += 10
    if len(content.images) > 3:
        depth += 5

    accuracy = 50
    if has_citations(content):
        accuracy += 30
    if content.metadata.author:
        accuracy += 10
    if content.metadata.publish_date:
        accuracy += 10

    distinct_elements = sum(
        (
            bool(headings.h2),
            bool(headings.h3),
            structure.lists > 0,
            structure.tables > 0,
            bool(content.images),
            bool(content.links.external),
        )
    )

    return ContentQualityScores(
        depth_score=min(100, depth),
        accuracy_score=min(100, accuracy),
        uniqueness_score=min(100, 50 + distinct_elements * 8),
        timestamp=now,
    )


def calculate_relevance_score(content: ScrapedContent, query: str | None) -> int:
    """Share of query terms found in the page's title, headings and text."""
    terms = {t for t in re.findall(r"\w+", (query or "").lower()) if len(t) > 2}
    if not terms:
        return 0
    headings = content.structure.headings
    haystack = " ".join([content.title, *headings.h1, *headings.h2, content.content]).lower()
    found = sum(1 for t in terms if re.search(rf"\b{re.escape(t)}\b", haystack))
    return round(found / len(terms) * 100)


def generate_recommendations(
    content: ScrapedContent,
    source_type: str,
    bias: BiasAnalysis,
) -> list[str]:
    recommendations: list[str] = []
    metadata = content.metadata

    if metadata.word_count < 300:
        recommendations.append("Consider expanding the content for better research value")
    if not content.structure.headings.h2:
        recommendations.append("Add section headings to improve structure")
    if not has_citations(content) and source_type in ("academic", "news"):
        recommendations.append("Add citations and references to improve credibility")
    if not metadata.author:
        recommendations.append("Consider adding author information for transparency")
    if not metadata.publish_date:
        recommendations.append("Add publication date to help assess recency")
    if any(not img.alt for img in content.images):
        recommendations.append("Add alt text to images for better accessibility")
    if content.technical.response_time > 3000:
        recommendations.append("Optimize page load time for better user experience")
    if 0 < bias.objectivity_score < 60:
        recommendations.append("Consider adding more factual evidence and data to improve objectivity")
    if bias.emotional_tone != "neutral":
        recommendations.append("Consider using more neutral language for better balance")
    return recommendations


def analyze_content(
    url: str,
    content: ScrapedContent,
    *,
    query: str | None = None,
    now: datetime | None = None,
) -> EnhancedAnalysis:
    """Run every heuristic over *content* and bundle the results."""
    now = now or datetime.now(timezone.utc)
    source_type = determine_source_type(content, url)
    credibility = calculate_credibility_score(content, url, now)
    bias = analyze_bias(content)

    return EnhancedAnalysis(
        credibility_score=credibility,
        relevance_score=calculate_relevance_score(content, query),
        key_insights=extract_key_insights(content),
        research_value=determine_research_value(content, source_type, credibility),
        suggested_tags=generate_suggested_tags(content, source_type),
        related_topics=generate_related_topics(content),
        source_type=source_type,
        reading_difficulty=analyze_reading_difficulty(content),
        bias_analysis=bias,
        fact_check_results=analyze_fact_checking(content),
        content_quality=calculate_content_quality(content, now),
        recommendations=generate_recommendations(content, source_type, bias),
    )
