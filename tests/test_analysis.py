"""Research analysis heuristics."""

from datetime import datetime, timedelta, timezone

import pytest

from src.scraper.analysis import (
    analyze_bias,
    analyze_content,
    analyze_fact_checking,
    analyze_reading_difficulty,
    calculate_content_quality,
    calculate_credibility_score,
    calculate_relevance_score,
    determine_research_value,
    determine_source_type,
    extract_key_insights,
    generate_recommendations,
    generate_related_topics,
    generate_suggested_tags,
)
from src.scraper.models import Headings, ImageInfo, LinkInventory, PageStructure, SocialTags
from tests.factories import make_content

NOW = datetime(2026, 6, 1, tzinfo=timezone.utc)
PLAIN_TEXT = "plain words " * 20


def _with_links(content, external: int):
    links = LinkInventory(external=[f"https://ref{i}.example/" for i in range(external)], total=external)
    return content.model_copy(update={"links": links})


# --- source type ---


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://data.gov/report", "government"),
        ("https://cs.stanford.edu/paper", "government"),
        ("https://journal.example.org/article", "academic"),
        ("https://nytimes.com/2026/story", "news"),
        ("https://docs.python.org/3/", "documentation"),
        ("https://shop.example.com/item", "ecommerce"),
        ("https://blog.example.com/entry", "blog"),
        ("https://example.com/", "other"),
    ],
)
def test_source_type_from_domain(url, expected):
    assert determine_source_type(make_content(url=url), url) == expected


def test_source_type_from_page_signals():
    url = "https://example.com/"
    assert determine_source_type(make_content(author="Dr. Ada Lovelace"), url) == "academic"
    assert determine_source_type(make_content(author="Jane"), url) == "blog"

    article = make_content().model_copy(update={"social": SocialTags(open_graph={"og:type": "article"})})
    assert determine_source_type(article, url) == "news"

    product = make_content().model_copy(update={"social": SocialTags(open_graph={"og:type": "product"})})
    assert determine_source_type(product, url) == "ecommerce"

    assert determine_source_type(make_content(h1=("API Documentation",)), url) == "documentation"


# --- credibility ---


def test_credibility_of_recent_attributed_org_page():
    published = (NOW - timedelta(days=200)).isoformat()
    content = make_content(author="A. Writer", publish_date=published, content=PLAIN_TEXT)
    # 50 + 15 (.org) + 15 (author) + 5 (within a year)
    assert calculate_credibility_score(content, "https://example.org/a", NOW) == 85


def test_credibility_rewards_depth_and_citations():
    published = (NOW - timedelta(days=3)).isoformat().replace("+00:00", "Z")
    content = _with_links(
        make_content(
            author="Dr. Ada",
            publish_date=published,
            word_count=1500,
            h2=("One", "Two", "Three", "Four"),
            content=PLAIN_TEXT + " as shown in [1]",
        ),
        external=6,
    )
    assert calculate_credibility_score(content, "https://research.example.edu/paper", NOW) == 100


def test_credibility_penalties():
    spam = make_content(content="Click here and buy now! " * 10)
    assert calculate_credibility_score(spam, "https://example.com/", NOW) == 30

    broken = make_content(status_code=404, response_time=6000.0, content=PLAIN_TEXT)
    assert calculate_credibility_score(broken, "https://example.com/", NOW) == 35


def test_credibility_ignores_unparseable_dates():
    content = make_content(publish_date="last Tuesday", content=PLAIN_TEXT)
    assert calculate_credibility_score(content, "https://example.com/", NOW) == 50


# --- reading difficulty ---


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", "medium"),
        ("The cat sat. The dog ran. It was fun.", "easy"),
        (
            "Comprehensive institutional considerations fundamentally characterize "
            "organizational transformation methodologies throughout international "
            "establishments, necessitating extraordinary interdisciplinary collaboration.",
            "hard",
        ),
    ],
)
def test_reading_difficulty(text, expected):
    assert analyze_reading_difficulty(make_content(content=text)) == expected


# --- bias ---


def test_opinionated_positive_text_is_highly_biased():
    bias = analyze_bias(make_content(content="I think this is great. I believe it is amazing. I feel good."))
    assert bias.emotional_tone == "positive"
    assert bias.objectivity_score == 0
    assert bias.bias_level == "high"
    assert bias.political_lean == "center"


def test_factual_neutral_text_has_low_bias():
    text = "According to the report, research shows growth. Data indicates stability."
    bias = analyze_bias(make_content(content=text))
    assert bias.emotional_tone == "neutral"
    assert bias.objectivity_score == 100
    assert bias.bias_level == "low"


def test_bias_defaults_without_signals():
    bias = analyze_bias(make_content(content=""))
    assert bias.objectivity_score == 50
    assert bias.bias_level == "medium"
    assert bias.political_lean == "center"


def test_political_lean():
    assert analyze_bias(make_content(content="progressive liberal democrat equality")).political_lean == "left"
    text = "conservative republican traditional free market"
    assert analyze_bias(make_content(content=text)).political_lean == "right"


# --- fact checking ---


def test_fact_checking_with_citations_and_sources():
    content = _with_links(
        make_content(content="Revenue rose 40 percent in the last quarter [1]. Cats are nice."),
        external=3,
    )
    result = analyze_fact_checking(content)
    assert result.claims == ("Revenue rose 40 percent in the last quarter [1]",)
    assert result.verifiability == "high"
    assert result.sources_mentioned == 3
    assert result.citations_found is True


def test_fact_checking_verifiability_levels():
    assert analyze_fact_checking(make_content(content="")).verifiability == "low"
    assert analyze_fact_checking(_with_links(make_content(content=""), 1)).verifiability == "medium"


def test_claims_include_absolute_statements():
    result = analyze_fact_checking(make_content(content="This approach always works in production."))
    assert result.claims == ("This approach always works in production",)


# --- quality, relevance, insights ---


def test_content_quality_scores():
    structure = PageStructure(
        headings=Headings(h2=[f"s{i}" for i in range(6)], h3=[f"t{i}" for i in range(11)]),
        lists=4,
        tables=2,
    )
    images = [ImageInfo(src=f"https://example.com/{i}.png", alt="x") for i in range(4)]
    content = make_content(
        word_count=2500, author="A", publish_date="2026-05-01", content="See [1]."
    ).model_copy(update={"structure": structure, "images": images})

    scores = calculate_content_quality(content, NOW)

    assert scores.depth_score == 90
    assert scores.accuracy_score == 100
    assert scores.uniqueness_score == 90
    assert scores.timestamp == NOW


def test_relevance_score():
    content = make_content(title="Async Python", content="An introduction to asyncio.")
    assert calculate_relevance_score(content, None) == 0
    assert calculate_relevance_score(content, "an of") == 0
    assert calculate_relevance_score(content, "asyncio python") == 100
    assert calculate_relevance_score(content, "asyncio python rust") == 67


def test_key_insights():
    content = make_content(
        h1=("Understanding Async Python",),
        h2=("Event loops", "Tiny"),
        content="This is an important point about loops. Short key.",
    )
    assert extract_key_insights(content) == [
        "Understanding Async Python",
        "Event loops",
        "This is an important point about loops",
    ]


def test_suggested_tags():
    content = make_content(h1=("Understanding Async Python",), keywords=["python", "asyncio", "concurrency", "extra"])
    assert generate_suggested_tags(content, "news") == [
        "news",
        "python",
        "asyncio",
        "concurrency",
        "understanding",
        "async",
    ]


def test_related_topics():
    content = make_content(content="Machine learning models. Deep learning networks")
    assert generate_related_topics(content) == [
        "machine learning",
        "learning models",
        "deep learning",
        "learning networks",
    ]


def test_research_value():
    strong = make_content(word_count=2500)
    assert determine_research_value(strong, "academic", 100) == "high"
    assert determine_research_value(make_content(word_count=700), "blog", 60) == "medium"
    assert determine_research_value(make_content(word_count=100), "other", 0) == "low"


def test_recommendations_for_bare_page():
    content = make_content()
    recommendations = generate_recommendations(content, "other", analyze_bias(content))
    assert recommendations == [
        "Add section headings to improve structure",
        "Consider adding author information for transparency",
        "Add publication date to help assess recency",
        "Consider adding more factual evidence and data to improve objectivity",
    ]


def test_analyze_content_bundles_everything():
    content = make_content(url="https://docs.example.com/guide", content=PLAIN_TEXT)
    analysis = analyze_content(content.url, content, query="plain", now=NOW)

    assert analysis.source_type == "documentation"
    assert analysis.relevance_score == 100
    assert analysis.content_quality.timestamp == NOW
    payload = analysis.model_dump(mode="json", by_alias=True)
    assert {"credibilityScore", "biasAnalysis", "factCheckResults", "contentQuality"} <= set(payload)
