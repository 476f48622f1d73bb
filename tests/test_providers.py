from __future__ import annotations

from datetime import datetime, timezone

import httpx

from src.modules.news.providers import (
    Provider,
    build_requests,
    configured_providers,
    normalize,
    normalize_payload,
    parse_timestamp,
)
from src.modules.news.schemas import NO_URL, PLACEHOLDER_IMAGE
from tests.helpers import (
    gnews_item,
    gnews_payload,
    guardian_item,
    guardian_payload,
    make_settings,
)

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_gnews_item_maps_to_normalized_article():
    article = normalize(Provider.GNEWS, gnews_item(1), category="technology", now=NOW)

    assert article is not None
    assert article.id == "https://news.example.com/story-1"
    assert article.url == article.id
    assert article.title == "GNews story 1"
    assert article.snippet == "Description 1"
    assert article.image == "https://img.example.com/1.jpg"
    assert article.published_at == datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc)
    assert article.source == "Example Times"
    assert article.category == "technology"
    assert article.ai_summary is None


def test_gnews_defaults_for_missing_fields():
    raw = {"title": "Only a title"}
    article = normalize(Provider.GNEWS, raw, category="general", now=NOW)

    assert article is not None
    assert article.url == NO_URL
    assert article.id.startswith("gnews_")
    assert article.image == PLACEHOLDER_IMAGE
    assert article.published_at == NOW
    assert article.source == "GNews"
    assert article.snippet == ""


def test_gnews_long_content_is_truncated():
    raw = gnews_item(2, description=None, content="word " * 200)
    article = normalize(Provider.GNEWS, raw, category="general", now=NOW)

    assert len(article.snippet) <= 200
    assert article.snippet.startswith("word word")


def test_guardian_item_maps_to_normalized_article():
    article = normalize(Provider.GUARDIAN, guardian_item(3), category="world", now=NOW)

    assert article is not None
    assert article.id == "world/2026/oct/18/story-3"
    assert article.url == "https://www.theguardian.com/world/story-3"
    assert article.title == "Guardian story 3"
    assert article.snippet == "Trail 3"
    assert article.image == "https://media.guim.co.uk/3.jpg"
    assert article.source == "The Guardian"
    assert article.category == "world news"


def test_guardian_falls_back_to_body_text():
    raw = guardian_item(4, fields={"bodyText": "x" * 500})
    article = normalize(Provider.GUARDIAN, raw, category="world", now=NOW)

    assert article.snippet == "x" * 200
    assert article.image == PLACEHOLDER_IMAGE


def test_unparsable_date_defaults_to_reference_time():
    raw = gnews_item(5, publishedAt="yesterday-ish")
    article = normalize(Provider.GNEWS, raw, category="general", now=NOW)

    assert article.published_at == NOW


def test_unusable_items_are_dropped_not_raised():
    assert normalize(Provider.GNEWS, "not an object", category="general") is None
    assert normalize(Provider.GNEWS, None, category="general") is None
    assert normalize(Provider.GNEWS, {"description": "no title or link"}, category="general") is None
    # wrong type for image fails model validation
    assert normalize(Provider.GNEWS, gnews_item(6, image=42), category="general") is None


def test_normalization_is_deterministic():
    payload = gnews_payload([gnews_item(1), {"title": "No link", "description": "d"}])

    first = normalize_payload(Provider.GNEWS, payload, category="general", now=NOW)
    second = normalize_payload(Provider.GNEWS, payload, category="general", now=NOW)

    assert [a.model_dump() for a in first] == [a.model_dump() for a in second]


def test_malformed_payload_yields_zero_articles():
    assert normalize_payload(Provider.GNEWS, {"errors": ["bad token"]}, category="general") == []
    assert normalize_payload(Provider.GUARDIAN, {"response": {"status": "error"}}, category="general") == []
    assert normalize_payload(Provider.GUARDIAN, ["unexpected"], category="general") == []


def test_normalize_payload_skips_bad_items():
    payload = guardian_payload([guardian_item(1), 17, {"fields": {}}, guardian_item(2)])
    articles = normalize_payload(Provider.GUARDIAN, payload, category="world", now=NOW)

    assert [a.title for a in articles] == ["Guardian story 1", "Guardian story 2"]


def test_build_requests_skips_unconfigured_and_placeholder_keys():
    config = make_settings(
        gnews_api_key="your_gnews_api_key_here", guardian_api_key="guardian-key"
    )
    requests = build_requests(config, "latest news", page=2, page_size=30)

    assert [r.provider for r in requests] == [Provider.GUARDIAN]
    url = httpx.URL(requests[0].url)
    assert url.host == "content.guardianapis.com"
    assert url.params["q"] == "latest news"
    assert url.params["page"] == "2"
    assert url.params["page-size"] == "20"
    assert url.params["api-key"] == "guardian-key"
    assert requests[0].timeout == 8.0
    assert configured_providers(config) == [Provider.GUARDIAN]


def test_gnews_request_caps_max_at_ten():
    config = make_settings(gnews_api_key="gnews-key")
    (request,) = build_requests(config, "technology AI innovation", page=1, page_size=50)

    url = httpx.URL(request.url)
    assert url.params["max"] == "10"
    assert url.params["lang"] == "en"
    assert url.params["token"] == "gnews-key"


def test_parse_timestamp_variants():
    default = NOW
    assert parse_timestamp("2026-01-02T03:04:05Z", default) == datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert parse_timestamp("2026-01-02T03:04:05", default).tzinfo is not None
    assert parse_timestamp("", default) is default
    assert parse_timestamp(None, default) is default
    assert parse_timestamp(12345, default) is default


def test_build_requests_use_configured_timeout():
    config = make_settings(gnews_api_key="gnews-key", request_timeout_seconds=3.5)
    (request,) = build_requests(config, "latest news", page=1, page_size=10)

    assert request.timeout == 3.5
