import hashlib
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any

import httpx
from bs4 import BeautifulSoup

from src.config.settings import Settings, is_configured
from src.modules.news.fetcher import REQUEST_TIMEOUT
from src.modules.news.schemas import NO_URL, PLACEHOLDER_IMAGE, NormalizedArticle

logger = logging.getLogger(__name__)

SNIPPET_MAX_LENGTH = 200
UNTITLED = "Untitled"


class Provider(str, Enum):
    GNEWS = "gnews"
    GUARDIAN = "guardian"


@dataclass(frozen=True)
class ProviderRequestSpec:
    provider: Provider
    url: str
    timeout: float = REQUEST_TIMEOUT


# ── Field helpers ───────────────────────────────────────────────


def _text(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    if "<" in value:
        value = BeautifulSoup(value, "lxml").get_text(" ", strip=True)
    return " ".join(value.split())


def _truncate(value: str, limit: int = SNIPPET_MAX_LENGTH) -> str:
    return value if len(value) <= limit else value[:limit].rstrip()


def parse_timestamp(value: Any, default: datetime) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return default
    else:
        return default
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _fallback_id(provider: Provider, *parts: str) -> str:
    digest = hashlib.sha1("|".join(parts).encode("utf-8")).hexdigest()[:16]
    return f"{provider.value}_{digest}"


# ── Adapters ────────────────────────────────────────────────────


class ProviderAdapter(ABC):
    provider: Provider

    @abstractmethod
    def api_key(self, settings: Settings) -> str: ...

    @abstractmethod
    def build_request(
        self, query: str, page: int, page_size: int, api_key: str
    ) -> ProviderRequestSpec: ...

    @abstractmethod
    def extract_items(self, payload: Any) -> list | None:
        """Return the raw item list, or None when the payload shape is unexpected."""

    @abstractmethod
    def to_article(
        self, raw: Mapping, category: str, now: datetime
    ) -> NormalizedArticle | None: ...


class GNewsAdapter(ProviderAdapter):
    provider = Provider.GNEWS
    base_url = "https://gnews.io/api/v4/search"

    def api_key(self, settings: Settings) -> str:
        return settings.gnews_api_key

    def build_request(self, query, page, page_size, api_key):
        params = {
            "q": query,
            "lang": "en",
            "max": min(page_size, 10),
            "page": page,
            "token": api_key,
        }
        return ProviderRequestSpec(
            self.provider, str(httpx.URL(self.base_url, params=params))
        )

    def extract_items(self, payload):
        if not isinstance(payload, Mapping):
            return None
        articles = payload.get("articles")
        return articles if isinstance(articles, list) else None

    def to_article(self, raw, category, now):
        title = _text(raw.get("title"))
        url = raw.get("url") if isinstance(raw.get("url"), str) else ""
        if not title and not url:
            return None

        description = _text(raw.get("description"))
        snippet = description or _truncate(_text(raw.get("content")))
        published = raw.get("publishedAt")
        source = raw.get("source")
        source_name = source.get("name") if isinstance(source, Mapping) else None

        return NormalizedArticle(
            id=url or _fallback_id(self.provider, title, description, str(published)),
            title=title or UNTITLED,
            snippet=snippet,
            url=url or NO_URL,
            image=raw.get("image") or PLACEHOLDER_IMAGE,
            published_at=parse_timestamp(published, now),
            source=_text(source_name) or "GNews",
            category=(_text(raw.get("category")) or category).lower(),
        )


class GuardianAdapter(ProviderAdapter):
    provider = Provider.GUARDIAN
    base_url = "https://content.guardianapis.com/search"

    def api_key(self, settings: Settings) -> str:
        return settings.guardian_api_key

    def build_request(self, query, page, page_size, api_key):
        params = {
            "api-key": api_key,
            "q": query,
            "show-fields": "trailText,thumbnail,bodyText",
            "page": page,
            "page-size": min(page_size, 20),
        }
        return ProviderRequestSpec(
            self.provider, str(httpx.URL(self.base_url, params=params))
        )

    def extract_items(self, payload):
        if not isinstance(payload, Mapping):
            return None
        response = payload.get("response")
        if not isinstance(response, Mapping):
            return None
        results = response.get("results")
        return results if isinstance(results, list) else None

    def to_article(self, raw, category, now):
        title = _text(raw.get("webTitle"))
        url = raw.get("webUrl") if isinstance(raw.get("webUrl"), str) else ""
        if not title and not url:
            return None

        fields = raw.get("fields")
        if not isinstance(fields, Mapping):
            fields = {}
        snippet = _text(fields.get("trailText")) or _truncate(_text(fields.get("bodyText")))
        published = raw.get("webPublicationDate")

        return NormalizedArticle(
            id=raw.get("id") or _fallback_id(self.provider, title, url, str(published)),
            title=title or UNTITLED,
            snippet=snippet,
            url=url or NO_URL,
            image=fields.get("thumbnail") or PLACEHOLDER_IMAGE,
            published_at=parse_timestamp(published, now),
            source="The Guardian",
            category=(_text(raw.get("sectionName")) or category).lower(),
        )


ADAPTERS: Mapping[Provider, ProviderAdapter] = MappingProxyType({
    adapter.provider: adapter for adapter in (GNewsAdapter(), GuardianAdapter())
})


# ── Public API ──────────────────────────────────────────────────


def build_requests(
    settings: Settings, query: str, page: int, page_size: int
) -> list[ProviderRequestSpec]:
    requests: list[ProviderRequestSpec] = []
    for adapter in ADAPTERS.values():
        api_key = adapter.api_key(settings)
        if is_configured(api_key):
            spec = adapter.build_request(query, page, page_size, api_key.strip())
            requests.append(replace(spec, timeout=settings.request_timeout_seconds))
    return requests


def configured_providers(settings: Settings) -> list[Provider]:
    return [
        provider for provider, adapter in ADAPTERS.items()
        if is_configured(adapter.api_key(settings))
    ]


def normalize(
    provider: Provider,
    raw: Any,
    *,
    category: str,
    now: datetime | None = None,
) -> NormalizedArticle | None:
    """Map one raw provider item to a NormalizedArticle; None when unusable."""
    if not isinstance(raw, Mapping):
        return None
    try:
        return ADAPTERS[provider].to_article(
            raw, category, now or datetime.now(timezone.utc)
        )
    except Exception:
        logger.warning("Dropping unusable %s item", provider.value, exc_info=True)
        return None


def normalize_payload(
    provider: Provider,
    payload: Any,
    *,
    category: str,
    now: datetime | None = None,
) -> list[NormalizedArticle]:
    items = ADAPTERS[provider].extract_items(payload)
    if items is None:
        logger.warning("Malformed %s payload, treating as zero results", provider.value)
        return []
    now = now or datetime.now(timezone.utc)
    articles = [normalize(provider, raw, category=category, now=now) for raw in items]
    return [a for a in articles if a is not None]
