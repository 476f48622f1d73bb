import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from src.config.settings import Settings, settings
from src.modules.news.aggregation import merge, paginate, rank
from src.modules.news.cache import TTLCache
from src.modules.news.catalog import (
    DEFAULT_CATEGORY,
    canonical_key,
    resolve_category_query,
    resolve_city,
    resolve_location_query,
)
from src.modules.news.fallback import get_fallback, get_local_fallback
from src.modules.news.fetcher import BACKOFF_SECONDS, fetch_with_retry
from src.modules.news.providers import (
    Provider,
    ProviderRequestSpec,
    build_requests,
    configured_providers,
    normalize_payload,
)
from src.modules.news.schemas import NormalizedArticle
from src.modules.summarizer.service import SummarizerService, summarizer_service

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 50
DEFAULT_LOCAL_PAGE_SIZE = 5
MAX_LOCAL_PAGE_SIZE = 20
ENRICH_LIMIT = 5
LOCAL_CATEGORY = "local"
FALLBACK_ERROR = "Using fallback data due to server error"


@dataclass
class CachedPage:
    articles: list[NormalizedArticle]
    is_fallback: bool


@dataclass
class NewsResult:
    articles: list[NormalizedArticle]
    page: int
    page_size: int
    from_cache: bool = False
    is_fallback: bool = False
    error: str | None = None

    @property
    def total(self) -> int:
        return len(self.articles)


def _clamp(value: int, low: int, high: int | None = None) -> int:
    value = max(low, value)
    return value if high is None else min(high, value)


class NewsService:
    """Aggregates news from every configured provider with caching and fallback."""

    def __init__(
        self,
        config: Settings | None = None,
        cache: TTLCache | None = None,
        summarizer: SummarizerService | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        backoff: float = BACKOFF_SECONDS,
    ) -> None:
        self._settings = config or settings
        self._cache = cache if cache is not None else TTLCache(self._settings.cache_ttl_seconds)
        self._summarizer = summarizer if summarizer is not None else summarizer_service
        self._transport = transport
        self._backoff = backoff
        self._background_tasks: set[asyncio.Task] = set()

    @property
    def ai_enabled(self) -> bool:
        return self._summarizer.enabled

    @property
    def providers(self) -> list[Provider]:
        return configured_providers(self._settings)

    # ── Public operations ───────────────────────────────────────

    async def get_news(
        self,
        category: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> NewsResult:
        key = canonical_key(category, DEFAULT_CATEGORY)
        page = _clamp(page, 1)
        page_size = _clamp(page_size, 1, MAX_PAGE_SIZE)
        try:
            return await self._aggregate(
                kind="news",
                key=key,
                query=resolve_category_query(key),
                category=key,
                page=page,
                page_size=page_size,
                fallback=lambda: get_fallback(key),
            )
        except Exception:
            logger.exception("News aggregation failed for category '%s'", key)
            return NewsResult(
                articles=paginate(get_fallback(key), page_size),
                page=page,
                page_size=page_size,
                is_fallback=True,
                error=FALLBACK_ERROR,
            )

    async def get_local_news(
        self,
        location: str | None = None,
        page: int = 1,
        page_size: int = DEFAULT_LOCAL_PAGE_SIZE,
    ) -> NewsResult:
        key = canonical_key(location, self._settings.default_location.lower())
        page = _clamp(page, 1)
        page_size = _clamp(page_size, 1, MAX_LOCAL_PAGE_SIZE)
        city = resolve_city(key)
        display_name = city.name if city else key.title()
        try:
            return await self._aggregate(
                kind="local",
                key=key,
                query=resolve_location_query(key),
                category=LOCAL_CATEGORY,
                page=page,
                page_size=page_size,
                fallback=lambda: get_local_fallback(display_name),
            )
        except Exception:
            logger.exception("Local news aggregation failed for location '%s'", key)
            return NewsResult(
                articles=get_local_fallback(display_name),
                page=page,
                page_size=page_size,
                is_fallback=True,
                error=FALLBACK_ERROR,
            )

    async def summarize(self, text: str | None) -> str:
        if not self.ai_enabled:
            return "AI summary feature available with a summarization API key"
        if not text:
            return "Provide article text to generate a summary"
        summary = await self._summarizer.summarize(text)
        return summary or "Summary generation in progress..."

    async def drain(self) -> None:
        """Wait for pending enrichment tasks."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)

    # ── Aggregation ─────────────────────────────────────────────

    async def _aggregate(
        self,
        *,
        kind: str,
        key: str,
        query: str,
        category: str,
        page: int,
        page_size: int,
        fallback: Callable[[], list[NormalizedArticle]],
    ) -> NewsResult:
        cache_key = (kind, key, page, page_size)
        cached: CachedPage | None = self._cache.get(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", cache_key)
            return NewsResult(
                articles=list(cached.articles),
                page=page,
                page_size=page_size,
                from_cache=True,
                is_fallback=cached.is_fallback,
            )

        requests = build_requests(self._settings, query, page, page_size)
        if requests:
            articles = await self._collect(requests, category)
        else:
            logger.warning("No news API keys configured, using fallback data")
            articles = []

        is_fallback = not articles
        if is_fallback:
            if requests:
                logger.warning("Providers returned no results for %s '%s', using fallback data", kind, key)
            articles = fallback()

        articles = paginate(rank(articles), page_size)
        self._cache.set(cache_key, CachedPage(articles=articles, is_fallback=is_fallback))
        self._schedule_enrichment(articles)

        return NewsResult(
            articles=list(articles),
            page=page,
            page_size=page_size,
            is_fallback=is_fallback,
        )

    async def _collect(
        self, requests: list[ProviderRequestSpec], category: str
    ) -> list[NormalizedArticle]:
        now = datetime.now(timezone.utc)
        async with httpx.AsyncClient(transport=self._transport) as client:
            results = await asyncio.gather(
                *(self._fetch_provider(client, spec, category, now) for spec in requests),
                return_exceptions=True,
            )

        batches: list[list[NormalizedArticle]] = []
        for spec, result in zip(requests, results):
            if isinstance(result, BaseException):
                logger.error("Provider %s failed: %r", spec.provider.value, result)
                continue
            batches.append(result)

        articles = merge(batches)
        logger.info(
            "Aggregated %d unique articles from %d/%d providers",
            len(articles), len(batches), len(requests),
        )
        return articles

    async def _fetch_provider(
        self,
        client: httpx.AsyncClient,
        spec: ProviderRequestSpec,
        category: str,
        now: datetime,
    ) -> list[NormalizedArticle]:
        try:
            response = await fetch_with_retry(
                client,
                spec.url,
                max_retries=self._settings.max_retries,
                timeout=spec.timeout,
                backoff=self._backoff,
            )
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("API error (%s): %s", spec.provider.value, type(exc).__name__)
            return []
        return normalize_payload(spec.provider, payload, category=category, now=now)

    # ── Enrichment ──────────────────────────────────────────────

    def _schedule_enrichment(self, articles: list[NormalizedArticle]) -> None:
        if not articles or not self.ai_enabled:
            return
        task = asyncio.create_task(self._enrich(articles))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _enrich(self, articles: list[NormalizedArticle]) -> None:
        # Replaces items of the cached list in place; later cache hits see the summaries
        async def enrich_one(index: int, article: NormalizedArticle) -> None:
            summary = await self._summarizer.summarize(f"{article.title}\n{article.snippet}")
            if summary:
                articles[index] = article.model_copy(update={"ai_summary": summary})

        results = await asyncio.gather(
            *(enrich_one(i, a) for i, a in enumerate(articles[:ENRICH_LIMIT])),
            return_exceptions=True,
        )
        failed = sum(1 for r in results if isinstance(r, Exception))
        if failed:
            logger.warning("AI enhancement failed for %d/%d articles", failed, len(results))


news_service = NewsService()
