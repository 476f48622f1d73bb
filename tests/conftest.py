from __future__ import annotations

import httpx
import pytest

from src.config.settings import Settings
from src.modules.news.cache import TTLCache
from src.modules.news.service import NewsService
from tests.helpers import FakeSummarizer, make_settings


@pytest.fixture
def no_keys() -> Settings:
    return make_settings()


@pytest.fixture
def both_keys() -> Settings:
    return make_settings(gnews_api_key="gnews-key", guardian_api_key="guardian-key")


@pytest.fixture
def make_service():
    def factory(config: Settings, transport: httpx.MockTransport | None = None, **kwargs) -> NewsService:
        kwargs.setdefault("summarizer", FakeSummarizer(enabled=False))
        kwargs.setdefault("cache", TTLCache(config.cache_ttl_seconds))
        return NewsService(config=config, transport=transport, backoff=0, **kwargs)

    return factory
