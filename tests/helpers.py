from __future__ import annotations

from collections.abc import Callable

import httpx

from src.config.settings import Settings

GNEWS_HOST = "gnews.io"
GUARDIAN_HOST = "content.guardianapis.com"


def make_settings(**overrides) -> Settings:
    values = {
        "gnews_api_key": "",
        "guardian_api_key": "",
        "hf_api_token": "",
        "openweather_api_key": "",
        "jwt_secret": "",
        "max_retries": 2,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def gnews_item(n: int, published: str = "2026-10-18T10:00:00Z", **extra) -> dict:
    item = {
        "title": f"GNews story {n}",
        "description": f"Description {n}",
        "content": f"Long content {n}",
        "url": f"https://news.example.com/story-{n}",
        "image": f"https://img.example.com/{n}.jpg",
        "publishedAt": published,
        "source": {"name": "Example Times", "url": "https://news.example.com"},
    }
    item.update(extra)
    return item


def guardian_item(n: int, published: str = "2026-10-18T09:00:00Z", **extra) -> dict:
    item = {
        "id": f"world/2026/oct/18/story-{n}",
        "sectionName": "World news",
        "webTitle": f"Guardian story {n}",
        "webUrl": f"https://www.theguardian.com/world/story-{n}",
        "webPublicationDate": published,
        "fields": {
            "trailText": f"<p>Trail <strong>{n}</strong></p>",
            "thumbnail": f"https://media.guim.co.uk/{n}.jpg",
            "bodyText": f"Body text {n}",
        },
    }
    item.update(extra)
    return item


def gnews_payload(items: list[dict]) -> dict:
    return {"totalArticles": len(items), "articles": items}


def guardian_payload(items: list[dict]) -> dict:
    return {"response": {"status": "ok", "total": len(items), "results": items}}


class RecordingTransport(httpx.MockTransport):
    """MockTransport that routes by host and keeps every request it saw."""

    def __init__(self, routes: dict[str, Callable[[httpx.Request], httpx.Response]]) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return routes[request.url.host](request)

        super().__init__(handler)

    def hits(self, host: str) -> int:
        return sum(1 for r in self.requests if r.url.host == host)


def respond(payload) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, json=payload)


def timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


class FakeSummarizer:
    def __init__(self, enabled: bool = True, fail: bool = False) -> None:
        self._enabled = enabled
        self._fail = fail
        self.calls: list[str] = []

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def summarize(self, text: str) -> str | None:
        self.calls.append(text)
        if self._fail:
            raise RuntimeError("model unavailable")
        return f"Summary of {text.splitlines()[0]}"
