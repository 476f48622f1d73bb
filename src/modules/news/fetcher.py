import asyncio
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 8.0
MAX_RETRIES = 2
BACKOFF_SECONDS = 1.0


def _redact(url: str) -> str:
    # API keys travel in the query string
    return str(httpx.URL(url).copy_with(query=None))


async def fetch_with_retry(
    client: httpx.AsyncClient,
    url: str,
    *,
    max_retries: int = MAX_RETRIES,
    timeout: float = REQUEST_TIMEOUT,
    backoff: float = BACKOFF_SECONDS,
    method: str = "GET",
    headers: dict[str, str] | None = None,
    json: Any = None,
) -> httpx.Response:
    """Issue one request, retrying failures with linear backoff.

    Network errors, timeouts and non-2xx statuses are retried ``max_retries``
    more times, sleeping ``attempt * backoff`` seconds in between. The last
    error is re-raised once retries are exhausted.
    """
    last_exc: Exception | None = None
    for attempt in range(1, max_retries + 2):
        try:
            response = await client.request(
                method, url, headers=headers, json=json, timeout=timeout
            )
            response.raise_for_status()
            return response
        except (httpx.HTTPStatusError, httpx.RequestError) as exc:
            last_exc = exc
            if attempt > max_retries:
                break
            wait = attempt * backoff
            logger.warning(
                "Attempt %d/%d failed for %s: %s, retrying in %.1fs",
                attempt, max_retries + 1, _redact(url), type(exc).__name__, wait,
            )
            await asyncio.sleep(wait)

    logger.warning(
        "Giving up on %s after %d attempts: %s",
        _redact(url), max_retries + 1, type(last_exc).__name__,
    )
    raise last_exc  # type: ignore[misc]
