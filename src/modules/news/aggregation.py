from collections.abc import Iterable

from src.modules.news.schemas import NO_URL, NormalizedArticle


def merge(batches: Iterable[list[NormalizedArticle]]) -> list[NormalizedArticle]:
    """Flatten provider batches in order, keeping the first article per id or link."""
    seen: set[str] = set()
    merged: list[NormalizedArticle] = []
    for batch in batches:
        for article in batch:
            keys = {article.id}
            if article.url != NO_URL:
                keys.add(article.url)
            if keys & seen:
                continue
            seen |= keys
            merged.append(article)
    return merged


def rank(articles: list[NormalizedArticle]) -> list[NormalizedArticle]:
    # sorted() is stable, ties keep insertion order
    return sorted(articles, key=lambda a: a.published_at, reverse=True)


def paginate(articles: list[NormalizedArticle], page_size: int) -> list[NormalizedArticle]:
    # Upstream requests are already paged, so every merged page starts at 0
    return articles[:page_size]
