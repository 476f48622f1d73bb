from fastapi import APIRouter, HTTPException, Query

from src.config.settings import settings
from src.modules.news.schemas import (
    LocalNewsResponse,
    NewsResponse,
    SummaryRequest,
    SummaryResponse,
)
from src.modules.news.service import (
    DEFAULT_LOCAL_PAGE_SIZE,
    DEFAULT_PAGE_SIZE,
    news_service,
)

router = APIRouter()


@router.get("", response_model=NewsResponse)
async def get_news(
    category: str = Query("general", min_length=1, max_length=50),
    page: int = Query(1, ge=1, le=100),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", ge=1),
) -> NewsResponse:
    try:
        result = await news_service.get_news(category, page, page_size)
    except ValueError:
        raise HTTPException(status_code=400, detail="Category must be 1-50 characters")

    return NewsResponse(
        from_cache=result.from_cache,
        is_fallback=result.is_fallback,
        ai_enabled=news_service.ai_enabled,
        category=category.strip().lower(),
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        data=result.articles,
        error=result.error,
    )


@router.get("/local", response_model=LocalNewsResponse)
async def get_local_news(
    location: str = Query(settings.default_location, min_length=2, max_length=100),
    page: int = Query(1, ge=1, le=50),
    page_size: int = Query(DEFAULT_LOCAL_PAGE_SIZE, alias="pageSize", ge=1),
) -> LocalNewsResponse:
    if len(location.strip()) < 2:
        raise HTTPException(status_code=400, detail="Location must be 2-100 characters")
    result = await news_service.get_local_news(location, page, page_size)

    return LocalNewsResponse(
        from_cache=result.from_cache,
        is_fallback=result.is_fallback,
        ai_enabled=news_service.ai_enabled,
        location=location.strip().lower(),
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        data=result.articles,
        error=result.error,
    )


@router.post("/summary", response_model=SummaryResponse)
async def summarize(request: SummaryRequest) -> SummaryResponse:
    summary = await news_service.summarize(request.text)
    return SummaryResponse(summary=summary)
