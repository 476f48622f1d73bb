import uuid
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query

from src.modules.history.schemas import (
    HistoryListResponse,
    HistoryRecordedResponse,
    HistoryRequest,
    ReadingStatsResponse,
)
from src.modules.identity.dependencies import CurrentUser, get_current_user
from src.modules.persistence.models import utcnow
from src.modules.persistence.schemas import HistoryData
from src.modules.persistence.service import persistence_service

router = APIRouter()

STREAK_WINDOW = timedelta(days=30)
TOP_ARTICLES = 5


@router.post("", response_model=HistoryRecordedResponse)
async def add_history(body: HistoryRequest, user: CurrentUser = Depends(get_current_user)):
    data = HistoryData(
        article_id=body.article_id,
        title=body.title or "Untitled",
        category=body.category or "General",
        time_spent=body.time_spent,
    )
    entry, updated = await persistence_service.record_view(user.id, data)
    return HistoryRecordedResponse(updated=updated, entry=entry)


@router.get("", response_model=HistoryListResponse)
async def list_history(
    limit: int = Query(100, ge=1, le=500),
    skip: int = Query(0, ge=0),
    user: CurrentUser = Depends(get_current_user),
):
    items, total = await persistence_service.list_history(user.id, limit=limit, skip=skip)
    return HistoryListResponse(items=items, total=total)


@router.get("/stats", response_model=ReadingStatsResponse)
async def reading_stats(user: CurrentUser = Depends(get_current_user)):
    stats = await persistence_service.category_stats(user.id)
    top = await persistence_service.top_articles(user.id, limit=TOP_ARTICLES)
    streak = await persistence_service.active_days(user.id, utcnow() - STREAK_WINDOW)
    return ReadingStatsResponse(
        stats=stats,
        top_articles=top,
        streak=streak,
        total_entries=sum(s.article_count for s in stats),
    )


@router.delete("/{entry_id}")
async def delete_history_entry(
    entry_id: uuid.UUID, user: CurrentUser = Depends(get_current_user)
):
    deleted = await persistence_service.delete_history_entry(user.id, entry_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="History entry not found")
    return {"ok": True}


@router.delete("")
async def clear_history(user: CurrentUser = Depends(get_current_user)):
    removed = await persistence_service.clear_history(user.id)
    return {"ok": True, "removed": removed}
