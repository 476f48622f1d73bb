import uuid
from datetime import datetime

from pydantic import ConfigDict, Field

from src.modules.news.schemas import CamelModel


class HistoryRequest(CamelModel):
    article_id: str = Field(..., min_length=1, max_length=2048)
    title: str | None = None
    category: str | None = None
    time_spent: int = Field(default=0, ge=0)


class HistoryEntryResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    article_id: str
    title: str
    category: str
    time_spent: int
    views: int
    viewed_at: datetime


class HistoryRecordedResponse(CamelModel):
    ok: bool = True
    updated: bool = False
    entry: HistoryEntryResponse


class HistoryListResponse(CamelModel):
    ok: bool = True
    items: list[HistoryEntryResponse]
    total: int


class CategoryStatResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    category: str
    total_time: int
    article_count: int
    last_viewed: datetime | None = None


class ReadingStatsResponse(CamelModel):
    ok: bool = True
    stats: list[CategoryStatResponse]
    top_articles: list[HistoryEntryResponse]
    streak: int
    total_entries: int
