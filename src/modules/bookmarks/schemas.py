import uuid
from datetime import datetime

from pydantic import ConfigDict, Field

from src.modules.news.schemas import CamelModel


class BookmarkRequest(CamelModel):
    article_id: str = Field(..., min_length=1, max_length=2048)
    title: str = Field(..., min_length=1, max_length=512)
    url: str = Field(..., min_length=1, max_length=2048)
    snippet: str | None = ""
    image: str | None = ""


class BookmarkResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    article_id: str
    title: str
    url: str
    snippet: str
    image: str
    created_at: datetime


class BookmarkListResponse(CamelModel):
    ok: bool = True
    data: list[BookmarkResponse]


class BookmarkSavedResponse(CamelModel):
    ok: bool = True
    bookmark: BookmarkResponse


class BookmarkToggleResponse(CamelModel):
    ok: bool = True
    added: bool = False
    removed: bool = False
    item: BookmarkResponse | None = None
