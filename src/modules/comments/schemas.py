import uuid
from datetime import datetime

from pydantic import ConfigDict, Field

from src.modules.news.schemas import CamelModel


class CommentRequest(CamelModel):
    text: str = Field(..., min_length=1, max_length=10000)


class CommentResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    user_name: str
    article_id: str
    text: str
    created_at: datetime


class CommentListResponse(CamelModel):
    ok: bool = True
    count: int
    items: list[CommentResponse]


class CommentCreatedResponse(CamelModel):
    ok: bool = True
    comment: CommentResponse
