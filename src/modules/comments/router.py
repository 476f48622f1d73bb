import uuid
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException

from src.modules.comments.schemas import (
    CommentCreatedResponse,
    CommentListResponse,
    CommentRequest,
)
from src.modules.comments.service import (
    MAX_COMMENT_LENGTH,
    MAX_COMMENTS_LISTED,
    MAX_COMMENTS_PER_HOUR,
    sanitize_comment,
)
from src.modules.identity.dependencies import CurrentUser, get_current_user
from src.modules.persistence.models import utcnow
from src.modules.persistence.service import persistence_service

router = APIRouter()


def _require_article_id(article_id: str) -> str:
    article_id = article_id.strip()
    if not article_id:
        raise HTTPException(status_code=400, detail="Article ID is required")
    return article_id


@router.get("/{article_id}", response_model=CommentListResponse)
async def list_comments(article_id: str):
    items = await persistence_service.list_comments(
        _require_article_id(article_id), limit=MAX_COMMENTS_LISTED
    )
    return CommentListResponse(count=len(items), items=items)


@router.post("/{article_id}", response_model=CommentCreatedResponse, status_code=201)
async def post_comment(
    article_id: str,
    body: CommentRequest,
    user: CurrentUser = Depends(get_current_user),
):
    article_id = _require_article_id(article_id)
    text = sanitize_comment(body.text)
    if not text:
        raise HTTPException(status_code=400, detail="Comment cannot be empty")
    if len(text) > MAX_COMMENT_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Comment must be less than {MAX_COMMENT_LENGTH} characters",
        )

    recent = await persistence_service.count_comments_since(
        user.id, utcnow() - timedelta(hours=1)
    )
    if recent >= MAX_COMMENTS_PER_HOUR:
        raise HTTPException(
            status_code=429,
            detail="Too many comments. Please wait before posting again.",
        )

    comment = await persistence_service.create_comment(
        user.id, user.name, article_id, text
    )
    return CommentCreatedResponse(comment=comment)


@router.delete("/{article_id}/{comment_id}")
async def delete_comment(
    article_id: str,
    comment_id: uuid.UUID,
    user: CurrentUser = Depends(get_current_user),
):
    comment = await persistence_service.get_comment(comment_id)
    if not comment or comment.article_id != article_id:
        raise HTTPException(status_code=404, detail="Comment not found")
    if comment.user_id != user.id:
        raise HTTPException(status_code=403, detail="Unauthorized to delete this comment")
    await persistence_service.delete_comment(comment_id)
    return {"ok": True, "message": "Comment deleted successfully"}
