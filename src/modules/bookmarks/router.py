import uuid

from fastapi import APIRouter, Depends, HTTPException

from src.modules.bookmarks.schemas import (
    BookmarkListResponse,
    BookmarkRequest,
    BookmarkSavedResponse,
    BookmarkToggleResponse,
)
from src.modules.identity.dependencies import CurrentUser, get_current_user
from src.modules.persistence.schemas import BookmarkData
from src.modules.persistence.service import persistence_service

router = APIRouter()


def _to_data(body: BookmarkRequest) -> BookmarkData:
    return BookmarkData(
        article_id=body.article_id,
        title=body.title,
        url=body.url,
        snippet=body.snippet or "",
        image=body.image or "",
    )


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(user: CurrentUser = Depends(get_current_user)):
    items = await persistence_service.list_bookmarks(user.id)
    return BookmarkListResponse(data=items)


@router.post("", response_model=BookmarkSavedResponse, status_code=201)
async def save_bookmark(
    body: BookmarkRequest, user: CurrentUser = Depends(get_current_user)
):
    bookmark = await persistence_service.create_bookmark(user.id, _to_data(body))
    if bookmark is None:
        raise HTTPException(status_code=409, detail="Already bookmarked")
    return BookmarkSavedResponse(bookmark=bookmark)


@router.post("/toggle", response_model=BookmarkToggleResponse)
async def toggle_bookmark(
    body: BookmarkRequest, user: CurrentUser = Depends(get_current_user)
):
    bookmark = await persistence_service.toggle_bookmark(user.id, _to_data(body))
    if bookmark is None:
        return BookmarkToggleResponse(removed=True)
    return BookmarkToggleResponse(added=True, item=bookmark)


@router.delete("/{bookmark_id}")
async def delete_bookmark(
    bookmark_id: uuid.UUID, user: CurrentUser = Depends(get_current_user)
):
    deleted = await persistence_service.delete_bookmark(user.id, bookmark_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Bookmark not found")
    return {"ok": True, "message": "Bookmark deleted"}
