from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from src.main import app
from src.modules.bookmarks import router as bookmarks_router
from src.modules.comments import router as comments_router
from src.modules.comments.service import MAX_COMMENTS_PER_HOUR, sanitize_comment
from src.modules.identity.dependencies import CurrentUser, get_current_user
from src.modules.persistence.models import utcnow


@dataclass
class StoredComment:
    user_id: str
    user_name: str
    article_id: str
    text: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utcnow)


@dataclass
class StoredBookmark:
    user_id: str
    article_id: str
    title: str
    url: str
    snippet: str = ""
    image: str = ""
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=utcnow)


class InMemoryStore:
    def __init__(self) -> None:
        self.comments: dict[uuid.UUID, StoredComment] = {}
        self.bookmarks: dict[uuid.UUID, StoredBookmark] = {}

    async def list_comments(self, article_id, limit=200):
        return [c for c in self.comments.values() if c.article_id == article_id][:limit]

    async def count_comments_since(self, user_id, since):
        return sum(1 for c in self.comments.values() if c.user_id == user_id and c.created_at >= since)

    async def create_comment(self, user_id, user_name, article_id, text):
        comment = StoredComment(user_id, user_name, article_id, text)
        self.comments[comment.id] = comment
        return comment

    async def get_comment(self, comment_id):
        return self.comments.get(comment_id)

    async def delete_comment(self, comment_id):
        return self.comments.pop(comment_id, None) is not None

    async def list_bookmarks(self, user_id):
        return [b for b in self.bookmarks.values() if b.user_id == user_id]

    async def create_bookmark(self, user_id, data):
        if any(b.user_id == user_id and b.article_id == data.article_id for b in self.bookmarks.values()):
            return None
        saved = StoredBookmark(user_id=user_id, **data.model_dump())
        self.bookmarks[saved.id] = saved
        return saved

    async def toggle_bookmark(self, user_id, data):
        for saved in self.bookmarks.values():
            if saved.user_id == user_id and saved.article_id == data.article_id:
                del self.bookmarks[saved.id]
                return None
        return await self.create_bookmark(user_id, data)

    async def delete_bookmark(self, user_id, bookmark_id):
        saved = self.bookmarks.get(bookmark_id)
        if saved is None or saved.user_id != user_id:
            return False
        del self.bookmarks[bookmark_id]
        return True


USER = CurrentUser(id="user-1", name="Asha")


@pytest.fixture
def store(monkeypatch):
    store = InMemoryStore()
    monkeypatch.setattr(comments_router, "persistence_service", store)
    monkeypatch.setattr(bookmarks_router, "persistence_service", store)
    return store


@pytest.fixture
def client(store):
    app.dependency_overrides[get_current_user] = lambda: USER
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_sanitize_comment_strips_markup():
    assert sanitize_comment("<b>Great</b>   read<script>alert(1)</script>") == "Great read"
    assert sanitize_comment("<p>  </p>") == ""


def test_post_and_list_comments(client):
    response = client.post("/api/comments/article-1", json={"text": "<i>Nice</i> piece"})

    assert response.status_code == 201
    comment = response.json()["comment"]
    assert comment["text"] == "Nice piece"
    assert comment["userName"] == "Asha"
    assert comment["articleId"] == "article-1"

    listing = client.get("/api/comments/article-1").json()
    assert listing["ok"] is True
    assert listing["count"] == 1


def test_empty_comment_after_sanitizing_is_rejected(client):
    response = client.post("/api/comments/article-1", json={"text": "<script>x</script>"})

    assert response.status_code == 400
    assert response.json() == {"ok": False, "error": "Comment cannot be empty"}


def test_overlong_comment_is_rejected(client):
    response = client.post("/api/comments/article-1", json={"text": "a" * 1001})

    assert response.status_code == 400


def test_comment_rate_limit(client):
    for n in range(MAX_COMMENTS_PER_HOUR):
        assert client.post("/api/comments/article-1", json={"text": f"comment {n}"}).status_code == 201

    response = client.post("/api/comments/article-1", json={"text": "one too many"})

    assert response.status_code == 429


def test_only_author_can_delete_comment(client, store):
    mine = client.post("/api/comments/article-1", json={"text": "mine"}).json()["comment"]["id"]
    theirs = store.comments
    other = StoredComment("user-2", "Ravi", "article-1", "theirs")
    theirs[other.id] = other

    assert client.delete(f"/api/comments/article-1/{other.id}").status_code == 403
    assert client.delete(f"/api/comments/article-2/{mine}").status_code == 404
    assert client.delete(f"/api/comments/article-1/{mine}").status_code == 200
    assert client.delete(f"/api/comments/article-1/{mine}").status_code == 404


def test_comment_listing_is_public(store):
    response = TestClient(app).get("/api/comments/article-9")

    assert response.status_code == 200
    assert response.json()["items"] == []


def test_duplicate_bookmark_conflicts(client):
    body = {"articleId": "article-1", "title": "Budget", "url": "https://news.example.com/1"}

    assert client.post("/api/bookmarks", json=body).status_code == 201
    response = client.post("/api/bookmarks", json=body)

    assert response.status_code == 409
    assert len(client.get("/api/bookmarks").json()["data"]) == 1


BOOKMARK = {"articleId": "article-1", "title": "Budget", "url": "https://news.example.com/1"}


def test_saved_bookmark_uses_camel_case(client):
    response = client.post("/api/bookmarks", json={**BOOKMARK, "snippet": None})

    assert response.status_code == 201
    saved = response.json()["bookmark"]
    assert saved["articleId"] == "article-1"
    assert saved["snippet"] == ""
    assert "createdAt" in saved


def test_toggle_bookmark_adds_then_removes(client, store):
    added = client.post("/api/bookmarks/toggle", json=BOOKMARK).json()

    assert added["added"] is True
    assert added["removed"] is False
    assert added["item"]["articleId"] == "article-1"

    removed = client.post("/api/bookmarks/toggle", json=BOOKMARK).json()

    assert removed == {"ok": True, "added": False, "removed": True, "item": None}
    assert store.bookmarks == {}


def test_delete_bookmark(client, store):
    bookmark_id = client.post("/api/bookmarks", json=BOOKMARK).json()["bookmark"]["id"]
    other = StoredBookmark("user-2", "article-2", "Other", "https://news.example.com/2")
    store.bookmarks[other.id] = other

    assert client.delete(f"/api/bookmarks/{other.id}").status_code == 404
    response = client.delete(f"/api/bookmarks/{bookmark_id}")

    assert response.status_code == 200
    assert response.json() == {"ok": True, "message": "Bookmark deleted"}
    assert client.delete(f"/api/bookmarks/{bookmark_id}").status_code == 404
    assert client.delete("/api/bookmarks/not-a-uuid").status_code == 400
