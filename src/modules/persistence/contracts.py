import uuid
from abc import ABC, abstractmethod
from datetime import datetime

from src.modules.persistence.models import Bookmark, Comment, ReadingHistory
from src.modules.persistence.schemas import BookmarkData, CategoryStat, HistoryData


class BookmarkContract(ABC):
    @abstractmethod
    async def list_bookmarks(self, user_id: str) -> list[Bookmark]: ...

    @abstractmethod
    async def create_bookmark(self, user_id: str, data: BookmarkData) -> Bookmark | None: ...

    @abstractmethod
    async def toggle_bookmark(self, user_id: str, data: BookmarkData) -> Bookmark | None: ...

    @abstractmethod
    async def delete_bookmark(self, user_id: str, bookmark_id: uuid.UUID) -> bool: ...


class CommentContract(ABC):
    @abstractmethod
    async def list_comments(self, article_id: str, limit: int = 200) -> list[Comment]: ...

    @abstractmethod
    async def count_comments_since(self, user_id: str, since: datetime) -> int: ...

    @abstractmethod
    async def create_comment(
        self, user_id: str, user_name: str, article_id: str, text: str
    ) -> Comment: ...

    @abstractmethod
    async def get_comment(self, comment_id: uuid.UUID) -> Comment | None: ...

    @abstractmethod
    async def delete_comment(self, comment_id: uuid.UUID) -> bool: ...


class ReadingHistoryContract(ABC):
    @abstractmethod
    async def record_view(
        self, user_id: str, data: HistoryData
    ) -> tuple[ReadingHistory, bool]: ...

    @abstractmethod
    async def list_history(
        self, user_id: str, limit: int = 100, skip: int = 0
    ) -> tuple[list[ReadingHistory], int]: ...

    @abstractmethod
    async def category_stats(self, user_id: str) -> list[CategoryStat]: ...

    @abstractmethod
    async def top_articles(self, user_id: str, limit: int = 5) -> list[ReadingHistory]: ...

    @abstractmethod
    async def active_days(self, user_id: str, since: datetime) -> int: ...

    @abstractmethod
    async def delete_history_entry(self, user_id: str, entry_id: uuid.UUID) -> bool: ...

    @abstractmethod
    async def clear_history(self, user_id: str) -> int: ...
