import logging
import uuid
from datetime import datetime, timedelta

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.config.database import async_session
from src.modules.persistence.contracts import (
    BookmarkContract,
    CommentContract,
    ReadingHistoryContract,
)
from src.modules.persistence.models import Bookmark, Comment, ReadingHistory, utcnow
from src.modules.persistence.schemas import BookmarkData, CategoryStat, HistoryData

logger = logging.getLogger(__name__)

HISTORY_MERGE_WINDOW = timedelta(minutes=5)


class PersistenceService(BookmarkContract, CommentContract, ReadingHistoryContract):

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None = None) -> None:
        self._session = session_factory or async_session

    # ── Bookmarks ────────────────────────────────────────────────

    async def list_bookmarks(self, user_id: str) -> list[Bookmark]:
        async with self._session() as session:
            result = await session.execute(
                select(Bookmark)
                .where(Bookmark.user_id == user_id)
                .order_by(Bookmark.created_at.desc())
            )
            return list(result.scalars().all())

    @staticmethod
    async def _find_bookmark(
        session: AsyncSession, user_id: str, article_id: str
    ) -> Bookmark | None:
        result = await session.execute(
            select(Bookmark).where(
                Bookmark.user_id == user_id, Bookmark.article_id == article_id
            )
        )
        return result.scalar_one_or_none()

    async def create_bookmark(self, user_id: str, data: BookmarkData) -> Bookmark | None:
        async with self._session() as session:
            if await self._find_bookmark(session, user_id, data.article_id):
                return None
            bookmark = Bookmark(user_id=user_id, **data.model_dump())
            session.add(bookmark)
            try:
                await session.commit()
            except IntegrityError:
                # a concurrent save of the same article won the unique constraint
                await session.rollback()
                logger.info("Bookmark %s already saved by user %s", data.article_id, user_id)
                return None
            await session.refresh(bookmark)
            return bookmark

    async def toggle_bookmark(self, user_id: str, data: BookmarkData) -> Bookmark | None:
        """Remove the bookmark if present (returns None), otherwise create it."""
        async with self._session() as session:
            existing = await self._find_bookmark(session, user_id, data.article_id)
            if existing:
                await session.delete(existing)
                await session.commit()
                return None
            bookmark = Bookmark(user_id=user_id, **data.model_dump())
            session.add(bookmark)
            await session.commit()
            await session.refresh(bookmark)
            return bookmark

    async def delete_bookmark(self, user_id: str, bookmark_id: uuid.UUID) -> bool:
        async with self._session() as session:
            bookmark = await session.get(Bookmark, bookmark_id)
            if not bookmark or bookmark.user_id != user_id:
                return False
            await session.delete(bookmark)
            await session.commit()
            return True

    # ── Comments ─────────────────────────────────────────────────

    async def list_comments(self, article_id: str, limit: int = 200) -> list[Comment]:
        async with self._session() as session:
            result = await session.execute(
                select(Comment)
                .where(Comment.article_id == article_id)
                .order_by(Comment.created_at.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    async def count_comments_since(self, user_id: str, since: datetime) -> int:
        async with self._session() as session:
            result = await session.execute(
                select(func.count())
                .select_from(Comment)
                .where(Comment.user_id == user_id, Comment.created_at >= since)
            )
            return result.scalar_one()

    async def create_comment(
        self, user_id: str, user_name: str, article_id: str, text: str
    ) -> Comment:
        async with self._session() as session:
            comment = Comment(
                user_id=user_id, user_name=user_name, article_id=article_id, text=text
            )
            session.add(comment)
            await session.commit()
            await session.refresh(comment)
            return comment

    async def get_comment(self, comment_id: uuid.UUID) -> Comment | None:
        async with self._session() as session:
            return await session.get(Comment, comment_id)

    async def delete_comment(self, comment_id: uuid.UUID) -> bool:
        async with self._session() as session:
            comment = await session.get(Comment, comment_id)
            if not comment:
                return False
            await session.delete(comment)
            await session.commit()
            return True

    # ── Reading history ──────────────────────────────────────────

    async def record_view(
        self, user_id: str, data: HistoryData
    ) -> tuple[ReadingHistory, bool]:
        """Add a history entry, merging into a view of the same article from the last 5 minutes.

        Returns the entry and whether an existing one was updated.
        """
        now = utcnow()
        async with self._session() as session:
            result = await session.execute(
                select(ReadingHistory)
                .where(
                    ReadingHistory.user_id == user_id,
                    ReadingHistory.article_id == data.article_id,
                    ReadingHistory.viewed_at >= now - HISTORY_MERGE_WINDOW,
                )
                .order_by(ReadingHistory.viewed_at.desc())
                .limit(1)
            )
            entry = result.scalar_one_or_none()
            updated = entry is not None
            if entry:
                entry.time_spent = (entry.time_spent or 0) + data.time_spent
                entry.views = (entry.views or 1) + 1
                entry.viewed_at = now
            else:
                entry = ReadingHistory(user_id=user_id, viewed_at=now, **data.model_dump())
                session.add(entry)
            await session.commit()
            await session.refresh(entry)
            return entry, updated

    async def list_history(
        self, user_id: str, limit: int = 100, skip: int = 0
    ) -> tuple[list[ReadingHistory], int]:
        async with self._session() as session:
            result = await session.execute(
                select(ReadingHistory)
                .where(ReadingHistory.user_id == user_id)
                .order_by(ReadingHistory.viewed_at.desc())
                .offset(skip)
                .limit(limit)
            )
            total = await session.execute(
                select(func.count())
                .select_from(ReadingHistory)
                .where(ReadingHistory.user_id == user_id)
            )
            return list(result.scalars().all()), total.scalar_one()

    async def category_stats(self, user_id: str) -> list[CategoryStat]:
        total_time = func.coalesce(func.sum(ReadingHistory.time_spent), 0)
        async with self._session() as session:
            result = await session.execute(
                select(
                    ReadingHistory.category,
                    total_time,
                    func.count(ReadingHistory.id),
                    func.max(ReadingHistory.viewed_at),
                )
                .where(ReadingHistory.user_id == user_id)
                .group_by(ReadingHistory.category)
                .order_by(total_time.desc())
            )
            return [
                CategoryStat(
                    category=category,
                    total_time=int(seconds),
                    article_count=count,
                    last_viewed=last_viewed,
                )
                for category, seconds, count, last_viewed in result.all()
            ]

    async def top_articles(self, user_id: str, limit: int = 5) -> list[ReadingHistory]:
        async with self._session() as session:
            result = await session.execute(
                select(ReadingHistory)
                .where(ReadingHistory.user_id == user_id)
                .order_by(ReadingHistory.time_spent.desc())
                .limit(limit)
            )
            return list(result.scalars().all())

    async def active_days(self, user_id: str, since: datetime) -> int:
        async with self._session() as session:
            result = await session.execute(
                select(ReadingHistory.viewed_at).where(
                    ReadingHistory.user_id == user_id,
                    ReadingHistory.viewed_at >= since,
                )
            )
            return len({viewed_at.date() for viewed_at in result.scalars().all()})

    async def delete_history_entry(self, user_id: str, entry_id: uuid.UUID) -> bool:
        async with self._session() as session:
            entry = await session.get(ReadingHistory, entry_id)
            if not entry or entry.user_id != user_id:
                return False
            await session.delete(entry)
            await session.commit()
            return True

    async def clear_history(self, user_id: str) -> int:
        async with self._session() as session:
            result = await session.execute(
                delete(ReadingHistory).where(ReadingHistory.user_id == user_id)
            )
            await session.commit()
        logger.info("Cleared %d history entries for user %s", result.rowcount, user_id)
        return result.rowcount


persistence_service = PersistenceService()
