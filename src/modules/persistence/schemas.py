from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel


class BookmarkData(BaseModel):
    article_id: str
    title: str
    url: str
    snippet: str = ""
    image: str = ""


class HistoryData(BaseModel):
    article_id: str
    title: str = "Untitled"
    category: str = "General"
    time_spent: int = 0


@dataclass
class CategoryStat:
    category: str
    total_time: int
    article_count: int
    last_viewed: datetime | None
