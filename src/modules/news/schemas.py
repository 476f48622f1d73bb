from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator
from pydantic.alias_generators import to_camel

NO_URL = "#"
PLACEHOLDER_IMAGE = "https://via.placeholder.com/600x400?text=News"


class CamelModel(BaseModel):
    """Serializes with camelCase keys and accepts both spellings on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NormalizedArticle(CamelModel):
    """Canonical article shape produced by every provider adapter."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    snippet: str = ""
    url: str = NO_URL
    image: str = PLACEHOLDER_IMAGE
    published_at: datetime
    source: str
    category: str
    ai_summary: str | None = None


class NewsResponse(CamelModel):
    ok: bool = True
    from_cache: bool = False
    is_fallback: bool = False
    ai_enabled: bool = False
    category: str
    total: int
    page: int
    page_size: int
    data: list[NormalizedArticle]
    error: str | None = None


class LocalNewsResponse(CamelModel):
    ok: bool = True
    from_cache: bool = False
    is_fallback: bool = False
    ai_enabled: bool = False
    location: str
    total: int
    page: int
    page_size: int
    data: list[NormalizedArticle]
    error: str | None = None


class SummaryRequest(BaseModel):
    url: HttpUrl | None = None
    text: str | None = Field(default=None, min_length=10, max_length=5000)

    @model_validator(mode="before")
    @classmethod
    def _strip_text(cls, data):
        if isinstance(data, dict) and isinstance(data.get("text"), str):
            data = {**data, "text": data["text"].strip()}
        return data

    @model_validator(mode="after")
    def _require_url_or_text(self) -> "SummaryRequest":
        if self.url is None and self.text is None:
            raise ValueError("Provide url or text to summarize")
        return self


class SummaryResponse(BaseModel):
    ok: bool = True
    summary: str
