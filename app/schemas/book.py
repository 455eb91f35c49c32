"""Book request schemas - field binding and validation for the book endpoints."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from app.core.dates import format_date, parse_date


def _is_blank(v) -> bool:
    return isinstance(v, str) and not v.strip()


class _Params(BaseModel):
    """Blank strings from query/form binding count as missing."""

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, v):
        return None if _is_blank(v) else v


class BookId(_Params):
    id: str | None = None


class BookCreate(_Params):
    """A novel to index. A record without title or author is not a book, so both are required."""

    title: str
    author: str
    word_count: int | None = None
    publish_date: datetime | None = None

    @field_validator("publish_date", mode="before")
    @classmethod
    def _parse_publish_date(cls, v):
        # Only 'yyyy-MM-dd HH:mm:ss' is accepted, not ISO 8601
        if _is_blank(v):
            return None
        if isinstance(v, str):
            return parse_date(v)
        return v

    def to_document(self) -> dict:
        """Document body for Elasticsearch. Absent fields are left out."""
        doc = {
            "title": self.title,
            "author": self.author,
            "word_count": self.word_count,
            "publish_date": format_date(self.publish_date),
        }
        return {k: v for k, v in doc.items() if v is not None}


class BookUpdate(BookId):
    title: str | None = None
    author: str | None = None

    def to_partial_document(self) -> dict:
        doc = {}
        if self.author is not None:
            doc["author"] = self.author
        if self.title is not None:
            doc["title"] = self.title
        return doc


class BookQuery(_Params):
    author: str | None = None
    title: str | None = None
    gt_word_count: int = 0
    lt_word_count: int | None = None

    @field_validator("gt_word_count", mode="before")
    @classmethod
    def _default_lower_bound(cls, v):
        return 0 if v is None or _is_blank(v) else v
