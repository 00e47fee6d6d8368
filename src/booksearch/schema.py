"""Pydantic schemas for book documents and search results."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import BOOK_FIELDS
from .exceptions import InvalidFieldError, MissingFieldError
from .settings import settings
from .types import Source
from .utils import parse_stored_date, prune_none, to_epoch_millis


class BookDocument(BaseModel):
    """A novel as stored in the book index.

    `id` is the backend-assigned identifier and never part of the stored
    source; `publish_date` is kept as epoch milliseconds (UTC). Stored fields
    other than the book fields are carried through unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = Field(None, description="Backend document id.")
    title: Optional[str] = Field(None, description="Book title.")
    author: Optional[str] = Field(None, description="Author name.")
    word_count: Optional[int] = Field(None, description="Number of words.")
    publish_date: Optional[int] = Field(None, description="Publish date, epoch milliseconds.")

    @field_validator("publish_date", mode="before")
    @classmethod
    def _coerce_publish_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_stored_date(value)
        if isinstance(value, datetime):
            return to_epoch_millis(value)
        return value

    @property
    def pk(self) -> str:
        if self.id is None:
            raise MissingFieldError("Document ID not set", field="id")
        return self.id

    @classmethod
    def from_source(cls, source: Source | None, doc_id: str | None = None) -> "BookDocument":
        """Build a document from an index `_source` mapping.

        Reading never fails on stored content: a source that does not fit the
        book fields (multi-valued `author`, a date in an unknown format) is
        kept as stored, unvalidated.
        """
        data = dict(source or {})
        data.pop("id", None)
        try:
            return cls(id=doc_id, **data)
        except (pydantic.ValidationError, InvalidFieldError):
            return cls.model_construct(id=doc_id, **data)

    def to_source(self) -> Source:
        """Return the mapping written to (and returned from) the index.

        Absent fields are omitted rather than stored as null.
        """
        source = prune_none({name: getattr(self, name) for name in BOOK_FIELDS})
        source.update(self.model_extra or {})
        return source


class BookUpdate(BaseModel):
    """Partial update: only the fields that are set reach the backend."""

    title: Optional[str] = None
    author: Optional[str] = None
    word_count: Optional[int] = None
    publish_date: Optional[Union[int, datetime]] = None

    def to_partial(self) -> Dict[str, Any]:
        partial = prune_none(self.model_dump())
        if "publish_date" in partial:
            partial["publish_date"] = to_epoch_millis(partial["publish_date"])
        return partial


class ResultPage(BaseModel):
    """First page of a compound query.

    Only one page is ever fetched: size and offset come from settings
    (10 and 0) and are not exposed to callers.
    """

    hits: List[BookDocument] = Field(default_factory=list)
    total: int = 0
    size: int = settings.SEARCH_PAGE_SIZE
    offset: int = settings.SEARCH_PAGE_OFFSET

    def sources(self) -> List[Source]:
        return [hit.to_source() for hit in self.hits]
