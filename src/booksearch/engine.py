"""
Main engine for the book index.

This module provides the `BookEngine`, a thin orchestrator over a pluggable
`SearchBackend`. Each public method is one backend call: get by id, add,
delete, partial update, and the compound author/title/word-count query.
"""

from datetime import datetime
from typing import Optional, Union

from .abc import SearchBackend
from .constants import WriteResult
from .exceptions import DoesNotExist, MissingFieldError
from .logger import Logger
from .querydsl.compose import QueryComposer, QueryDescriptor
from .schema import BookDocument, BookUpdate, ResultPage
from .settings import settings
from .types import DocId


class BookEngine:
    """High-level operations on the book index.

    The backend is injected by the caller (the HTTP app factory or a test),
    so one engine owns exactly one backend handle and nothing is global.

    Attributes:
        backend: Search backend every operation goes through
        composer: Builds the compound query from optional inputs
        page_size: Hits returned by `query` (default SEARCH_PAGE_SIZE)
        page_offset: Hits skipped by `query` (default SEARCH_PAGE_OFFSET)
    """

    def __init__(
        self,
        backend: SearchBackend,
        composer: QueryComposer | None = None,
        page_size: int = settings.SEARCH_PAGE_SIZE,
        page_offset: int = settings.SEARCH_PAGE_OFFSET,
    ) -> None:
        self._backend = backend
        self.composer = composer or QueryComposer()
        self.page_size = page_size
        self.page_offset = page_offset
        self.logger = Logger(self.__class__.__name__)
        self.logger.message(
            "BookEngine initialized: backend=%s index=%s",
            backend.__class__.__name__,
            getattr(backend, "index_name", None),
        )

    @property
    def backend(self) -> SearchBackend:
        return self._backend

    # ------------------------------------------------------------------
    # Single document operations
    # ------------------------------------------------------------------
    def get(self, doc_id: DocId) -> BookDocument:
        """Retrieve one book by id.

        Raises:
            DoesNotExist: If the id is empty or unknown
        """
        if not doc_id:
            raise DoesNotExist("Document id is empty")
        source = self.backend.get(doc_id)
        return BookDocument.from_source(source, doc_id=doc_id)

    def add(
        self,
        title: str,
        author: str,
        word_count: int,
        publish_date: Union[datetime, int, str],
    ) -> DocId:
        """Index a new book and return the id assigned by the backend.

        Examples:
            >>> engine.add("The Hobbit", "Tolkien", 95356, "1937-09-21 00:00:00")
        """
        doc = BookDocument(title=title, author=author, word_count=word_count, publish_date=publish_date)
        doc_id = self.backend.index(doc.to_source())
        self.logger.message("Add pk=%s", doc_id)
        return doc_id

    def delete(self, doc_id: DocId) -> str:
        """Delete a book by id.

        Returns:
            "deleted", or "not_found" if no book has this id
        """
        if not doc_id:
            return WriteResult.NOT_FOUND
        self.logger.message("Delete pk=%s", doc_id)
        return self.backend.delete(doc_id)

    def update(
        self,
        doc_id: DocId,
        title: Optional[str] = None,
        author: Optional[str] = None,
        word_count: Optional[int] = None,
        publish_date: Union[datetime, int, None] = None,
    ) -> str:
        """Partially update a book; only the given fields change.

        Returns:
            Backend write result ("updated" or "noop")

        Raises:
            MissingFieldError: If the id is empty
            DocumentNotFoundError: If no book has this id
        """
        if not doc_id:
            raise MissingFieldError("Cannot update without id", field="id", operation="update")
        changes = BookUpdate(title=title, author=author, word_count=word_count, publish_date=publish_date)
        partial = changes.to_partial()
        self.logger.message("Update pk=%s fields=%s", doc_id, sorted(partial))
        return self.backend.update(doc_id, partial)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def compose(
        self,
        author: Optional[str] = None,
        title: Optional[str] = None,
        word_count_min: Optional[int] = 0,
        word_count_max: Optional[int] = None,
    ) -> QueryDescriptor:
        return self.composer.compose(author, title, word_count_min, word_count_max)

    def query(
        self,
        author: Optional[str] = None,
        title: Optional[str] = None,
        word_count_min: Optional[int] = 0,
        word_count_max: Optional[int] = None,
    ) -> ResultPage:
        """Compound query: text match on author/title AND word count range.

        Always returns the first page only (`page_size` hits from
        `page_offset`).

        Examples:
            >>> engine.query(author="Tolkien", word_count_min=1000)
            >>> engine.query(word_count_min=100, word_count_max=500)
        """
        descriptor = self.compose(author, title, word_count_min, word_count_max)
        if self.logger.is_debug():
            self.logger.debug("Query %s", descriptor.to_expr())

        hits, total = self.backend.search(descriptor.to_q(), limit=self.page_size, offset=self.page_offset)
        return ResultPage(
            hits=[BookDocument.from_source(source, doc_id=doc_id) for doc_id, source in hits],
            total=total,
            size=self.page_size,
            offset=self.page_offset,
        )
