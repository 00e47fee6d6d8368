"""Abstract interface for search backends.

`BookEngine` talks to the index only through `SearchBackend`, so the
Elasticsearch adapter can be swapped for an in-memory double in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Union

from .querydsl.compilers.base import BaseWhere
from .querydsl.q import Q
from .types import DocId, Hits, Source


class SearchBackend(ABC):
    """Single-index document store with boolean search.

    Attributes:
        index_name: Name of the index every operation targets
        where_compiler: Compiler turning universal nodes into native queries
    """

    index_name: str
    where_compiler: BaseWhere | None = None

    @abstractmethod
    def get(self, doc_id: DocId) -> Source:
        """Return the stored source of one document.

        Raises:
            DoesNotExist: If no document has this id
        """

    @abstractmethod
    def index(self, source: Source, doc_id: DocId | None = None) -> DocId:
        """Store a document and return its (possibly generated) id."""

    @abstractmethod
    def update(self, doc_id: DocId, partial: Dict[str, Any]) -> str:
        """Merge `partial` into an existing document; return the write result.

        Raises:
            DocumentNotFoundError: If no document has this id
        """

    @abstractmethod
    def delete(self, doc_id: DocId) -> str:
        """Delete one document; return `"deleted"` or `"not_found"`."""

    @abstractmethod
    def search(
        self,
        where: Union[Q, Dict[str, Any], None] = None,
        limit: int = 10,
        offset: int = 0,
        **kwargs: Any,
    ) -> Hits:
        """Return `([(id, source), ...], total)` for documents matching `where`.

        `where` is a `Q` or universal dict; `None` matches everything.
        """
