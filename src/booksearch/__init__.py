"""
booksearch: HTTP CRUD and compound queries over a single book index.

Exposes the `BookEngine`, the backend interface, the document schemas and
the query composer for easy access.
"""

__version__ = "0.1.0"

from .abc import SearchBackend
from .engine import BookEngine
from .querydsl import Q, QueryComposer, QueryDescriptor, compose
from .schema import BookDocument, BookUpdate, ResultPage
from .types import DocId, Source

__all__ = [
    "BookEngine",
    "SearchBackend",
    "BookDocument",
    "BookUpdate",
    "ResultPage",
    "Q",
    "QueryComposer",
    "QueryDescriptor",
    "compose",
    "DocId",
    "Source",
]
