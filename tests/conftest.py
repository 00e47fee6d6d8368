"""Pytest configuration and fixtures for booksearch tests."""

import re
import uuid
from typing import Any, Dict, List, Optional, Tuple, Union

import pytest
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from booksearch.abc import SearchBackend
from booksearch.api import create_app
from booksearch.constants import WriteResult
from booksearch.engine import BookEngine
from booksearch.exceptions import DocumentNotFoundError, DoesNotExist
from booksearch.querydsl.q import Q
from booksearch.types import DocId, Hits, Source

# Load environment variables
load_dotenv()

_TOKEN = re.compile(r"\w+")


def _tokens(value: Any) -> set:
    return set(_TOKEN.findall(str(value).lower()))


class InMemoryBackend(SearchBackend):
    """In-memory backend to test the engine and API without Elasticsearch.

    - Stores sources in a dict keyed by id
    - Evaluates universal query dicts; `$match` is any-token, case-insensitive
    - Records the last search call for assertions
    """

    name = "inmemory"

    def __init__(self, index_name: str = "book") -> None:
        self.index_name = index_name
        self._docs: Dict[str, Source] = {}
        self.last_search: Optional[Dict[str, Any]] = None

    def get(self, doc_id: DocId) -> Source:
        if doc_id not in self._docs:
            raise DoesNotExist("Document not found", document_id=doc_id)
        return dict(self._docs[doc_id])

    def index(self, source: Source, doc_id: DocId | None = None) -> DocId:
        doc_id = doc_id or uuid.uuid4().hex[:20]
        self._docs[doc_id] = dict(source)
        return doc_id

    def update(self, doc_id: DocId, partial: Dict[str, Any]) -> str:
        if doc_id not in self._docs:
            raise DocumentNotFoundError("Document not found", document_id=doc_id)
        current = self._docs[doc_id]
        if all(current.get(k) == v for k, v in partial.items()):
            return WriteResult.NOOP
        current.update(partial)
        return WriteResult.UPDATED

    def delete(self, doc_id: DocId) -> str:
        if self._docs.pop(doc_id, None) is None:
            return WriteResult.NOT_FOUND
        return WriteResult.DELETED

    def search(
        self,
        where: Union[Q, Dict[str, Any], None] = None,
        limit: int = 10,
        offset: int = 0,
        **kwargs: Any,
    ) -> Hits:
        if isinstance(where, Q):
            where = where.to_dict()
        self.last_search = {"where": where, "limit": limit, "offset": offset, **kwargs}

        def eval_condition(val: Any, cond: Dict[str, Any]) -> bool:
            for op, expected in cond.items():
                if op == "$match":
                    if val is None or not (_tokens(val) & _tokens(expected)):
                        return False
                elif op == "$eq" and val != expected:
                    return False
                elif op == "$ne" and val == expected:
                    return False
                elif op == "$gt" and (val is None or not val > expected):
                    return False
                elif op == "$gte" and (val is None or not val >= expected):
                    return False
                elif op == "$lt" and (val is None or not val < expected):
                    return False
                elif op == "$lte" and (val is None or not val <= expected):
                    return False
                elif op == "$in" and val not in expected:
                    return False
                elif op == "$nin" and val in expected:
                    return False
            return True

        def eval_where(source: Source, w: Dict[str, Any]) -> bool:
            if "$and" in w:
                return all(eval_where(source, x) for x in w["$and"])
            if "$or" in w:
                return any(eval_where(source, x) for x in w["$or"])
            if "$not" in w:
                return not eval_where(source, w["$not"])
            return all(
                eval_condition(source.get(k), v if isinstance(v, dict) else {"$eq": v}) for k, v in w.items()
            )

        matched: List[Tuple[DocId, Source]] = [
            (doc_id, dict(source)) for doc_id, source in self._docs.items() if not where or eval_where(source, where)
        ]
        return matched[offset : offset + limit], len(matched)


BOOKS = [
    ("b1", {"title": "The Hobbit", "author": "J. R. R. Tolkien", "word_count": 95356, "publish_date": -1018483200000}),
    (
        "b2",
        {"title": "The Fellowship of the Ring", "author": "J. R. R. Tolkien", "word_count": 187790, "publish_date": -488592000000},
    ),
    ("b3", {"title": "Animal Farm", "author": "George Orwell", "word_count": 29966, "publish_date": -775440000000}),
    ("b4", {"title": "Nineteen Eighty-Four", "author": "George Orwell", "word_count": 88942, "publish_date": -649900800000}),
    ("b5", {"title": "The Little Prince", "author": "Antoine de Saint-Exupery", "word_count": 17000}),
]


@pytest.fixture
def backend() -> InMemoryBackend:
    """In-memory backend seeded with five books."""
    store = InMemoryBackend()
    for doc_id, source in BOOKS:
        store.index(source, doc_id=doc_id)
    return store


@pytest.fixture
def engine(backend) -> BookEngine:
    return BookEngine(backend)


@pytest.fixture
def client(engine) -> TestClient:
    """HTTP client over an app wired to the in-memory engine."""
    app = create_app(engine)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
