"""Concrete adapter for Elasticsearch.

This module provides the Elasticsearch implementation of the SearchBackend
interface on top of the official `elasticsearch` client.

Key Features:
    - Lazy client initialization from settings (or an injected client)
    - API key or basic auth, TLS verification and request timeout
    - get / index / partial update / delete against a single index
    - Boolean search compiled from Q objects, DFS query-then-fetch by default
"""

from typing import Any, Dict, List, Tuple, Union

from elasticsearch import ApiError, Elasticsearch, NotFoundError, TransportError

from booksearch.abc import SearchBackend
from booksearch.constants import SEARCH_TYPE_DFS, WriteResult
from booksearch.exceptions import (
    ConnectionError,
    DocumentNotFoundError,
    DoesNotExist,
    InvalidConfigError,
    MissingConfigError,
    MissingFieldError,
    SearchError,
)
from booksearch.logger import Logger
from booksearch.querydsl.compilers.elasticsearch import ElasticsearchWhereCompiler, elasticsearch_where
from booksearch.querydsl.q import Q
from booksearch.settings import settings as api_settings
from booksearch.types import DocId, Hits, Source
from booksearch.utils import extract_total, split_hosts


def _body(resp: Any) -> Dict[str, Any]:
    """Return the JSON body of a client response (`ObjectApiResponse` or plain dict)."""
    return getattr(resp, "body", resp)


class ElasticsearchAdapter(SearchBackend):
    """Search backend for a single Elasticsearch index.

    Attributes:
        index_name: Target index (default from BOOK_INDEX)
        search_type: Search type passed to every search request
    """

    where_compiler: ElasticsearchWhereCompiler = elasticsearch_where

    def __init__(
        self,
        index_name: str | None = None,
        client: Elasticsearch | None = None,
        search_type: str | None = SEARCH_TYPE_DFS,
    ) -> None:
        self.index_name = index_name or api_settings.BOOK_INDEX
        self.search_type = search_type
        self._client = client
        self.logger = Logger(self.__class__.__name__)

    @property
    def client(self) -> Elasticsearch:
        """Lazily initialize and return the Elasticsearch client.

        Auth priority: ES_API_KEY, then ES_USERNAME/ES_PASSWORD, then none.

        Raises:
            MissingConfigError: If ES_HOSTS is empty
            InvalidConfigError: If a password is set without a username
            ConnectionError: If client construction fails
        """
        if self._client is None:
            hosts = split_hosts(api_settings.ES_HOSTS)
            if not hosts:
                raise MissingConfigError("Elasticsearch hosts not set", config_key="ES_HOSTS")

            options: Dict[str, Any] = {
                "verify_certs": api_settings.ES_VERIFY_CERTS,
                "request_timeout": api_settings.ES_REQUEST_TIMEOUT,
            }
            if api_settings.ES_API_KEY:
                options["api_key"] = api_settings.ES_API_KEY
            elif api_settings.ES_USERNAME:
                options["basic_auth"] = (api_settings.ES_USERNAME, api_settings.ES_PASSWORD or "")
            elif api_settings.ES_PASSWORD:
                raise InvalidConfigError(
                    "ES_PASSWORD is set without ES_USERNAME",
                    config_key="ES_USERNAME",
                    adapter="Elasticsearch",
                )

            try:
                self._client = Elasticsearch(hosts=hosts, **options)
            except Exception as exc:
                raise ConnectionError(
                    "Failed to initialize Elasticsearch client",
                    adapter="Elasticsearch",
                    hosts=hosts,
                    original_error=str(exc),
                ) from exc
            self.logger.message("Elasticsearch client initialized (hosts=%s).", hosts)
        return self._client

    def _unreachable(self, exc: TransportError, operation: str) -> ConnectionError:
        return ConnectionError(
            "Elasticsearch request failed",
            adapter="Elasticsearch",
            index=self.index_name,
            operation=operation,
            original_error=str(exc),
        )

    # ------------------------------------------------------------------
    # CRUD Operations
    # ------------------------------------------------------------------

    def get(self, doc_id: DocId) -> Source:
        """Fetch one document source by id.

        Raises:
            DoesNotExist: If the id is empty or no document has it
            ConnectionError: If the cluster cannot be reached
        """
        if not doc_id:
            raise DoesNotExist("Document id is empty", index=self.index_name)
        try:
            resp = _body(self.client.get(index=self.index_name, id=doc_id))
        except NotFoundError as exc:
            raise DoesNotExist("Document not found", document_id=doc_id, index=self.index_name) from exc
        except TransportError as exc:
            raise self._unreachable(exc, "get") from exc
        if not resp.get("found", True):
            raise DoesNotExist("Document not found", document_id=doc_id, index=self.index_name)
        return dict(resp["_source"] or {})

    def index(self, source: Source, doc_id: DocId | None = None) -> DocId:
        """Index a document; Elasticsearch generates the id when none is given."""
        try:
            resp = _body(self.client.index(index=self.index_name, id=doc_id, document=source))
        except TransportError as exc:
            raise self._unreachable(exc, "index") from exc
        new_id = resp["_id"]
        self.logger.message("Indexed document with id '%s' (%s).", new_id, resp.get("result"))
        return new_id

    def update(self, doc_id: DocId, partial: Dict[str, Any]) -> str:
        """Apply a partial document update.

        Returns:
            "updated", or "noop" when nothing changed

        Raises:
            MissingFieldError: If the id is empty
            DocumentNotFoundError: If the document does not exist
        """
        if not doc_id:
            raise MissingFieldError("'id' is required for update", field="id", operation="update")
        try:
            resp = _body(self.client.update(index=self.index_name, id=doc_id, doc=partial))
        except NotFoundError as exc:
            raise DocumentNotFoundError(
                "Document not found", document_id=doc_id, index=self.index_name, operation="update"
            ) from exc
        except TransportError as exc:
            raise self._unreachable(exc, "update") from exc
        result = resp.get("result", WriteResult.UPDATED)
        self.logger.message("Updated document with id '%s' (%s).", doc_id, result)
        return result

    def delete(self, doc_id: DocId) -> str:
        """Delete a document by id; a missing document is reported, not raised."""
        try:
            resp = _body(self.client.delete(index=self.index_name, id=doc_id))
        except NotFoundError:
            self.logger.message("Delete of missing document '%s'.", doc_id)
            return WriteResult.NOT_FOUND
        except TransportError as exc:
            raise self._unreachable(exc, "delete") from exc
        result = resp.get("result", WriteResult.DELETED)
        self.logger.message("Deleted document with id '%s' (%s).", doc_id, result)
        return result

    # ------------------------------------------------------------------
    # Search Operations
    # ------------------------------------------------------------------

    def search(
        self,
        where: Union[Q, Dict[str, Any], None] = None,
        limit: int | None = None,
        offset: int | None = None,
        **kwargs: Any,
    ) -> Hits:
        """Run a boolean search.

        Args:
            where: Q object or universal dict (None matches all documents)
            limit: Page size (default SEARCH_PAGE_SIZE)
            offset: Hits to skip (default SEARCH_PAGE_OFFSET)
            **kwargs: Extra keyword arguments forwarded to `Elasticsearch.search`

        Returns:
            `([(id, source), ...], total)`

        Raises:
            SearchError: If the cluster rejects the request
            ConnectionError: If the cluster cannot be reached
        """
        if limit is None:
            limit = api_settings.SEARCH_PAGE_SIZE
        if offset is None:
            offset = api_settings.SEARCH_PAGE_OFFSET

        query = self.where_compiler.to_where(where) if where is not None else {"match_all": {}}
        request: Dict[str, Any] = {"index": self.index_name, "query": query, "from_": offset, "size": limit}
        if self.search_type:
            request["search_type"] = self.search_type
        request.update(kwargs)

        try:
            resp = _body(self.client.search(**request))
        except NotFoundError as exc:
            raise SearchError("Index not found", index=self.index_name, reason=str(exc)) from exc
        except ApiError as exc:
            raise SearchError("Search failed", index=self.index_name, reason=str(exc)) from exc
        except TransportError as exc:
            raise self._unreachable(exc, "search") from exc

        hits = resp.get("hits", {})
        results: List[Tuple[DocId, Source]] = [
            (hit.get("_id"), dict(hit.get("_source") or {})) for hit in hits.get("hits", [])
        ]
        total = extract_total(hits)
        self.logger.message("Search returned %d of %d hits.", len(results), total)
        return results, total
