"""Custom exceptions for booksearch.

Every error raised by the engine, the backend adapters and the query
compilers derives from `BookSearchError`, so the HTTP layer can map the
whole family to status codes in one place.
"""

from typing import Any, Dict


# Base exception
class BookSearchError(Exception):
    """Base exception for all booksearch errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., document_id, index, field)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Document operation exceptions
class DoesNotExist(BookSearchError):
    """Raised when a document lookup by id finds nothing.

    Example:
        >>> raise DoesNotExist("Document not found", document_id="AV3x1")
    """


class DocumentNotFoundError(BookSearchError):
    """Raised when a write (partial update) targets a missing document.

    Example:
        >>> raise DocumentNotFoundError("Document not found", document_id="AV3x1", operation="update")
    """


# Validation exceptions
class ValidationError(BookSearchError):
    """Raised when request data cannot be turned into a valid document or query."""


class MissingFieldError(ValidationError):
    """Raised when a required field is missing.

    Example:
        >>> raise MissingFieldError("Cannot update without id", field="id", operation="update")
    """


class InvalidFieldError(ValidationError):
    """Raised when a field has an invalid value, or a query uses an unsupported operator.

    Example:
        >>> raise InvalidFieldError("Unsupported operator", field="title", operator="$regex")
    """


# Configuration exceptions
class ConfigurationError(BookSearchError):
    """Raised when configuration is invalid or missing."""


class MissingConfigError(ConfigurationError):
    """Raised when required configuration values are not set.

    Example:
        >>> raise MissingConfigError("Elasticsearch hosts not set", config_key="ES_HOSTS")
    """


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid.

    Example:
        >>> raise InvalidConfigError("ES_PASSWORD requires ES_USERNAME", config_key="ES_USERNAME")
    """


# Connection exceptions
class ConnectionError(BookSearchError):
    """Raised when the search backend cannot be reached.

    Example:
        >>> raise ConnectionError("Elasticsearch unreachable", adapter="Elasticsearch", hosts=["http://es:9200"])
    """


# Search exceptions
class SearchError(BookSearchError):
    """Raised when the backend rejects a search request.

    Example:
        >>> raise SearchError("Search failed", index="book", reason="parsing_exception")
    """
