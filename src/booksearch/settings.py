"""Settings for the booksearch service."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class BookSearchSettings(BaseSettings):
    """booksearch configuration settings."""

    # Elasticsearch
    ES_HOSTS: str = "http://localhost:9200"  # comma separated
    ES_API_KEY: Optional[str] = None
    ES_USERNAME: Optional[str] = None
    ES_PASSWORD: Optional[str] = None
    ES_VERIFY_CERTS: bool = True
    ES_REQUEST_TIMEOUT: float = 10.0

    # Index
    BOOK_INDEX: str = "book"

    # Query paging
    SEARCH_PAGE_SIZE: int = 10
    SEARCH_PAGE_OFFSET: int = 0

    # HTTP
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8080

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = BookSearchSettings()
