"""Run the HTTP API: `python -m booksearch.api`."""

import uvicorn

from booksearch.settings import settings

from .app import create_app


def main() -> None:
    uvicorn.run(create_app(), host=settings.API_HOST, port=settings.API_PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
