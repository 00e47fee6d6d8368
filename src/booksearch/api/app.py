"""FastAPI application factory."""

from fastapi import FastAPI

from booksearch import __version__
from booksearch.engine import BookEngine
from booksearch.logger import Logger

from .errors import install_error_handlers
from .routes import router

logger = Logger(__name__)


def build_default_engine() -> BookEngine:
    """Engine over Elasticsearch configured from settings."""
    from booksearch.dbs.elasticsearch import ElasticsearchAdapter

    return BookEngine(ElasticsearchAdapter())


def create_app(engine: BookEngine | None = None) -> FastAPI:
    """Build the HTTP app around `engine`.

    Args:
        engine: Engine the routes use; defaults to an Elasticsearch-backed
            engine built from settings. The client connects lazily, on the
            first request.
    """
    app = FastAPI(title="booksearch", version=__version__)
    app.state.engine = engine or build_default_engine()
    app.include_router(router)
    install_error_handlers(app)
    logger.message("App created with %s", app.state.engine.backend.__class__.__name__)
    return app
