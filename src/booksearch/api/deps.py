from fastapi import Request

from booksearch.engine import BookEngine


def get_engine(request: Request) -> BookEngine:
    """Return the engine the app was built with (see `create_app`)."""
    return request.app.state.engine
