"""Exception-to-response mapping for the HTTP layer.

Library errors map to 4xx; anything else is logged with its traceback and
returned as a 500 by `CatchAllExceptionMiddleware`.
"""

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from booksearch.exceptions import BookSearchError, DocumentNotFoundError, DoesNotExist, ValidationError
from booksearch.logger import Logger

logger = Logger(__name__)

# Most specific first
_STATUS_BY_ERROR = (
    (DoesNotExist, 404),
    (DocumentNotFoundError, 404),
    (ValidationError, 400),
)


def error_body(exc: Exception) -> dict:
    return {"error": type(exc).__name__, "detail": str(exc)}


def status_for(exc: BookSearchError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


async def booksearch_error_handler(request: Request, exc: BookSearchError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s on %s (%d): %s", type(exc).__name__, request.url.path, status, exc, exc_info=exc)
    else:
        logger.message("%s on %s (%d): %s", type(exc).__name__, request.url.path, status, exc)
    return JSONResponse(status_code=status, content=error_body(exc))


class CatchAllExceptionMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error("%s on %s (500): %s", type(exc).__name__, request.url.path, exc, exc_info=True)
            return JSONResponse(status_code=500, content=error_body(exc))


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookSearchError, booksearch_error_handler)
    app.add_middleware(CatchAllExceptionMiddleware)
