"""HTTP routes for the book index.

| Endpoint              | Description                          | Method |
|-----------------------|--------------------------------------|--------|
| `/`                   | Liveness text                        | GET    |
| `/book/novel/{id}`    | Fetch one book                       | GET    |
| `/book/novel/add`     | Index a new book, returns its id     | POST   |
| `/book/novel/{id}`    | Delete a book                        | DELETE |
| `/book/novel/update`  | Partial update of a book             | PUT    |
| `/book/novel/query`   | Author/title match + word count range| POST   |

Write endpoints answer with the backend result name in upper case
(`DELETED`, `NOT_FOUND`, `UPDATED`, `NOOP`).
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from booksearch.engine import BookEngine
from booksearch.utils import parse_publish_date

from .deps import get_engine

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def index() -> str:
    return "index"


@router.get("/book/novel/{doc_id}")
def get_book(doc_id: str, engine: BookEngine = Depends(get_engine)) -> Dict[str, Any]:
    return engine.get(doc_id).to_source()


@router.post("/book/novel/add", response_class=PlainTextResponse)
def add_book(
    title: str = Query(...),
    author: str = Query(...),
    word_count: int = Query(...),
    publish_date: str = Query(..., description="YYYY-MM-DD HH:MM:SS"),
    engine: BookEngine = Depends(get_engine),
) -> str:
    return engine.add(title, author, word_count, parse_publish_date(publish_date))


@router.delete("/book/novel/{doc_id}", response_class=PlainTextResponse)
def delete_book(doc_id: str, engine: BookEngine = Depends(get_engine)) -> str:
    return engine.delete(doc_id).upper()


@router.put("/book/novel/update", response_class=PlainTextResponse)
def update_book(
    id: str = Query(...),
    title: Optional[str] = Query(None),
    author: Optional[str] = Query(None),
    word_count: Optional[int] = Query(None),
    publish_date: Optional[str] = Query(None, description="YYYY-MM-DD HH:MM:SS"),
    engine: BookEngine = Depends(get_engine),
) -> str:
    published = parse_publish_date(publish_date) if publish_date is not None else None
    return engine.update(id, title=title, author=author, word_count=word_count, publish_date=published).upper()


@router.post("/book/novel/query")
def query_books(
    author: Optional[str] = Query(None),
    title: Optional[str] = Query(None),
    gt_word_count: int = Query(0, ge=0),
    lt_word_count: Optional[int] = Query(None),
    engine: BookEngine = Depends(get_engine),
) -> List[Dict[str, Any]]:
    page = engine.query(author=author, title=title, word_count_min=gt_word_count, word_count_max=lt_word_count)
    return page.sources()
