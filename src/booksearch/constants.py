"""
Field names and fixed values shared by the engine, adapter and API.
"""


class BookField:
    TITLE = "title"
    AUTHOR = "author"
    WORD_COUNT = "word_count"
    PUBLISH_DATE = "publish_date"


BOOK_FIELDS = (
    BookField.TITLE,
    BookField.AUTHOR,
    BookField.WORD_COUNT,
    BookField.PUBLISH_DATE,
)

# Request format for publish_date, e.g. "2017-08-01 12:00:00"
PUBLISH_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Global term statistics so scores are comparable across shards
SEARCH_TYPE_DFS = "dfs_query_then_fetch"


class WriteResult:
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    NOOP = "noop"
