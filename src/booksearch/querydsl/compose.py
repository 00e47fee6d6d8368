"""Compound query composition.

`QueryComposer` turns a set of optional request inputs into a
`QueryDescriptor`: required text matches AND-ed together plus exactly one
numeric range filter. It is a pure function of its inputs; it never raises
and never touches the backend.

Range quirk: the upper bound is applied only when it is present *and*
strictly positive. `word_count_max=0` (or any negative value) means
"no upper bound", not "at most zero words".
"""

from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from booksearch.constants import BookField

from .compilers.elasticsearch import elasticsearch_where
from .q import Q

__all__ = (
    "FieldPredicate",
    "RangePredicate",
    "QueryDescriptor",
    "QueryComposer",
    "compose",
)


class FieldPredicate(BaseModel):
    """Require `field` to text-match `value`."""

    model_config = ConfigDict(frozen=True)

    field: str
    value: str

    def to_q(self) -> Q:
        return Q(**{f"{self.field}__match": self.value})


class RangePredicate(BaseModel):
    """Inclusive numeric interval on `field`; `lte=None` means unbounded."""

    model_config = ConfigDict(frozen=True)

    field: str
    gte: int = 0
    lte: Optional[int] = None

    def to_q(self) -> Q:
        filters: Dict[str, int] = {f"{self.field}__gte": self.gte}
        if self.lte is not None:
            filters[f"{self.field}__lte"] = self.lte
        return Q(**filters)


class QueryDescriptor(BaseModel):
    """Match predicates (all required, in order) plus one range filter.

    Descriptors are built per request and compare structurally.
    """

    model_config = ConfigDict(frozen=True)

    must: Tuple[FieldPredicate, ...] = ()
    range: RangePredicate

    def to_q(self) -> Q:
        return Q.all_of(*(p.to_q() for p in self.must), self.range.to_q())

    def to_query(self) -> Dict[str, Any]:
        """Elasticsearch form: `{"bool": {"must": [...], "filter": [range]}}`."""
        return elasticsearch_where.to_where(self.to_q())

    def to_expr(self) -> str:
        return elasticsearch_where.to_expr(self.to_q())


class QueryComposer:
    """Build `QueryDescriptor`s over a fixed set of match fields and one range field.

    Args:
        match_fields: Text fields, in the order their clauses are emitted
        range_field: Numeric field constrained by the range filter
    """

    def __init__(
        self,
        match_fields: Sequence[str] = (BookField.AUTHOR, BookField.TITLE),
        range_field: str = BookField.WORD_COUNT,
    ) -> None:
        self.match_fields = tuple(match_fields)
        self.range_field = range_field

    def compose_fields(
        self,
        matches: Mapping[str, Optional[str]],
        lower: Optional[int] = None,
        upper: Optional[int] = None,
    ) -> QueryDescriptor:
        """Compose from an explicit field -> value mapping.

        Fields outside `match_fields` are ignored; `None` values are skipped.
        A missing `lower` is 0 and a non-positive `upper` is dropped.
        """
        must = tuple(
            FieldPredicate(field=field, value=matches[field])
            for field in self.match_fields
            if matches.get(field) is not None
        )
        gte = 0 if lower is None else lower
        lte = upper if upper is not None and upper > 0 else None
        return QueryDescriptor(must=must, range=RangePredicate(field=self.range_field, gte=gte, lte=lte))

    def compose(
        self,
        author: Optional[str] = None,
        title: Optional[str] = None,
        word_count_min: Optional[int] = 0,
        word_count_max: Optional[int] = None,
    ) -> QueryDescriptor:
        """Compose the book query from optional request inputs.

        Examples:
            >>> QueryComposer().compose(author="Tolkien").to_query()
            {'bool': {'must': [{'match': {'author': 'Tolkien'}}], 'filter': [{'range': {'word_count': {'gte': 0}}}]}}
        """
        return self.compose_fields(
            {BookField.AUTHOR: author, BookField.TITLE: title},
            lower=word_count_min,
            upper=word_count_max,
        )


_default_composer = QueryComposer()


def compose(
    author: Optional[str] = None,
    title: Optional[str] = None,
    word_count_min: Optional[int] = 0,
    word_count_max: Optional[int] = None,
) -> QueryDescriptor:
    """Module-level shortcut for `QueryComposer().compose`."""
    return _default_composer.compose(author, title, word_count_min, word_count_max)
