"""Elasticsearch query DSL compiler.

Transforms universal Q node dicts into an Elasticsearch `bool` query.

Mapping:
- `$match` -> `match` clause under `must` (scored, analyzed text)
- `$eq` / `$in` -> `term` / `terms` under `filter`
- `$ne` / `$nin` -> `term` / `terms` under `must_not`
- `$gt`, `$gte`, `$lt`, `$lte` -> one `range` clause per field under `filter`
- `$and` -> clauses merged into the enclosing `bool`
- `$or` -> `bool.should` with `minimum_should_match: 1`
- `$not` -> `must_not`

Filters run in filter context: they restrict hits without affecting scores.
"""

import json
from typing import Any, Dict, List, Union

from booksearch.exceptions import InvalidFieldError

from .base import BaseWhere
from .utils import RANGE_OPS, field_expr, normalize_where_input

__all__ = (
    "ElasticsearchWhereCompiler",
    "elasticsearch_where",
)

Clauses = Dict[str, List[Dict[str, Any]]]


class ElasticsearchWhereCompiler(BaseWhere):
    """Compile universal query nodes into Elasticsearch query DSL dicts.

    The top-level result is always a `bool` query (or `match_all` for an
    empty node), so callers can rely on `query["bool"]["must"]` and
    `query["bool"]["filter"]` when those sections are non-empty.
    """

    _OP_MAP = {
        "$match": "match",
        "$eq": "term",
        "$ne": "term",
        "$in": "terms",
        "$nin": "terms",
        "$gt": "range",
        "$gte": "range",
        "$lt": "range",
        "$lte": "range",
    }

    def to_where(self, where: Union[Dict[str, Any], Any]) -> Dict[str, Any]:
        """Convert Q object or universal dict to an Elasticsearch query dict.

        Raises:
            TypeError: If input is neither Q object nor dict
            InvalidFieldError: If an unsupported operator is used
        """
        node = normalize_where_input(where)
        return self._node_to_query(node, unwrap=False)

    def to_expr(self, node: Union[Dict[str, Any], Any]) -> str:
        """Render the compiled query as compact JSON for logging."""
        return json.dumps(self.to_where(node), ensure_ascii=False, separators=(",", ":"), default=str)

    def _node_to_query(self, node: Dict[str, Any], unwrap: bool = True) -> Dict[str, Any]:
        clauses: Clauses = {"must": [], "filter": [], "must_not": []}
        self._collect(node, clauses)
        sections = {k: v for k, v in clauses.items() if v}
        if not sections:
            return {"match_all": {}}
        # A lone positive clause needs no bool wrapper when nested
        if unwrap and not clauses["must_not"] and len(clauses["must"]) + len(clauses["filter"]) == 1:
            return (clauses["must"] or clauses["filter"])[0]
        return {"bool": sections}

    def _collect(self, node: Dict[str, Any], clauses: Clauses) -> None:
        if "$and" in node:
            for child in node["$and"]:
                self._collect(child, clauses)
            return
        if "$or" in node:
            should = [self._node_to_query(child) for child in node["$or"]]
            clauses["must"].append({"bool": {"should": should, "minimum_should_match": 1}})
            return
        if "$not" in node:
            clauses["must_not"].append(self._node_to_query(node["$not"]))
            return

        for field, expr in node.items():
            self._collect_field(field, field_expr(expr), clauses)

    def _collect_field(self, field: str, expr: Dict[str, Any], clauses: Clauses) -> None:
        bounds: Dict[str, Any] = {}
        for op, val in expr.items():
            if op not in self._OP_MAP:
                raise InvalidFieldError(
                    f"Operator {op} is not supported. Supported: {', '.join(sorted(self._OP_MAP.keys()))}",
                    field=field,
                    operation="search",
                )
            if op == "$match":
                clauses["must"].append({"match": {field: val}})
            elif op == "$eq":
                clauses["filter"].append({"term": {field: val}})
            elif op == "$in":
                clauses["filter"].append({"terms": {field: list(val)}})
            elif op == "$ne":
                clauses["must_not"].append({"term": {field: val}})
            elif op == "$nin":
                clauses["must_not"].append({"terms": {field: list(val)}})
            else:
                bounds[RANGE_OPS[op]] = val
        if bounds:
            clauses["filter"].append({"range": {field: bounds}})


elasticsearch_where = ElasticsearchWhereCompiler()
