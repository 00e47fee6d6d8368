"""Query DSL core utilities.

This module defines the `Q` class used to compose structured filter
expressions in a backend-agnostic way. A `Q` node can be turned into a
universal dict representation and then compiled into a backend-native
query via the compilers.

Typical usage:

- Build filters: `Q(author__match="Tolkien") & Q(word_count__gte=1000)`
- Negate: `~Q(author__eq="Anonymous")`
- Compile: `q.to_where("elasticsearch")` or `q.to_expr("elasticsearch")`
"""

from __future__ import annotations

from copy import deepcopy
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Optional

if TYPE_CHECKING:
    from .compilers.base import BaseWhere

BackendType = Literal["generic", "elasticsearch"]


class Q:
    """Composable boolean query node.

    A `Q` instance holds leaf-level filters (e.g., `field__op=value`) or
    boolean combinations of child `Q` nodes using `$and` / `$or` connectors.

    - Use `&` to combine with logical AND.
    - Use `|` to combine with logical OR.
    - Use `~` to negate a node.

    Filter keys follow the `field__lookup` convention where lookup is one
    of: `match`, `eq`, `ne`, `gt`, `gte`, `lt`, `lte`, `in`, `nin`.
    `match` is full-text (analyzed) matching; every other lookup is exact
    and non-scored. A bare key means `eq`.
    """

    _OP_MAP = {
        "match": "$match",
        "eq": "$eq",
        "ne": "$ne",
        "gt": "$gt",
        "gte": "$gte",
        "lt": "$lt",
        "lte": "$lte",
        "in": "$in",
        "nin": "$nin",
    }

    def __init__(self, negate: bool = False, **filters: Any):
        """Initialize a `Q` node.

        - negate: whether this node is negated.
        - filters: leaf-level filters using `field__lookup=value` pairs.
        """
        self.filters: Dict[str, Any] = filters
        self.children: List["Q"] = []
        self.connector = "$and"
        self.negate = negate

    @classmethod
    def all_of(cls, *nodes: "Q") -> "Q":
        """Return one `$and` node over `nodes` without nesting pairs."""
        if len(nodes) == 1:
            return nodes[0]
        node = cls()
        node.children = list(nodes)
        return node

    def __and__(self, other: "Q") -> "Q":
        node = Q()
        node.connector = "$and"
        node.children = [self, other]
        return node

    def __or__(self, other: "Q") -> "Q":
        node = Q()
        node.connector = "$or"
        node.children = [self, other]
        return node

    def __invert__(self) -> "Q":
        q = deepcopy(self)
        q.negate = not self.negate
        return q

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Q):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # mutable node

    def __str__(self) -> str:
        return str(self.to_dict())

    def __repr__(self) -> str:
        return f"<Q: {self.to_dict()}>"

    # -------------------
    # Universal dict representation
    # -------------------
    def _leaf_to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Convert leaf filters to the universal dict form.

        Returns a mapping where keys are field names (dots for nested)
        and values are dicts of universal operators (e.g., `$match`).
        """
        result: Dict[str, Dict[str, Any]] = {}
        for key, value in self.filters.items():
            field, op = key, "$eq"
            if "__" in key:
                # "info__lang__eq" -> field="info__lang", lookup="eq"
                head, lookup = key.rsplit("__", 1)
                if lookup in self._OP_MAP:
                    field, op = head, self._OP_MAP[lookup]
            field_key = field.replace("__", ".")
            result.setdefault(field_key, {})[op] = value
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Return the universal dict representation of this node.

        - Leaves become `{field: {op: value}}` mappings.
        - Boolean combinations use `{"$and": [...]}`, `{"$or": [...]}`.
        - Negation wraps with `{"$not": node}`.
        """
        if self.children:
            node = {self.connector: [child.to_dict() for child in self.children]}
        else:
            node = self._leaf_to_dict()
        if self.negate:
            return {"$not": node}
        return node

    # -------------------
    # Backend-specific query
    # -------------------

    def _get_where_compiler(self, backend: BackendType) -> Optional[BaseWhere]:
        if backend == "elasticsearch":
            from .compilers.elasticsearch import elasticsearch_where

            return elasticsearch_where
        return None

    def to_where(self, backend: BackendType = "generic") -> Any:
        """Compile to a backend-native query.

        - For `elasticsearch`, returns a query DSL dict.
        - For `generic`, returns the universal dict.
        """
        node = self.to_dict()
        where_compiler = self._get_where_compiler(backend)
        if where_compiler:
            return where_compiler.to_where(node)
        return node

    def to_expr(self, backend: BackendType = "generic") -> str:
        """Compile to a string for logging.

        If a backend compiler is available, uses its string formatter;
        otherwise returns `str(universal_dict)`.
        """
        node = self.to_dict()
        where_compiler = self._get_where_compiler(backend)
        if where_compiler:
            return where_compiler.to_expr(node)
        return str(node)
