"""Query DSL module.

Exports the `Q` class for building composable, backend-agnostic filter
expressions and the `QueryComposer` for the book compound query. Compiled
representations are handled by the `compilers` subpackage.
"""

from .compose import FieldPredicate, QueryComposer, QueryDescriptor, RangePredicate, compose
from .q import Q

__all__ = (
    "Q",
    "QueryComposer",
    "QueryDescriptor",
    "FieldPredicate",
    "RangePredicate",
    "compose",
)
