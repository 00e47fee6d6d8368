"""Compiler utility functions.

Helpers for normalizing compiler input and classifying universal operators.
"""

from typing import Any, Dict

# Operators that constrain a field to an interval
RANGE_OPS = {"$gt": "gt", "$gte": "gte", "$lt": "lt", "$lte": "lte"}


def normalize_where_input(where: Any) -> Dict[str, Any]:
    """Normalize Q object or dict to universal dict format.

    Args:
        where: Q object (with .to_dict() method) or dict

    Returns:
        Universal dict format ready for compilation

    Raises:
        TypeError: If input is neither Q object nor dict
    """
    if hasattr(where, "to_dict") and callable(where.to_dict):
        return where.to_dict()
    elif isinstance(where, dict):
        return where
    else:
        raise TypeError(f"where parameter must be a Q object or dict, got {type(where).__name__}")


def field_expr(expr: Any) -> Dict[str, Any]:
    """Return the operator dict for a field; bare values mean `$eq`."""
    if isinstance(expr, dict):
        return expr
    return {"$eq": expr}
