"""Base compiler interface.

Defines the abstract contract all backend-specific where compilers must follow.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict

__all__ = ("BaseWhere",)


class BaseWhere(ABC):
    """Abstract base class for where clause compilers.

    Subclasses implement `to_where` and `to_expr` to produce backend-specific
    query structures from the universal node dict.
    """

    @abstractmethod
    def to_where(self, node: Dict[str, Any]) -> Any:
        """Convert a Q node or universal dict into the backend-native query."""
        raise NotImplementedError

    @abstractmethod
    def to_expr(self, node: Dict[str, Any]) -> str:
        """Convert a Q node or universal dict into a printable expression."""
        raise NotImplementedError
