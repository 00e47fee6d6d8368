"""Type aliases for booksearch package.

This module provides reusable type definitions to ensure consistency
across the codebase and improve code readability.
"""

from typing import Any, Dict, List, Tuple

# Document identifier as assigned by the search backend
DocId = str

# Raw `_source` mapping as stored in the index
Source = Dict[str, Any]

# ([(id, source), ...], total hit count) returned by backend searches
Hits = Tuple[List[Tuple[DocId, Source]], int]
