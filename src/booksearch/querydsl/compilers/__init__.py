from .base import BaseWhere
from .elasticsearch import ElasticsearchWhereCompiler, elasticsearch_where

__all__ = (
    "BaseWhere",
    "ElasticsearchWhereCompiler",
    "elasticsearch_where",
)
