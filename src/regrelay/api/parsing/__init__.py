from __future__ import annotations

from .query import QueryAction, QueryCommand, QueryError, parse_query

__all__ = [
    "QueryAction",
    "QueryCommand",
    "QueryError",
    "parse_query",
]
