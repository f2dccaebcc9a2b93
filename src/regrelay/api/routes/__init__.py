from __future__ import annotations

from .query import execute_query, mount_query_api

__all__ = ["execute_query", "mount_query_api"]
