from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request

from ...core.registry import InMemoryRegistry
from ...core.results import QueryResult, devices_payload
from ..parsing import QueryCommand, parse_query

logger = logging.getLogger(__name__)


def execute_query(registry: InMemoryRegistry, command: QueryCommand) -> QueryResult:
    if command.action == "register":
        registry.register(str(command.device_id))
        return QueryResult.ok()
    if command.action == "unregister":
        registry.unregister(str(command.device_id))
        return QueryResult.ok()
    return QueryResult.ok(**devices_payload(registry.list()))


def mount_query_api(app: FastAPI, registry: InMemoryRegistry) -> None:
    """Mount the query-string command endpoint at `/`.

    Semantic failures are answered with HTTP 200 and a `failure` body so that
    clients only ever have to parse one response shape.
    """

    @app.get("/")
    def query(request: Request) -> dict[str, Any]:
        raw = request.url.query
        try:
            command = parse_query(raw)
            result = execute_query(registry, command)
        except ValueError as ex:  # QueryError, or a rejected id
            logger.info("Rejected query", extra={"query": raw, "reason": str(ex)})
            result = QueryResult.failure(str(ex))
        return result.to_dict()
