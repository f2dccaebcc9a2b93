from __future__ import annotations

from dataclasses import dataclass
from typing import Literal
from urllib.parse import parse_qsl

QueryAction = Literal["register", "unregister", "list"]

# query key -> action
_ACTIONS: dict[str, QueryAction] = {
    "regid": "register",
    "di": "unregister",
    "l": "list",
}


class QueryError(ValueError):
    """Query string did not select a valid relay command."""


@dataclass(frozen=True)
class QueryCommand:
    action: QueryAction
    device_id: str | None = None


def parse_query(raw_query: str) -> QueryCommand:
    """Parse a raw query string such as `regid=abc`, `di=abc` or `l`.

    Only the first parameter selects the command; the rest are ignored.
    """

    query = (raw_query or "").lstrip("?")
    if not query.strip():
        raise QueryError("Empty query")

    # A bare key such as `l` comes back as ("l", "").
    pairs = parse_qsl(query, keep_blank_values=True)
    if not pairs:
        raise QueryError("Empty query")

    key, value = pairs[0]
    action = _ACTIONS.get(key.strip())
    if action is None:
        raise QueryError(f"Unknown command: {key}")

    if action == "list":
        return QueryCommand(action="list")

    device_id = value.strip()
    if not device_id:
        raise QueryError(f"Missing device id for {key}")
    return QueryCommand(action=action, device_id=device_id)
