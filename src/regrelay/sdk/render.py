from __future__ import annotations

from ..core.errors import NetworkError, ParseError, ProviderError, RelayError, StoreError
from ..core.results import QueryResult


def render_result(result: QueryResult | None) -> str:
    """Human-readable text for a relay response."""

    if result is None:
        return "No response"

    if not result.success:
        return f"Result: failure\nReason: {result.reason or 'unknown'}"

    lines = ["Result: success"]
    if result.is_list:
        lines.append("List of registered devices:")
        try:
            ids = result.device_ids()
        except ParseError as ex:
            lines.append(f"(unreadable list: {ex})")
        else:
            for i, did in enumerate(ids):
                lines.append(f"Device index {i} : {did}")
    return "\n".join(lines)


def render_error(exc: RelayError) -> str:
    if isinstance(exc, NetworkError):
        return f"Network error: {exc}"
    if isinstance(exc, ParseError):
        return f"Invalid response: {exc}"
    if isinstance(exc, ProviderError):
        return f"Push provider error: {exc}"
    if isinstance(exc, StoreError):
        return f"Token store error: {exc}"
    return f"Error: {exc}"
