from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .errors import ParseError

SUCCESS = "success"
FAILURE = "failure"


def devices_payload(device_ids: list[str]) -> dict[str, Any]:
    """Build the list payload: `num` plus one string key per index."""

    out: dict[str, Any] = {"num": len(device_ids)}
    for i, did in enumerate(device_ids):
        out[str(i)] = did
    return out


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a relay query as carried on the wire.

    Serialized as `{"result": "success", ...data}` or
    `{"result": "failure", "reason": ...}`.
    """

    success: bool
    data: dict[str, Any] = field(default_factory=dict)
    reason: str | None = None

    @classmethod
    def ok(cls, **data: Any) -> "QueryResult":
        return cls(success=True, data=dict(data))

    @classmethod
    def failure(cls, reason: str) -> "QueryResult":
        return cls(success=False, reason=str(reason))

    @property
    def is_list(self) -> bool:
        return self.success and "num" in self.data

    def to_dict(self) -> dict[str, Any]:
        if self.success:
            return {"result": SUCCESS, **self.data}
        return {"result": FAILURE, "reason": self.reason or "unknown"}

    @classmethod
    def from_dict(cls, body: Any) -> "QueryResult":
        if not isinstance(body, dict):
            raise ParseError(f"Expected a JSON object, got {type(body).__name__}")
        if "result" not in body:
            raise ParseError("Missing result in response")

        result = str(body.get("result") or "").strip().lower()
        if result == SUCCESS:
            data = {k: v for k, v in body.items() if k != "result"}
            return cls(success=True, data=data)

        reason = body.get("reason")
        return cls(success=False, reason=str(reason) if reason is not None else "unknown")

    def device_ids(self) -> list[str]:
        if not self.is_list:
            return []
        try:
            num = int(self.data["num"])
        except (TypeError, ValueError) as e:
            raise ParseError(f"Invalid num in response: {self.data.get('num')!r}") from e

        ids: list[str] = []
        for i in range(num):
            key = str(i)
            if key not in self.data:
                raise ParseError(f"Missing device index {i} in response")
            ids.append(str(self.data[key]))
        return ids
