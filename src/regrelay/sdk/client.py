from __future__ import annotations

import logging
from typing import Any

from ..config import DEFAULT_URL, normalize_base_url
from ..core.errors import NetworkError, ParseError
from ..core.results import QueryResult

logger = logging.getLogger(__name__)

# Sent on every request, even though GETs carry no body.
REQUEST_HEADERS = {"Content-Type": "application/x-www-form-urlencoded;charset=UTF-8"}


class RelayClient:
    """HTTP client for the relay's query-string protocol.

    Contract:
    - GET /?regid=<id>  register a device token
    - GET /?di=<id>     unregister a device token
    - GET /?l           list registered tokens
    Every call returns a `QueryResult`; transport problems raise `NetworkError`
    and unreadable bodies raise `ParseError`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_URL,
        *,
        timeout_s: float = 10.0,
        transport: Any | None = None,
    ) -> None:
        self.base_url = normalize_base_url(base_url)
        self.timeout_s = float(timeout_s)
        self._transport = transport

    def _client(self, timeout_s: float | None = None):
        import httpx

        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout_s if timeout_s is None else timeout_s,
            headers=REQUEST_HEADERS,
            transport=self._transport,
        )

    def _query(self, path: str, params: dict[str, str] | None = None) -> QueryResult:
        import httpx

        try:
            with self._client() as client:
                res = client.get(path, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as ex:
            raise NetworkError(f"Request to {self.base_url}{path} failed: {ex}") from ex

        if res.status_code != 200:
            logger.debug("Request failed", extra={"status": res.status_code, "path": path})
            raise NetworkError(
                f"Request failed with error code {res.status_code}",
                status_code=res.status_code,
            )

        try:
            body = res.json()
        except ValueError as ex:
            raise ParseError(f"Response is not valid JSON: {res.text[:200]!r}") from ex
        return QueryResult.from_dict(body)

    def register(self, device_id: str) -> QueryResult:
        return self._query("/", params={"regid": device_id})

    def unregister(self, device_id: str) -> QueryResult:
        return self._query("/", params={"di": device_id})

    def list_devices(self) -> QueryResult:
        return self._query("/?l")

    def is_alive(self, *, timeout_s: float = 0.2) -> bool:
        """Best-effort check of `/healthz`."""

        import httpx

        try:
            with self._client(timeout_s) as client:
                r = client.get("/healthz")
                if r.status_code != 200:
                    return False
                return bool(r.json().get("ok"))
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, AttributeError):
            return False
