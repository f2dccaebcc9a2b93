from __future__ import annotations

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from ..core.errors import ProviderError

if TYPE_CHECKING:
    from .events import EventRelay

logger = logging.getLogger(__name__)


class PushProvider(ABC):
    """Seam to the external push-notification service."""

    name: str = "base"

    @abstractmethod
    def request_registration_token(self, sender_id: str) -> str:
        """Return a device token for `sender_id` or raise `ProviderError`."""
        raise NotImplementedError

    @abstractmethod
    def send(self, device_id: str, payload: dict[str, Any]) -> bool:
        raise NotImplementedError

    def revoke(self, device_id: str) -> None:
        """Forget a token the client no longer uses."""


class StaticPushProvider(PushProvider):
    name = "static"

    def __init__(self, token: str, *, fail: bool = False) -> None:
        self.token = token
        self.fail = fail
        self.requests: list[str] = []
        self.sent: list[tuple[str, dict[str, Any]]] = []
        self.revoked: list[str] = []

    def request_registration_token(self, sender_id: str) -> str:
        self.requests.append(sender_id)
        if self.fail or not self.token:
            raise ProviderError(f"Token request for sender {sender_id} failed")
        return self.token

    def send(self, device_id: str, payload: dict[str, Any]) -> bool:
        if self.fail or device_id != self.token:
            return False
        self.sent.append((device_id, dict(payload)))
        return True

    def revoke(self, device_id: str) -> None:
        self.revoked.append(device_id)


class LocalPushProvider(PushProvider):
    """In-process provider: issues tokens and delivers payloads to event relays.

    A token issued while a relay is bound is routed to that relay by `send`.
    """

    name = "local"

    def __init__(self, relay: EventRelay | None = None) -> None:
        self._lock = threading.Lock()
        self._relay = relay
        self._routes: dict[str, EventRelay | None] = {}

    def bind(self, relay: EventRelay | None) -> None:
        with self._lock:
            self._relay = relay

    def request_registration_token(self, sender_id: str) -> str:
        sid = str(sender_id).strip()
        if not sid:
            raise ProviderError("sender_id cannot be empty")
        token = f"{sid}:{uuid.uuid4().hex}"
        with self._lock:
            self._routes[token] = self._relay
        logger.info("Issued registration token", extra={"sender_id": sid})
        return token

    def revoke(self, device_id: str) -> None:
        with self._lock:
            self._routes.pop(device_id, None)

    def send(self, device_id: str, payload: dict[str, Any]) -> bool:
        with self._lock:
            if device_id not in self._routes:
                return False
            relay = self._routes[device_id]
        if relay is None:
            return False
        relay.deliver(payload)
        return True
