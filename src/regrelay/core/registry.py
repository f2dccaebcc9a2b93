from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeviceRegistration:
    device_id: str
    registered_at: float


def _normalize_device_id(device_id: str) -> str:
    did = str(device_id).strip()
    if not did:
        raise ValueError("device_id cannot be empty")
    return did


class InMemoryRegistry:
    """Registry of device tokens currently subscribed to the relay.

    Entries keep insertion order. Every access goes through one lock so the
    registry can be shared by uvicorn's worker threads.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._devices: dict[str, DeviceRegistration] = {}

    def register(self, device_id: str) -> DeviceRegistration:
        did = _normalize_device_id(device_id)
        with self._lock:
            existing = self._devices.get(did)
            if existing is not None:
                return existing
            reg = DeviceRegistration(device_id=did, registered_at=time.time())
            self._devices[did] = reg
            logger.info("Device registered", extra={"device_id": did, "count": len(self._devices)})
            return reg

    def unregister(self, device_id: str) -> bool:
        did = _normalize_device_id(device_id)
        with self._lock:
            removed = self._devices.pop(did, None) is not None
            if removed:
                logger.info("Device unregistered", extra={"device_id": did, "count": len(self._devices)})
            return removed

    def get(self, device_id: str) -> DeviceRegistration | None:
        with self._lock:
            return self._devices.get(str(device_id).strip())

    def list(self) -> list[str]:
        with self._lock:
            return list(self._devices.keys())

    def registrations(self) -> list[DeviceRegistration]:
        with self._lock:
            return list(self._devices.values())

    def count(self) -> int:
        with self._lock:
            return len(self._devices)

    def reset(self) -> None:
        with self._lock:
            self._devices.clear()


REGISTRY = InMemoryRegistry()
