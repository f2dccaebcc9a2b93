from __future__ import annotations

from .errors import NetworkError, ParseError, ProviderError, RelayError, StoreError
from .registry import REGISTRY, DeviceRegistration, InMemoryRegistry
from .results import QueryResult, devices_payload

__all__ = [
    "RelayError",
    "NetworkError",
    "ParseError",
    "ProviderError",
    "StoreError",
    "DeviceRegistration",
    "InMemoryRegistry",
    "REGISTRY",
    "QueryResult",
    "devices_payload",
]
