from __future__ import annotations

from ._version import __version__
from .core.errors import NetworkError, ParseError, ProviderError, RelayError, StoreError
from .core.registry import REGISTRY, DeviceRegistration, InMemoryRegistry
from .core.results import QueryResult
from .runtime.server import RelayServer, run
from .sdk.client import RelayClient
from .sdk.controller import ControllerState, DeviceController
from .sdk.events import EventRelay, KeepAlive
from .sdk.push import LocalPushProvider, PushProvider, StaticPushProvider

__all__ = [
    "__version__",
    "run",
    "RelayServer",
    "RelayClient",
    "ControllerState",
    "DeviceController",
    "EventRelay",
    "KeepAlive",
    "PushProvider",
    "LocalPushProvider",
    "StaticPushProvider",
    "QueryResult",
    "DeviceRegistration",
    "InMemoryRegistry",
    "REGISTRY",
    "RelayError",
    "NetworkError",
    "ParseError",
    "ProviderError",
    "StoreError",
]
