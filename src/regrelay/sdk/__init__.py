from __future__ import annotations

from .channel import UpdateChannel
from .client import RelayClient
from .controller import ControllerState, DeviceController
from .events import EventRelay, KeepAlive, Notification, format_push_message
from .push import LocalPushProvider, PushProvider, StaticPushProvider
from .render import render_error, render_result
from .token_store import FileTokenStore, MemoryTokenStore

__all__ = [
    "RelayClient",
    "ControllerState",
    "DeviceController",
    "UpdateChannel",
    "EventRelay",
    "KeepAlive",
    "Notification",
    "format_push_message",
    "PushProvider",
    "LocalPushProvider",
    "StaticPushProvider",
    "render_result",
    "render_error",
    "MemoryTokenStore",
    "FileTokenStore",
]
