from __future__ import annotations

import contextlib
import logging
import os
import socket
import threading
import time
from dataclasses import dataclass

import uvicorn

from ..config import normalize_base_url
from ..core.registry import REGISTRY
from ..sdk.client import RelayClient
from .app import create_app

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RelayServer:
    host: str
    port: int
    url: str

    def client(self) -> RelayClient:
        """HTTP client pointed at this server."""
        return RelayClient(self.url.rstrip("/"))

    def list_devices(self) -> list[str]:
        """Registered device ids, read straight from the in-process registry."""
        return REGISTRY.list()

    def count(self) -> int:
        return REGISTRY.count()


def _find_free_port(host: str) -> int:
    with contextlib.closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind((host, 0))
        return int(s.getsockname()[1])


def _is_server_alive(base_url: str, *, timeout_s: float = 0.2) -> bool:
    return RelayClient(base_url).is_alive(timeout_s=timeout_s)


def _wait_until_alive(base_url: str, *, timeout_s: float) -> bool:
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if _is_server_alive(base_url):
            return True
        time.sleep(0.02)
    return False


def run(
    *,
    host: str = "127.0.0.1",
    port: int = 0,
    log_level: str = "info",
    access_log: bool = False,
    new_server: bool = False,
    connect_timeout_s: float = 0.2,
    startup_timeout_s: float = 5.0,
) -> RelayServer | RelayClient:
    """Start the relay server in a background thread, or attach to a running one.

    Behavior:
    - If REGRELAY_URL is set and reachable, return a `RelayClient` for it unless
      `new_server=True`.
    - Otherwise, if `port != 0` and a server already answers at http://{host}:{port},
      attach to it unless `new_server=True`.
    - Otherwise start uvicorn on a daemon thread and return a `RelayServer`.

    `port=0` means "pick a free port", so there's nothing to attach to.
    """

    env_url = normalize_base_url(os.getenv("REGRELAY_URL", ""))

    if env_url and not new_server:
        if _is_server_alive(env_url, timeout_s=connect_timeout_s):
            logger.info("Attached to relay", extra={"url": env_url})
            return RelayClient(env_url)

    if port != 0 and not new_server:
        default_url = normalize_base_url(f"http://{host}:{port}")
        if _is_server_alive(default_url, timeout_s=connect_timeout_s):
            logger.info("Attached to relay", extra={"url": default_url})
            return RelayClient(default_url)

    if port == 0:
        port = _find_free_port(host)

    app = create_app()

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, access_log=access_log)
    server = uvicorn.Server(config)

    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()

    url = f"http://{host}:{port}/"
    if not _wait_until_alive(url.rstrip("/"), timeout_s=startup_timeout_s):
        raise RuntimeError(f"Relay server did not start at {url}")
    logger.info("Relay server started", extra={"url": url})

    return RelayServer(host=host, port=port, url=url)
