from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable

from .channel import UpdateChannel

logger = logging.getLogger(__name__)

NOTIFICATION_ID = 1000
NOTIFICATION_TITLE = "Push notification"


class KeepAlive:
    """Reference-counted process-liveness token.

    Every message in flight holds one reference; the process may only go
    idle once the count is back to zero.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._count = 0

    @property
    def active(self) -> int:
        with self._cond:
            return self._count

    def acquire(self) -> None:
        with self._cond:
            self._count += 1

    def release(self) -> None:
        with self._cond:
            if self._count <= 0:
                raise RuntimeError("KeepAlive released more times than acquired")
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()

    def wait_idle(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)

    def __enter__(self) -> "KeepAlive":
        self.acquire()
        return self

    def __exit__(self, *exc: object) -> None:
        self.release()


@dataclass(frozen=True)
class Notification:
    text: str
    title: str = NOTIFICATION_TITLE
    notification_id: int = NOTIFICATION_ID


def format_push_message(extras: dict[str, Any] | None) -> str | None:
    if not extras:
        return None
    return f"Message: {extras.get('message')}\nServer Time: {extras.get('timestamp')}"


def log_notifier(notification: Notification) -> None:
    logger.info(
        "Notification posted",
        extra={"notification_id": notification.notification_id, "title": notification.title, "text": notification.text},
    )


class EventRelay:
    """Decouples receipt of a push message from its processing.

    `deliver` returns immediately; the message is handled on a worker thread
    while a keep-alive reference is held.
    """

    def __init__(
        self,
        notifier: Callable[[Notification], None] = log_notifier,
        *,
        keep_alive: KeepAlive | None = None,
        sender: str = "push",
    ) -> None:
        self.notifier = notifier
        self.keep_alive = keep_alive if keep_alive is not None else KeepAlive()
        self.sender = sender
        self._listeners: list[UpdateChannel] = []
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="regrelay-events")

    def subscribe(self, channel: UpdateChannel) -> None:
        with self._lock:
            if channel not in self._listeners:
                self._listeners.append(channel)

    def unsubscribe(self, channel: UpdateChannel) -> None:
        with self._lock:
            if channel in self._listeners:
                self._listeners.remove(channel)

    def deliver(self, extras: dict[str, Any]) -> Future[Notification | None]:
        self.keep_alive.acquire()
        try:
            return self._executor.submit(self._handle, dict(extras or {}))
        except RuntimeError:
            self.keep_alive.release()
            raise

    def _handle(self, extras: dict[str, Any]) -> Notification | None:
        try:
            text = format_push_message(extras)
            if text is None:
                return None
            notification = Notification(text=text)
            self.notifier(notification)
            self._broadcast(f"Received from {self.sender} the message\n{text}")
            return notification
        finally:
            self.keep_alive.release()

    def _broadcast(self, message: str) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for channel in listeners:
            channel.post(message)

    def close(self) -> None:
        self._executor.shutdown(wait=True)
