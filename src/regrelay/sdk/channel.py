from __future__ import annotations

import queue
from typing import Callable


class UpdateChannel:
    """Single-consumer channel for user-visible updates.

    Background workers only `post`; the thread that owns the presentation
    drains the channel with `pump` or `get`.
    """

    def __init__(self) -> None:
        self._queue: queue.Queue[str] = queue.Queue()

    def post(self, message: str) -> None:
        self._queue.put(str(message))

    def get(self, timeout: float | None = None) -> str | None:
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def pump(self, handler: Callable[[str], None]) -> int:
        """Hand every pending message to `handler` on the calling thread."""

        n = 0
        while True:
            try:
                msg = self._queue.get_nowait()
            except queue.Empty:
                return n
            handler(msg)
            n += 1

    def drain(self) -> list[str]:
        out: list[str] = []
        self.pump(out.append)
        return out
