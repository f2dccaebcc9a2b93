from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum

from ..config import DEFAULT_SENDER_ID
from ..core.errors import ProviderError, RelayError, StoreError
from ..core.results import QueryResult
from .channel import UpdateChannel
from .client import RelayClient
from .push import PushProvider
from .render import render_error, render_result
from .token_store import MemoryTokenStore

logger = logging.getLogger(__name__)


class ControllerState(str, Enum):
    UNREGISTERED = "unregistered"
    REGISTERING = "registering"
    REGISTERED_LOCALLY = "registered-locally"
    REGISTERED_ON_SERVER = "registered-on-server"
    UNREGISTERING = "unregistering"


class DeviceController:
    """Drives register / unregister / list against a relay server.

    Network work runs on a single background worker, so operations issued
    one after another execute in order. Every user-visible message is posted
    to `updates`; nothing here touches presentation state directly.
    """

    def __init__(
        self,
        client: RelayClient,
        provider: PushProvider,
        token_store: MemoryTokenStore | None = None,
        *,
        sender_id: str = DEFAULT_SENDER_ID,
        updates: UpdateChannel | None = None,
    ) -> None:
        self.client = client
        self.provider = provider
        self.token_store = token_store if token_store is not None else MemoryTokenStore()
        self.sender_id = sender_id
        self.updates = updates if updates is not None else UpdateChannel()
        self._lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="regrelay-task")
        self._state = (
            ControllerState.REGISTERED_LOCALLY if self.token_store.get() else ControllerState.UNREGISTERED
        )

    @property
    def state(self) -> ControllerState:
        with self._lock:
            return self._state

    @property
    def token(self) -> str:
        return self.token_store.get()

    def _set_state(self, state: ControllerState) -> None:
        with self._lock:
            prev, self._state = self._state, state
        logger.debug("Controller state changed", extra={"from": prev.value, "to": state.value})

    def register_device(self) -> Future[ControllerState]:
        return self._executor.submit(self._register_task)

    def _register_task(self) -> ControllerState:
        token = self.token_store.get()
        if token:
            self.updates.post("Already registered with push provider")
            self._set_state(ControllerState.REGISTERED_LOCALLY)
        else:
            self._set_state(ControllerState.REGISTERING)
            try:
                token = self.provider.request_registration_token(self.sender_id)
                if not token:
                    raise ProviderError("Push provider returned an empty token")
                self.token_store.set(token)
            except (ProviderError, StoreError) as ex:
                logger.warning("Push registration failed", extra={"error": str(ex)})
                self.updates.post(render_error(ex))
                if token:
                    self.provider.revoke(token)
                self._set_state(ControllerState.UNREGISTERED)
                return self.state
            self._set_state(ControllerState.REGISTERED_LOCALLY)
            self.updates.post("Registered with push provider")
        self.updates.post(f"Registration id: {token}")

        try:
            result = self.client.register(token)
        except RelayError as ex:
            logger.warning("Server registration failed", extra={"error": str(ex)})
            self.updates.post(render_error(ex))
            self.updates.post("Registration with web server failed")
            return self.state

        self.updates.post(render_result(result))
        if result.success:
            self._set_state(ControllerState.REGISTERED_ON_SERVER)
            self.updates.post("Registered with web server")
        else:
            self.updates.post("Registration with web server failed")
        return self.state

    def _clear_token(self) -> bool:
        try:
            self.token_store.clear()
        except StoreError as ex:
            logger.warning("Clearing cached token failed", extra={"error": str(ex)})
            self.updates.post(render_error(ex))
            return False
        return True

    def unregister_device(self) -> Future[QueryResult | None]:
        token = self.token_store.get()
        self._clear_token()
        self._set_state(ControllerState.UNREGISTERING)
        return self._executor.submit(self._unregister_task, token)

    def _unregister_task(self, token: str) -> QueryResult | None:
        self._set_state(ControllerState.UNREGISTERING)
        # A register queued ahead of this task may have cached its token after the clear above.
        late = self.token_store.get()
        if late:
            token = late
            self._clear_token()
        try:
            if not token:
                self.updates.post("Not registered")
                return None
            try:
                result = self.client.unregister(token)
            except RelayError as ex:
                logger.warning("Server unregistration failed", extra={"error": str(ex)})
                self.updates.post(render_error(ex))
                return None
            self.updates.post(render_result(result))
            return result
        finally:
            if self.token_store.get():
                self._set_state(ControllerState.REGISTERED_LOCALLY)
            else:
                if token:
                    self.provider.revoke(token)
                self._set_state(ControllerState.UNREGISTERED)

    def list_registered_devices(self) -> Future[QueryResult | None]:
        return self._executor.submit(self._list_task)

    def _list_task(self) -> QueryResult | None:
        try:
            result = self.client.list_devices()
        except RelayError as ex:
            logger.warning("Listing devices failed", extra={"error": str(ex)})
            self.updates.post(render_error(ex))
            return None
        self.updates.post(render_result(result))
        return result

    def close(self) -> None:
        self._executor.shutdown(wait=True)
