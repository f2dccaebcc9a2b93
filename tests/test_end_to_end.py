from __future__ import annotations

import socket
import uuid

from regrelay.core.registry import REGISTRY
from regrelay.runtime.server import RelayServer, run
from regrelay.sdk.controller import ControllerState, DeviceController
from regrelay.sdk.events import EventRelay, Notification
from regrelay.sdk.push import LocalPushProvider, StaticPushProvider
from regrelay.sdk.token_store import MemoryTokenStore


def _server() -> RelayServer:
    srv = run(host="127.0.0.1", port=0, log_level="warning", new_server=True)
    assert isinstance(srv, RelayServer)
    return srv


def test_controller_against_live_server() -> None:
    srv = _server()
    token = f"tok-{uuid.uuid4().hex}"
    ctl = DeviceController(srv.client(), StaticPushProvider(token), MemoryTokenStore())

    assert ctl.register_device().result(timeout=10) == ControllerState.REGISTERED_ON_SERVER
    assert token in srv.list_devices()

    listed = ctl.list_registered_devices().result(timeout=10)
    assert listed is not None
    assert token in listed.device_ids()

    result = ctl.unregister_device().result(timeout=10)
    ctl.close()
    assert result is not None and result.success
    assert token not in REGISTRY.list()


def test_registered_devices_receive_push_messages() -> None:
    srv = _server()
    posted: list[Notification] = []
    relay = EventRelay(posted.append)
    provider = LocalPushProvider(relay)
    ctl = DeviceController(srv.client(), provider, MemoryTokenStore())

    assert ctl.register_device().result(timeout=10) == ControllerState.REGISTERED_ON_SERVER
    ctl.close()

    # Fan out to every device the relay knows about, like the embedded server does.
    delivered = [provider.send(did, {"message": "motion", "timestamp": "12:00"}) for did in srv.list_devices()]
    relay.close()

    assert any(delivered)
    assert [n.text for n in posted] == ["Message: motion\nServer Time: 12:00"]
    assert relay.keep_alive.active == 0


def test_malformed_request_line_is_rejected() -> None:
    srv = _server()
    with socket.create_connection((srv.host, srv.port), timeout=5) as sock:
        sock.sendall(b"GARBAGE\r\n\r\n")
        reply = sock.recv(1024)
    assert reply.startswith(b"HTTP/1.1 400")


def test_unregistered_token_no_longer_routes() -> None:
    srv = _server()
    posted: list[Notification] = []
    relay = EventRelay(posted.append)
    provider = LocalPushProvider(relay)
    store = MemoryTokenStore()
    ctl = DeviceController(srv.client(), provider, store)

    assert ctl.register_device().result(timeout=10) == ControllerState.REGISTERED_ON_SERVER
    token = store.get()
    assert ctl.unregister_device().result(timeout=10) is not None
    ctl.close()

    assert provider.send(token, {"message": "late"}) is False
    relay.close()
    assert posted == []
