from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from .config import Settings
from .core.errors import StoreError
from .runtime.server import run
from .sdk.client import RelayClient
from .sdk.controller import ControllerState, DeviceController
from .sdk.push import LocalPushProvider
from .sdk.render import render_error
from .sdk.token_store import FileTokenStore


def _build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="regrelay", description="regrelay: device registration relay")
    p.add_argument("--log-level", default="warning", choices=["debug", "info", "warning", "error"])
    sub = p.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="run the relay server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    for name, help_text in (
        ("register", "register this client with the relay"),
        ("unregister", "unregister this client from the relay"),
        ("list", "list devices registered with the relay"),
    ):
        c = sub.add_parser(name, help=help_text)
        c.add_argument("--url", default=settings.base_url)
        c.add_argument("--state-file", type=Path, default=settings.state_file)
        c.add_argument("--sender-id", default=settings.sender_id)
        c.add_argument("--timeout", type=float, default=settings.timeout_s)

    return p


def _serve(args: argparse.Namespace) -> int:
    srv = run(host=args.host, port=args.port, log_level=args.log_level, new_server=True)
    print(srv.url)

    # Block forever (so it behaves like a normal CLI server)
    while True:
        time.sleep(3600)


def _run_client_command(args: argparse.Namespace) -> int:
    try:
        store = FileTokenStore(args.state_file)
    except StoreError as ex:
        print(render_error(ex))
        return 1

    controller = DeviceController(
        RelayClient(args.url, timeout_s=args.timeout),
        LocalPushProvider(),
        store,
        sender_id=args.sender_id,
    )
    try:
        if args.command == "register":
            state = controller.register_device().result()
            ok = state == ControllerState.REGISTERED_ON_SERVER
        elif args.command == "unregister":
            result = controller.unregister_device().result()
            ok = result is not None and result.success
        else:
            result = controller.list_registered_devices().result()
            ok = result is not None and result.success
    finally:
        controller.close()

    controller.updates.pump(print)
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    settings = Settings.from_env()
    args = _build_parser(settings).parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper()))

    if args.command == "serve":
        return _serve(args)
    return _run_client_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
