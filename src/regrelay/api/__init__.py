from __future__ import annotations

from fastapi import FastAPI

from .._version import __version__
from ..core.registry import REGISTRY, InMemoryRegistry
from .routes.query import mount_query_api


def create_api_app(registry: InMemoryRegistry | None = None) -> FastAPI:
    app = FastAPI(title="regrelay", version=__version__)

    mount_query_api(app, registry if registry is not None else REGISTRY)

    @app.get("/healthz")
    def healthz() -> dict[str, bool]:
        return {"ok": True}

    return app
