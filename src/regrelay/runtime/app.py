from __future__ import annotations

from fastapi import FastAPI

from ..api import create_api_app
from ..core.registry import InMemoryRegistry


def create_app(registry: InMemoryRegistry | None = None) -> FastAPI:
    """Create the relay app."""

    return create_api_app(registry)


# Convenience for uvicorn: `uvicorn regrelay.runtime.app:app`
app = create_app()
