"""
Ingest Portal - Outbound HTTP client

A single ``httpx.AsyncClient`` is opened for the lifetime of the
application and handed to the forwarding routes through a FastAPI
dependency, so tests can swap in a client backed by ``httpx.MockTransport``.
"""

from __future__ import annotations

from typing import AsyncGenerator

import httpx
from fastapi import Request

from ingest_portal.settings import settings


def build_http_client(**kwargs) -> httpx.AsyncClient:
    """Create the outbound client with the configured timeout."""
    kwargs.setdefault("timeout", settings.HTTP_TIMEOUT_SECONDS)
    return httpx.AsyncClient(**kwargs)


async def get_http_client(request: Request) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Yield the application-wide client, or a per-request one if none is open."""
    client = getattr(request.app.state, "http_client", None)
    if client is not None:
        yield client
        return

    async with build_http_client() as client:
        yield client
