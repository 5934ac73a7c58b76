"""Shared pytest fixtures for Ingest Portal tests.

Upstream services (Airflow and the instrument registry) are replaced by an
``httpx.MockTransport`` wired in through the ``get_http_client``
dependency, so no test ever opens a socket.
"""

from __future__ import annotations

from typing import Any, Callable, Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from ingest_portal.forwarding.client import get_http_client
from ingest_portal.main import app

DAG_RUNS_PATH = "/api/v1/dags/data_ingest/dagRuns"
INSTRUMENTS_PATH = "/instruments"

SAMPLE_INSTRUMENTS = [
    {"id": "1", "instrumentId": "krios-1", "displayName": "Titan Krios 1"},
    {"id": "2", "instrumentId": "glacios", "displayName": "Glacios"},
]

VALID_REQUEST = {
    "instrumentId": "krios-1",
    "projectId": "PRJ-0042",
    "submitter": "jane.doe",
    "recipient": "john.smith",
    "srcFolder": "/data/incoming/session-7",
    "sessionId": "session-7",
    "notes": "grid 3 looked thin",
}


# ---------------------------------------------------------------------------
# Fake upstream services
# ---------------------------------------------------------------------------

Handler = Callable[[httpx.Request], Any]


class FakeUpstream:
    """Routes outbound requests by path and records every one it sees."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Handler] = {
            DAG_RUNS_PATH: lambda request: httpx.Response(
                200, json={"dag_run_id": "manual__1", "state": "queued"}
            ),
            INSTRUMENTS_PATH: lambda request: httpx.Response(200, json=SAMPLE_INSTRUMENTS),
        }

    def on(self, path: str, handler: Handler) -> None:
        self.routes[path] = handler

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self.routes.get(request.url.path)
        if handler is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return handler(request)


@pytest.fixture()
def upstream() -> Generator[FakeUpstream, None, None]:
    """Install a fake upstream for the duration of one test."""
    fake = FakeUpstream()

    async def _override_get_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(fake.handle)) as c:
            yield c

    app.dependency_overrides[get_http_client] = _override_get_http_client
    yield fake
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# FastAPI TestClient
# ---------------------------------------------------------------------------

@pytest.fixture()
def client(upstream: FakeUpstream) -> Generator[TestClient, None, None]:
    """Return a ``TestClient`` whose outbound calls hit the fake upstream."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


def connect_error(request: httpx.Request) -> httpx.Response:
    """Upstream handler that simulates a refused connection."""
    raise httpx.ConnectError("Connection refused", request=request)
