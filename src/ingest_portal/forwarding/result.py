"""Outcome of a forwarded call, ready to be written back as JSON."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from ingest_portal.forwarding.schemas import ForwardError

# Upstream failures of any kind are reported as a bad gateway.
UPSTREAM_FAILURE_STATUS = 502


@dataclass
class ForwardResult:
    status_code: int
    body: Any

    @classmethod
    def success(cls, body: Any) -> "ForwardResult":
        return cls(status_code=200, body=body)

    @classmethod
    def failure(
        cls,
        error: str,
        status_code: int | None = None,
        detail: Any = None,
    ) -> "ForwardResult":
        payload = ForwardError(error=error, status_code=status_code, detail=detail)
        return cls(
            status_code=UPSTREAM_FAILURE_STATUS,
            body=payload.model_dump(exclude_none=True),
        )


def response_detail(response: httpx.Response, limit: int = 500) -> Any:
    """Return the upstream body for an error report: JSON if it parses, else truncated text."""
    try:
        return response.json()
    except ValueError:
        return response.text[:limit]
