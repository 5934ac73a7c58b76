"""Pydantic v2 schemas for the forms and the forwarding endpoints.

Field names follow the camelCase keys the Airflow DAG reads from
``dag_run.conf``; they are sent on the wire exactly as declared.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

USERNAME_PATTERN = r"^[a-z]+\.[a-z]+$"


class IngestRequest(BaseModel):
    """Fields collected by the request form."""

    instrumentId: str = Field(min_length=1)
    projectId: str = Field(min_length=1)
    submitter: str = Field(pattern=USERNAME_PATTERN)
    recipient: str = Field(pattern=USERNAME_PATTERN)
    srcFolder: str = Field(min_length=1)
    sessionId: str = Field(min_length=1)
    notes: str | None = None


class ReviewNotes(BaseModel):
    notes: str | None = None


class Instrument(BaseModel):
    id: str
    instrumentId: str
    displayName: str


class ForwardError(BaseModel):
    """Body returned by a forwarding endpoint when the upstream call fails."""

    error: str
    status_code: int | None = None
    detail: Any = None
