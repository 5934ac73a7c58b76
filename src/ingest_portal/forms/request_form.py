"""
Ingest Portal - Request form

Collects an ingest request, gated on the instrument list having loaded.
The instrument lookup runs as its own asyncio task so it can be cancelled
when the form goes away without touching a submission already in flight.
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import TypeAdapter, ValidationError

from ingest_portal.forms.base import BaseForm
from ingest_portal.forwarding.schemas import IngestRequest, Instrument
from ingest_portal.util.logging import get_logger

logger = get_logger("forms.request")

INSTRUMENTS_ENDPOINT = "/api/instruments"
INSTRUMENTS_ERROR = "Failed to fetch instruments."

USERNAME_MESSAGE = "Invalid username, expected firstname.lastname"

_instrument_list = TypeAdapter(list[Instrument])

# (field, label) in display order.
REQUEST_FIELDS: list[tuple[str, str]] = [
    ("instrumentId", "Instrument ID"),
    ("projectId", "Project ID"),
    ("submitter", "Submitter"),
    ("recipient", "Recipient"),
    ("srcFolder", "Source folder"),
    ("sessionId", "Session ID"),
    ("notes", "Notes"),
]


class SubmissionForm(BaseForm):
    schema = IngestRequest
    defaults = {field: "" for field, _ in REQUEST_FIELDS}

    def __init__(self, client: httpx.AsyncClient) -> None:
        super().__init__(client)
        self.instruments: list[Instrument] = []
        self.instruments_error: str | None = None
        self._instruments_task: asyncio.Task | None = None

    def field_message(self, field: str, error: dict) -> str:
        if field == "instrumentId":
            return "Must select an instrument"
        if field in ("submitter", "recipient"):
            return USERNAME_MESSAGE
        if error["type"] in ("missing", "string_too_short"):
            return "Required"
        return error["msg"]

    @property
    def instruments_enabled(self) -> bool:
        return len(self.instruments) > 0

    @property
    def can_submit(self) -> bool:
        return self.instruments_enabled and not self.is_loading

    async def load_instruments(self) -> list[Instrument]:
        """Fetch the selectable instruments from the local proxy.

        On any failure the list stays empty, which keeps the instrument
        selector and the submit button disabled.
        """
        self.instruments_error = None
        try:
            response = await self.client.get(INSTRUMENTS_ENDPOINT)
            if not response.is_success:
                logger.warning(
                    "Instrument lookup failed: HTTP %d", response.status_code
                )
                self.instruments_error = INSTRUMENTS_ERROR
                return self.instruments
            instruments = _instrument_list.validate_python(response.json())
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            logger.warning("Instrument lookup failed: %s: %s", type(exc).__name__, exc)
            self.instruments_error = INSTRUMENTS_ERROR
            return self.instruments

        self.instruments = instruments
        return self.instruments

    def start_loading_instruments(self) -> asyncio.Task:
        """Run :meth:`load_instruments` as a task that :meth:`close` can cancel.

        The request page starts the lookup this way so a client disconnect
        while it renders stops the lookup too.
        """
        self._instruments_task = asyncio.create_task(self.load_instruments())
        return self._instruments_task

    async def close(self) -> None:
        """Tear the form down, cancelling a pending instrument lookup."""
        task = self._instruments_task
        self._instruments_task = None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.info("Instrument request was aborted")
