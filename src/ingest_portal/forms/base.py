"""Shared submission logic for the portal forms.

A form controller owns the values a user has entered, validates them
against a pydantic schema and, when they are valid, POSTs them as JSON to
the same-origin forwarding endpoint.  Each form walks the states
``idle -> loading -> success | error`` and starts again on the next
submission attempt.
"""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from ingest_portal.util.logging import get_logger

logger = get_logger("forms")

SUBMIT_ENDPOINT = "/api/airflow"
GENERIC_ERROR = "Something went wrong. Please try again."


class FormState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class BaseForm:
    """Validate-then-forward behaviour common to every form.

    Subclasses set :attr:`schema`, the initial :attr:`defaults` and may
    override :meth:`field_message` to word validation errors per field.
    """

    schema: type[BaseModel]
    defaults: dict[str, Any] = {}

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client
        self.values: dict[str, Any] = dict(self.defaults)
        self.errors: dict[str, str] = {}
        self.state = FormState.IDLE
        self.server_error: str | None = None
        self.result: Any = None
        self.submitted_at: datetime | None = None

    # -- validation -----------------------------------------------------------

    def field_message(self, field: str, error: dict) -> str:
        return error["msg"]

    def validate(self, values: dict[str, Any] | None = None) -> dict[str, str]:
        """Return a ``{field: message}`` map; empty when the values are valid."""
        values = self.values if values is None else values
        try:
            self.schema.model_validate(values)
        except ValidationError as exc:
            errors: dict[str, str] = {}
            for error in exc.errors():
                field = str(error["loc"][0]) if error["loc"] else "__root__"
                errors.setdefault(field, self.field_message(field, error))
            return errors
        return {}

    # -- submission -----------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self.state is FormState.LOADING

    @property
    def can_submit(self) -> bool:
        return not self.is_loading

    async def submit(self, values: dict[str, Any] | None = None) -> bool:
        """Validate and forward the form values.

        Returns True when the forwarding endpoint accepted the submission.
        Invalid values leave the state untouched and make no request.
        """
        if values is not None:
            self.values = dict(values)

        self.errors = self.validate()
        if self.errors:
            logger.info(
                "%s blocked by invalid fields: %s",
                type(self).__name__,
                ", ".join(sorted(self.errors)),
            )
            return False

        if not self.can_submit:
            logger.info("%s is not ready to submit", type(self).__name__)
            return False

        self.state = FormState.LOADING
        self.server_error = None
        self.result = None

        try:
            response = await self.client.post(SUBMIT_ENDPOINT, json=self.values)
            if not response.is_success:
                logger.error(
                    "Error submitting form: HTTP %d %s",
                    response.status_code,
                    response.text[:500],
                )
                self._fail()
                return False
            self.result = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Error submitting form: %s: %s", type(exc).__name__, exc)
            self._fail()
            return False

        self.state = FormState.SUCCESS
        self.submitted_at = datetime.now(timezone.utc)
        logger.info("Form submitted successfully: %s", self.result)
        return True

    def _fail(self) -> None:
        self.state = FormState.ERROR
        self.server_error = GENERIC_ERROR

    def reset(self) -> None:
        """Restore the default values and clear any outcome."""
        self.values = dict(self.defaults)
        self.errors = {}
        self.state = FormState.IDLE
        self.server_error = None
        self.result = None
        self.submitted_at = None
