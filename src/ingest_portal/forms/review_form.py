"""Review form: free-text post-processing notes for a dataset."""

from __future__ import annotations

from ingest_portal.forms.base import BaseForm
from ingest_portal.forwarding.schemas import ReviewNotes


class ReviewForm(BaseForm):
    schema = ReviewNotes
    defaults = {"notes": ""}

    def field_message(self, field: str, error: dict) -> str:
        return "Notes must be text"
