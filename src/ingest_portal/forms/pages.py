"""
Ingest Portal - HTML pages

Server-rendered home, request and review pages.  Form posts are driven
through the form controllers, which reach the forwarding endpoints of this
same application over an in-process ASGI transport.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ingest_portal.forms.base import BaseForm
from ingest_portal.forms.request_form import REQUEST_FIELDS, SubmissionForm
from ingest_portal.forms.review_form import ReviewForm

TEMPLATES = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["pages"])

NAV_LINKS = [("/", "Home"), ("/request", "Request"), ("/review", "Review")]


@asynccontextmanager
async def portal_client(request: Request) -> AsyncIterator[httpx.AsyncClient]:
    """Client bound to this application, used by the forms for same-origin calls."""
    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(transport=transport, base_url=str(request.base_url)) as client:
        yield client


def _render(
    request: Request,
    template: str,
    form: BaseForm | None = None,
    status_code: int = 200,
    **context,
) -> HTMLResponse:
    context.update(
        {
            "nav_links": NAV_LINKS,
            "current_path": request.url.path,
            "form": form,
        }
    )
    return TEMPLATES.TemplateResponse(request, template, context, status_code=status_code)


async def _posted_values(request: Request, fields: list[str]) -> dict[str, str]:
    data = await request.form()
    return {field: str(data.get(field, "")) for field in fields}


@asynccontextmanager
async def open_request_form(request: Request) -> AsyncIterator[SubmissionForm]:
    """Request form with its instrument lookup started; closed on the way out."""
    async with portal_client(request) as client:
        form = SubmissionForm(client)
        try:
            await form.start_loading_instruments()
            yield form
        finally:
            await form.close()


@router.get("/", response_class=HTMLResponse)
async def home(request: Request) -> HTMLResponse:
    return _render(request, "index.html")


@router.get("/request", response_class=HTMLResponse)
async def request_page(request: Request) -> HTMLResponse:
    async with open_request_form(request) as form:
        return _render(request, "request.html", form, fields=REQUEST_FIELDS)


@router.post("/request", response_class=HTMLResponse)
async def submit_request(request: Request) -> HTMLResponse:
    """Validate the posted request form and forward it to Airflow."""
    values = await _posted_values(request, [field for field, _ in REQUEST_FIELDS])
    async with open_request_form(request) as form:
        await form.submit(values)
    status_code = 422 if form.errors else 200
    return _render(request, "request.html", form, status_code, fields=REQUEST_FIELDS)


@router.get("/review", response_class=HTMLResponse)
async def review_page(request: Request) -> HTMLResponse:
    async with portal_client(request) as client:
        form = ReviewForm(client)
    return _render(request, "review.html", form)


@router.post("/review", response_class=HTMLResponse)
async def submit_review(request: Request) -> HTMLResponse:
    """Forward the posted review notes to Airflow."""
    values = await _posted_values(request, ["notes"])
    async with portal_client(request) as client:
        form = ReviewForm(client)
        await form.submit(values)
    return _render(request, "review.html", form)
