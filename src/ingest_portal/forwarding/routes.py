"""
Ingest Portal - Forwarding routes

Same-origin endpoints used by the forms.  Each one relays a single request
to an upstream service and writes the upstream JSON back unchanged.
"""

import httpx
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from ingest_portal.forwarding.airflow import trigger_dag_run
from ingest_portal.forwarding.client import get_http_client
from ingest_portal.forwarding.instruments import fetch_instruments
from ingest_portal.forwarding.result import ForwardResult

router = APIRouter(prefix="/api", tags=["forwarding"])


def _as_response(result: ForwardResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.body)


@router.post("/airflow")
async def forward_to_airflow(
    request: Request,
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    """Trigger a DAG run with the posted JSON, whatever its shape, as its ``conf``."""
    try:
        payload = await request.json()
    except ValueError:
        raise HTTPException(
            status_code=422,
            detail="Request body must be valid JSON",
        )
    return _as_response(await trigger_dag_run(client, payload))


@router.get("/instruments")
async def list_instruments(
    client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    """Return the instrument list from the registry."""
    return _as_response(await fetch_instruments(client))
