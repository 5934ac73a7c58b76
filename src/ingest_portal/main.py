"""
Ingest Portal - FastAPI Application

A small front-end that collects data-ingest requests and dataset review
notes and forwards them to Airflow to trigger a ``data_ingest`` DAG run.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ingest_portal.auth import get_auth_headers
from ingest_portal.forms.pages import router as pages_router
from ingest_portal.forwarding.airflow import dag_runs_url
from ingest_portal.forwarding.client import build_http_client
from ingest_portal.forwarding.instruments import instruments_url
from ingest_portal.forwarding.routes import router as forwarding_router
from ingest_portal.settings import settings
from ingest_portal.util.logging import get_logger, setup_logging

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: logging and the shared outbound client."""
    setup_logging(settings.LOG_LEVEL)
    logger = get_logger()
    logger.info("Ingest Portal starting up")
    logger.info("Airflow DAG runs URL: %s", dag_runs_url())
    logger.info("Instrument registry URL: %s", instruments_url())
    if not get_auth_headers():
        logger.warning("No Airflow credential configured; requests will be unauthenticated")

    async with build_http_client() as client:
        app.state.http_client = client
        yield
        app.state.http_client = None

    logger.info("Ingest Portal shutting down")


app = FastAPI(
    title="Ingest Portal",
    description=(
        "Collects instrument data-ingest requests and review notes and "
        "forwards them to Airflow."
    ),
    version=VERSION,
    lifespan=lifespan,
)

app.include_router(forwarding_router)
app.include_router(pages_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "ingest-portal",
        "version": VERSION,
    }


def run() -> None:
    """Entry point for the ``ingest-portal`` console script."""
    uvicorn.run(
        "ingest_portal.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
