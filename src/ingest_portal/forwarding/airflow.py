"""
Ingest Portal - Trigger Airflow DAG runs

Wraps a form payload in a ``conf`` envelope and POSTs it to the Airflow
REST API, which starts one run of the configured DAG per call.
"""

from __future__ import annotations

from typing import Any

import httpx

from ingest_portal.auth import get_auth_headers
from ingest_portal.forwarding.result import ForwardResult, response_detail
from ingest_portal.settings import Settings, settings
from ingest_portal.util.logging import get_logger

logger = get_logger("forwarding.airflow")


def dag_runs_url(config: Settings | None = None) -> str:
    """Return the ``dagRuns`` collection URL for the configured DAG."""
    config = config or settings
    base = config.AIRFLOW_HOST.rstrip("/")
    return f"{base}/api/v1/dags/{config.AIRFLOW_DAG_ID}/dagRuns"


async def trigger_dag_run(
    client: httpx.AsyncClient,
    payload: Any,
    config: Settings | None = None,
) -> ForwardResult:
    """
    POST ``{"conf": payload}`` to Airflow and return its JSON response.

    The payload is forwarded exactly as received; it is not re-validated
    here.  Every call starts a new DAG run, identical payloads included.

    Args:
        client: Open client used for the outbound request.
        payload: JSON-decoded request body from the form.
        config: Settings override; defaults to the module-level settings.

    Returns:
        A :class:`ForwardResult` carrying the upstream JSON on success, or
        an error body with a 502 status when Airflow is unreachable, answers
        with a non-2xx status, or returns something other than JSON.
    """
    url = dag_runs_url(config)
    headers: dict[str, str] = {"Content-Type": "application/json"}
    headers.update(get_auth_headers(config))

    logger.info("Triggering DAG run at %s", url)

    try:
        response = await client.post(url, json={"conf": payload}, headers=headers)
    except httpx.ConnectError:
        msg = f"Cannot connect to Airflow at {url}"
        logger.warning(msg)
        return ForwardResult.failure(msg)
    except httpx.TimeoutException:
        msg = f"Timed out waiting for Airflow at {url}"
        logger.warning(msg)
        return ForwardResult.failure(msg)
    except httpx.HTTPError as exc:
        msg = f"Failed to reach Airflow: {exc}"
        logger.exception(msg)
        return ForwardResult.failure(msg)
    except Exception as exc:
        msg = f"Failed to trigger DAG run: {type(exc).__name__}: {exc}"
        logger.exception(msg)
        return ForwardResult.failure(msg)

    if not response.is_success:
        msg = f"Airflow returned HTTP {response.status_code}"
        logger.warning("%s for %s", msg, url)
        return ForwardResult.failure(
            msg,
            status_code=response.status_code,
            detail=response_detail(response),
        )

    try:
        data = response.json()
    except ValueError:
        msg = "Airflow returned a non-JSON response"
        logger.warning("%s (HTTP %d)", msg, response.status_code)
        return ForwardResult.failure(msg, status_code=response.status_code)

    logger.info("DAG run accepted (HTTP %d)", response.status_code)
    return ForwardResult.success(data)
