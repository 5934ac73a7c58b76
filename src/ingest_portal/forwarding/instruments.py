"""
Ingest Portal - Instrument registry lookup

Relays a GET for the instrument list to the internal registry service.
"""

from __future__ import annotations

import httpx

from ingest_portal.forwarding.result import ForwardResult, response_detail
from ingest_portal.settings import Settings, settings
from ingest_portal.util.logging import get_logger

logger = get_logger("forwarding.instruments")


def instruments_url(config: Settings | None = None) -> str:
    config = config or settings
    return f"{config.INSTRUMENTS_HOST.rstrip('/')}/instruments"


async def fetch_instruments(
    client: httpx.AsyncClient,
    config: Settings | None = None,
) -> ForwardResult:
    """
    GET the instrument list from the registry.

    The list is passed back verbatim; nothing is cached.  A non-2xx status,
    a transport failure or a non-JSON body is reported as a 502 error body.
    """
    url = instruments_url(config)
    logger.debug("Fetching instruments from %s", url)

    try:
        response = await client.get(url)
    except httpx.ConnectError:
        msg = f"Cannot connect to instrument registry at {url}"
        logger.warning(msg)
        return ForwardResult.failure(msg)
    except httpx.HTTPError as exc:
        msg = f"Failed to fetch instruments: {exc}"
        logger.exception(msg)
        return ForwardResult.failure(msg)
    except Exception as exc:
        msg = f"Failed to fetch instruments: {type(exc).__name__}: {exc}"
        logger.exception(msg)
        return ForwardResult.failure(msg)

    if not response.is_success:
        msg = "Failed to fetch instruments"
        logger.warning(
            "%s: registry returned HTTP %d", msg, response.status_code
        )
        return ForwardResult.failure(
            msg,
            status_code=response.status_code,
            detail=response_detail(response),
        )

    try:
        instruments = response.json()
    except ValueError:
        msg = "Instrument registry returned a non-JSON response"
        logger.warning(msg)
        return ForwardResult.failure(msg, status_code=response.status_code)

    return ForwardResult.success(instruments)
