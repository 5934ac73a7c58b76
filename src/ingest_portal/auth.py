"""
Ingest Portal - Authentication

Builds the credential sent to the Airflow REST API on every forwarded
request.
"""

from __future__ import annotations

import base64

from ingest_portal.settings import Settings, settings


def get_auth_headers(config: Settings | None = None) -> dict[str, str]:
    """
    Return HTTP headers for authenticating outbound requests to Airflow.

    ``AIRFLOW_AUTH`` is sent verbatim as the ``Authorization`` header.  When
    it is empty but ``AIRFLOW_USERNAME`` is set, a basic-auth header is built
    from the username and password.  Returns an empty dict when nothing is
    configured so callers can always unpack the result into their headers.
    """
    config = config or settings
    if config.AIRFLOW_AUTH:
        return {"Authorization": config.AIRFLOW_AUTH}
    if config.AIRFLOW_USERNAME:
        raw = f"{config.AIRFLOW_USERNAME}:{config.AIRFLOW_PASSWORD}".encode("utf-8")
        return {"Authorization": f"Basic {base64.b64encode(raw).decode('ascii')}"}
    return {}
