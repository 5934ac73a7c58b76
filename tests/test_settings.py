"""Tests for configuration-derived URLs and credentials."""

from __future__ import annotations

import base64
import logging

from ingest_portal.auth import get_auth_headers
from ingest_portal.forwarding.airflow import dag_runs_url
from ingest_portal.forwarding.instruments import instruments_url
from ingest_portal.settings import Settings
from ingest_portal.util.logging import get_logger, setup_logging


class TestAuthHeaders:
    def test_explicit_credential_sent_verbatim(self):
        config = Settings(AIRFLOW_AUTH="Basic YWRtaW46YWRtaW4=", AIRFLOW_USERNAME="ignored")
        assert get_auth_headers(config) == {"Authorization": "Basic YWRtaW46YWRtaW4="}

    def test_basic_auth_from_username(self):
        config = Settings(AIRFLOW_AUTH="", AIRFLOW_USERNAME="svc.ingest", AIRFLOW_PASSWORD="s3cret")
        expected = base64.b64encode(b"svc.ingest:s3cret").decode()
        assert get_auth_headers(config) == {"Authorization": f"Basic {expected}"}

    def test_no_credential(self):
        config = Settings(AIRFLOW_AUTH="", AIRFLOW_USERNAME="")
        assert get_auth_headers(config) == {}


class TestUpstreamUrls:
    def test_dag_runs_url(self):
        config = Settings(AIRFLOW_HOST="http://airflow:8080/", AIRFLOW_DAG_ID="data_ingest")
        assert dag_runs_url(config) == "http://airflow:8080/api/v1/dags/data_ingest/dagRuns"

    def test_instruments_url(self):
        config = Settings(INSTRUMENTS_HOST="http://registry:3001")
        assert instruments_url(config) == "http://registry:3001/instruments"


class TestLogging:
    def test_portal_loggers_share_a_namespace(self):
        assert get_logger().name == "ingest_portal"
        assert get_logger("forwarding.airflow").name == "ingest_portal.forwarding.airflow"

    def test_level_names_any_case(self):
        setup_logging("debug")
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging("chatty")
        assert logging.getLogger().level == logging.INFO
