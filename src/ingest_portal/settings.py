"""
Ingest Portal - Settings

Settings are loaded from environment variables or from a .env file in the
working directory.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Portal configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Airflow webserver
    AIRFLOW_HOST: str = "http://localhost:8080"
    AIRFLOW_AUTH: str = ""  # Full Authorization header value, e.g. "Basic ..."
    AIRFLOW_USERNAME: str = ""  # Basic-auth fallback when AIRFLOW_AUTH is empty
    AIRFLOW_PASSWORD: str = ""
    AIRFLOW_DAG_ID: str = "data_ingest"

    # Instrument registry
    INSTRUMENTS_HOST: str = "http://localhost:3001"

    # Outbound request timeout
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Logging level
    LOG_LEVEL: str = "INFO"

    # Bind address for the console script
    HOST: str = "0.0.0.0"
    PORT: int = 3000


settings = Settings()
