"""Probe configuration loaded from the environment.

Values come from environment variables (and an optional ``.env`` file) so the
same code runs unchanged in local development and in deployment.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the probe package.

    Attributes:
        PROBE_MAX_POOL_CONNECTIONS (int): Max open connections per engine.
        PROBE_MAX_IDLE_CONNECTIONS (int): Max idle connections kept per engine.
        PROBE_SCHEMA (str): Schema the probe connection URI is scoped to.
        PROBE_DRIVER (str): SQLAlchemy driver name used to build URIs.
        PROBE_CONNECT_TIMEOUT (int): Driver connect timeout in seconds.
        PROBE_REPLICA_STATUS_QUERY (str): Statement used when no metric query is set.
        LOG_LEVEL (str): Root log level.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROBE_MAX_POOL_CONNECTIONS: int = 3
    PROBE_MAX_IDLE_CONNECTIONS: int = 3
    PROBE_SCHEMA: str = "information_schema"
    PROBE_DRIVER: str = "mysql+aiomysql"
    PROBE_CONNECT_TIMEOUT: int = 1
    PROBE_REPLICA_STATUS_QUERY: str = "show slave status"

    LOG_LEVEL: str = "INFO"

    @model_validator(mode="after")
    def _validate_pool_limits(self) -> "Settings":
        if self.PROBE_MAX_POOL_CONNECTIONS < 1:
            raise ValueError("PROBE_MAX_POOL_CONNECTIONS must be at least 1")
        if self.PROBE_MAX_IDLE_CONNECTIONS < 1:
            raise ValueError("PROBE_MAX_IDLE_CONNECTIONS must be at least 1")
        if self.PROBE_MAX_IDLE_CONNECTIONS > self.PROBE_MAX_POOL_CONNECTIONS:
            raise ValueError(
                f"PROBE_MAX_IDLE_CONNECTIONS={self.PROBE_MAX_IDLE_CONNECTIONS} exceeds "
                f"PROBE_MAX_POOL_CONNECTIONS={self.PROBE_MAX_POOL_CONNECTIONS}"
            )
        return self


settings = Settings()
