"""Probe target descriptors."""

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.engine import URL

from lagprobe.core.config import settings


class InstanceKey(BaseModel):
    """Identity of a probed database instance."""

    model_config = ConfigDict(frozen=True)

    hostname: str
    port: int = 3306

    def __str__(self) -> str:
        return f"{self.hostname}:{self.port}"


class Probe(BaseModel):
    """A database endpoint to measure, with an optional custom metric query.

    An empty ``metric_query`` means "measure replication lag".
    """

    model_config = ConfigDict(frozen=True)

    key: InstanceKey
    user: str
    password: str = Field(default="", repr=False)
    metric_query: str = ""
    driver: str = Field(default_factory=lambda: settings.PROBE_DRIVER)
    connect_timeout: int = Field(default_factory=lambda: settings.PROBE_CONNECT_TIMEOUT)

    def get_db_uri(self, database_name: str) -> str:
        """Return a connection URI for this probe scoped to ``database_name``."""
        url = URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password or None,
            host=self.key.hostname,
            port=self.key.port,
            database=database_name,
            query={"connect_timeout": str(self.connect_timeout)},
        )
        return url.render_as_string(hide_password=False)
