"""Configuration for reqwatch.

Values are read from the environment with the ``REQWATCH_`` prefix, or from a
``.env`` file in the working directory.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_METRICS_PATH = "/metrics"


class Settings(BaseSettings):
    """Runtime settings.

    Attributes:
    ----------
        METRICS_PATH (str): Reserved path that serves the exposition and is
            never instrumented.
        METRICS_SUBSYSTEM (str): Prefix applied to every metric name.
        METRICS_SIDECAR_ENABLED (bool): Also serve metrics from a separate
            aiohttp server.
        METRICS_HOST (str): Bind host of the sidecar server.
        METRICS_PORT (int): Bind port of the sidecar server.
        LOG_LEVEL (str): Level of the ``reqwatch`` logger.
        LOCAL_DEVELOPMENT (bool): Plain text logs instead of JSON lines.
    """

    model_config = SettingsConfigDict(
        env_prefix="REQWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    METRICS_PATH: str = DEFAULT_METRICS_PATH
    METRICS_SUBSYSTEM: str = ""
    METRICS_SIDECAR_ENABLED: bool = False
    METRICS_HOST: str = "0.0.0.0"
    METRICS_PORT: int = 9090

    LOG_LEVEL: str = "INFO"
    LOCAL_DEVELOPMENT: bool = False

    @field_validator("METRICS_PATH")
    @classmethod
    def _path_is_absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("METRICS_PATH must start with '/'")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()
