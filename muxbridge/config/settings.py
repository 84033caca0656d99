"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings

# Leading path segments the gateway prepends ahead of the application path
DEFAULT_PREFIX_SEGMENTS = {
    "rest": 1,  # /{stage}/...
    "http": 2,  # /{stage}/{proxy}/...
}


class Settings(BaseSettings):
    # Gateway integration
    event_format: Literal["rest", "http"] = "rest"  # REST API (v1) | HTTP API (v2)
    path_prefix_segments: int | None = None  # None = default for event_format

    # Standalone listener
    listen_host: str = "0.0.0.0"
    listen_port: int = 8080

    # Set by the Lambda runtime; presence alone selects Lambda mode
    aws_lambda_function_name: str | None = None

    # Logging
    log_level: str = "INFO"
    audit_log_file: str = ""  # Empty = stdout only

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def runtime_mode(self) -> str:
        """Return "lambda" inside the Lambda runtime, "server" everywhere else."""
        return "lambda" if self.aws_lambda_function_name is not None else "server"

    @property
    def prefix_segments(self) -> int:
        if self.path_prefix_segments is not None:
            return self.path_prefix_segments
        return DEFAULT_PREFIX_SEGMENTS[self.event_format]


@lru_cache
def get_settings() -> Settings:
    return Settings()
