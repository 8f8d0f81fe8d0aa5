"""
Runtime settings for the OpenNeuro MCP server.

The GraphQL endpoint and user agent are fixed. Timeout, bind address and log
level come from the environment.
"""

import os
from typing import Literal, get_args

from pydantic import BaseModel, Field

OPENNEURO_GRAPHQL_ENDPOINT = "https://openneuro.org/crn/graphql"
USER_AGENT = "MCPOpenNeuroServer/0.1.0 (ModelContextProtocol; +https://modelcontextprotocol.io)"

DEFAULT_TIMEOUT = 30.0
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8001
DEFAULT_LOG_LEVEL = "INFO"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]
LOG_LEVELS: tuple[str, ...] = get_args(LogLevel)


class RelaySettings(BaseModel):
    """Settings shared by the relay and the console entry point."""

    endpoint: str = OPENNEURO_GRAPHQL_ENDPOINT
    user_agent: str = USER_AGENT
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Outbound request timeout in seconds")
    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    log_level: LogLevel = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "RelaySettings":
        """
        Build settings from OPENNEURO_TIMEOUT, MCP_HOST, MCP_PORT and LOG_LEVEL.

        Unset or empty variables fall back to the defaults. Malformed numbers
        raise pydantic's ValidationError.
        """
        values: dict[str, str] = {}
        for field_name, env_name in (
            ("timeout", "OPENNEURO_TIMEOUT"),
            ("host", "MCP_HOST"),
            ("port", "MCP_PORT"),
            ("log_level", "LOG_LEVEL"),
        ):
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw.strip()
        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()
        return cls.model_validate(values)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }
