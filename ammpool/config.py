"""Service configuration."""

import os
from dataclasses import dataclass


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class ServiceConfig:
    """Runtime configuration for the pool service and its HTTP API.

    Fee parameters are protocol constants (see ammpool.constants) and are
    deliberately absent here.

    Attributes:
        host: Host the API binds to (AMM_HOST, default: 0.0.0.0)
        port: Port the API binds to (AMM_PORT, default: 8000)
        debug: Enable reload mode (AMM_DEBUG, default: false)
        log_level: structlog filtering level (AMM_LOG_LEVEL, default: INFO)
        operator: Address recorded as registry operator (AMM_OPERATOR)
    """

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    operator: str = "operator"

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Build a config from environment variables, falling back to defaults."""
        return cls(
            host=os.environ.get("AMM_HOST", cls.host),
            port=int(os.environ.get("AMM_PORT", str(cls.port))),
            debug=_env_flag("AMM_DEBUG"),
            log_level=os.environ.get("AMM_LOG_LEVEL", cls.log_level).upper(),
            operator=os.environ.get("AMM_OPERATOR", cls.operator),
        )
