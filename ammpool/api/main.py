"""FastAPI application for the pool service."""

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ammpool.api.endpoints import router
from ammpool.config import ServiceConfig
from ammpool.errors import (
    AmmError,
    NotOperator,
    PoolArithmeticError,
    PoolNotFound,
    RegistryPaused,
)
from ammpool.logging_config import configure_logging
from ammpool.models import ErrorResponse

logger = structlog.get_logger()

config = ServiceConfig.from_env()

app = FastAPI(
    title="AMM Pool",
    description="Constant-product liquidity pool service",
    version="0.1.0",
)

app.include_router(router)


def status_for(error: AmmError) -> int:
    """HTTP status for a rejected pool operation."""
    if isinstance(error, PoolNotFound):
        return 404
    if isinstance(error, NotOperator):
        return 403
    if isinstance(error, RegistryPaused):
        return 423
    if isinstance(error, PoolArithmeticError):
        # Internal guards: reachable only through a logic defect or
        # out-of-range operands
        return 422
    return 409


@app.exception_handler(AmmError)
async def amm_error_handler(request: Request, exc: AmmError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "request_rejected",
        method=request.method,
        path=request.url.path,
        status=status_code,
        error=exc.code,
    )
    body = ErrorResponse(error=exc.code, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Run the pool API server.

    Configuration via environment variables:
    - AMM_HOST: Host to bind to (default: 0.0.0.0)
    - AMM_PORT: Port to bind to (default: 8000)
    - AMM_DEBUG: Enable reload mode (default: false)
    - AMM_LOG_LEVEL: Log level (default: INFO)
    - AMM_OPERATOR: Registry operator address (default: operator)
    """
    configure_logging(config.log_level)
    uvicorn.run(
        "ammpool.api.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
    )


if __name__ == "__main__":
    run()
