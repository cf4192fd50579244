"""FastAPI application for the Equilibrium AMM engine.

Note: the engine does no locking of its own. Run a single worker process so
writes to the same pool are serialized.
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from equilibrium import __version__
from equilibrium.api.endpoints import router, status_for
from equilibrium.errors import EquilibriumError
from equilibrium.models import ErrorResponse

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("EQUILIBRIUM_HOST", "0.0.0.0")
PORT = int(os.environ.get("EQUILIBRIUM_PORT", "8000"))
DEBUG = os.environ.get("EQUILIBRIUM_DEBUG", "false").lower() in ("true", "1", "yes")

# Maximum request body size (1 MB)
MAX_REQUEST_SIZE = 1024 * 1024

app = FastAPI(
    title="Equilibrium AMM",
    description="Hub-and-spoke StableSwap pools with weighted dynamic fees",
    version=__version__,
)


@app.middleware("http")
async def limit_request_size(request: Request, call_next):  # type: ignore[no-untyped-def]
    """Reject requests with body larger than MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length and int(content_length) > MAX_REQUEST_SIZE:
        return JSONResponse(status_code=413, content={"detail": "Request too large"})
    return await call_next(request)


@app.exception_handler(EquilibriumError)
async def engine_error_handler(request: Request, exc: EquilibriumError) -> JSONResponse:
    """Translate engine errors into {"error": kind, "detail": message}."""
    status = status_for(exc)
    logger.warning(
        "operation_rejected",
        path=request.url.path,
        error=exc.kind,
        status=status,
        recoverable=exc.recoverable,
        detail=str(exc),
    )
    body = ErrorResponse(error=exc.kind, detail=str(exc))
    return JSONResponse(status_code=status, content=body.model_dump())


app.include_router(router)


@app.get("/health")
async def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Run the Equilibrium API server.

    Configuration via environment variables:
    - EQUILIBRIUM_HOST: Host to bind to (default: 0.0.0.0)
    - EQUILIBRIUM_PORT: Port to bind to (default: 8000)
    - EQUILIBRIUM_DEBUG: Enable debug/reload mode (default: false)
    """
    uvicorn.run(
        "equilibrium.api.main:app",
        host=HOST,
        port=PORT,
        reload=DEBUG,
    )


if __name__ == "__main__":
    run()
