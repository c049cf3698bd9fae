"""EPC Codec Service - FastAPI Application Entry Point.

Wires the EPC and config routers, maps codec errors to HTTP 400 and serves
the health probe. Run directly or with `uvicorn main:app`.
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import Settings, get_config, get_settings, load_config, resolve_path
from models import ErrorResponse, HealthResponse, Scheme
from routers import config_router, epc
from services.exceptions import EpcError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_MAX_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def configure_logging(settings: Settings) -> Path:
    """Log to stdout and a rotating file; returns the file path."""
    log_dir = resolve_path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "epc-service.log"

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            RotatingFileHandler(log_file, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"),
        ],
    )
    return log_file


logger = logging.getLogger(__name__)
logger.info(f"Logging to file: {configure_logging(get_settings())}")

_started_at: float = 0


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load configuration before serving requests."""
    global _started_at
    _started_at = time.monotonic()

    load_config()
    codec = get_config().codec
    logger.info(
        f"EPC Codec Service ready (default_filter={codec.default_filter}, max_batch_size={codec.max_batch_size})"
    )

    yield

    logger.info("EPC Codec Service stopped")


app = FastAPI(
    title="EPC Codec Service",
    description="GS1 EPC-96 tag encoder/decoder (SGTIN, SSCC, SGLN, GRAI, GIAI, GID)",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().http.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(epc.router)
app.include_router(config_router.router)


@app.exception_handler(EpcError)
async def epc_error_handler(request: Request, exc: EpcError) -> JSONResponse:
    """Map codec failures to 400 responses."""
    code = type(exc).__name__
    logger.warning(f"Rejected {request.method} {request.url.path}: {code}: {exc}")
    body = ErrorResponse(error={"code": code, "message": str(exc)})
    return JSONResponse(status_code=400, content=body.model_dump())


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check() -> HealthResponse:
    """Report uptime and the tag schemes this service can decode."""
    uptime = int(time.monotonic() - _started_at) if _started_at else 0
    return HealthResponse(ok=True, uptime_seconds=uptime, schemes=list(Scheme))


if __name__ == "__main__":
    import uvicorn

    http = get_config().http
    uvicorn.run(app, host=http.host, port=http.port)
