"""FastAPI application entry point for the CSRD disclosure service.

Wires the disclosure, assessment and report routers, maps the compliance
error taxonomy to HTTP status codes, and exposes health/version probes.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from src.api.assessments import assessments_router, reports_router
from src.api.disclosures import router as disclosures_router
from src.compliance.errors import NotFoundError, StoreUnavailableError, ValidationError
from src.config.settings import get_settings

APP_VERSION = "0.1.0"

settings = get_settings()

_LOG_NAME_TO_LEVEL: dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

# --- Structured logging ---
structlog.configure(
    processors=[
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.dev.ConsoleRenderer() if settings.ENVIRONMENT == "dev"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        _LOG_NAME_TO_LEVEL[settings.LOG_LEVEL.value],
    ),
    context_class=dict,
    logger_factory=structlog.PrintLoggerFactory(),
    cache_logger_on_first_use=True,
)

logger: structlog.stdlib.BoundLogger = structlog.get_logger()


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Create missing tables for the embedded SQLite store; other backends use alembic."""
    from src.db.session import engine, init_models

    if settings.DATABASE_URL.startswith("sqlite"):
        try:
            await init_models()
        except Exception as exc:
            # Requests fail with 503 and /health reports degraded.
            logger.error("store_init_failed", error=str(exc))
    yield
    await engine.dispose()


# --- FastAPI app ---
app = FastAPI(
    title="CSRD Disclosure API",
    description="Validation, storage and assessment of ESRS sustainability disclosures.",
    version=APP_VERSION,
    lifespan=lifespan,
)

# --- CORS middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.ENVIRONMENT == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Error mapping ---


@app.exception_handler(ValidationError)
async def validation_error_handler(_: Request, exc: ValidationError) -> JSONResponse:
    logger.info("validation_rejected", record_kind=exc.record_kind, errors=len(exc.errors))
    return JSONResponse(
        status_code=422,
        content={
            "detail": exc.message,
            "code": exc.code,
            "errors": [f.model_dump(mode="json") for f in exc.errors],
            "warnings": [f.model_dump(mode="json") for f in exc.warnings],
        },
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(_: Request, exc: StoreUnavailableError) -> JSONResponse:
    logger.error("store_unavailable", **exc.details)
    return JSONResponse(
        status_code=503,
        content={"detail": exc.message, "code": exc.code},
    )


# --- Routers ---
app.include_router(disclosures_router)
app.include_router(assessments_router)
app.include_router(reports_router)


# --- Infrastructure Endpoints ---


@app.get("/health")
async def health_check() -> dict:
    """Liveness probe with record store connectivity check.

    Returns 200 always (degraded status if the store is down).
    """
    checks: dict[str, bool] = {"api": True}

    try:
        from src.db.session import async_session_factory
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
        checks["database"] = True
    except Exception:
        checks["database"] = False

    all_ok = all(checks.values())

    return {
        "status": "ok" if all_ok else "degraded",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
        "checks": checks,
    }


@app.get("/api/version")
async def get_version() -> dict[str, str]:
    """Return application name, version, and environment."""
    return {
        "name": "CSRD Disclosure API",
        "version": APP_VERSION,
        "environment": settings.ENVIRONMENT.value,
    }
