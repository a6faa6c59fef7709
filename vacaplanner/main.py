"""
VacaPlanner API entrypoint.

Error bodies always carry a single human-readable "error" string, plus a
machine "code" for domain failures. Probes live at the root, business
routes under settings.api_prefix.
"""
import logging
from contextlib import asynccontextmanager
from typing import Union

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

import vacaplanner.models  # noqa: F401  registers the mappers
from vacaplanner.core.config import settings
from vacaplanner.core.exceptions import AppException
from vacaplanner.core.limiter import limiter
from vacaplanner.core.logging import setup_logging
from vacaplanner.core.middleware import CorrelationIdMiddleware, LoggingMiddleware
from vacaplanner.database import init_db
from vacaplanner.routers import health
from vacaplanner.routers.api_router import api_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "Starting service",
        extra={"version": settings.version, "environment": settings.environment},
    )
    try:
        init_db()
    except Exception:
        logger.exception("Database initialization failed")
        raise
    yield
    logger.info("Shutting down")


def _validation_details(exc: RequestValidationError):
    details = []
    for error in exc.errors():
        # ("body", "startDate") -> "startDate"
        field = error["loc"][-1] if error["loc"] else "unknown"
        details.append({"field": str(field), "msg": error["msg"]})
    return details


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        details = _validation_details(exc)
        logger.warning("Request validation failed", extra={"path": request.url.path, "details": details})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Dati non validi", "code": "VALIDATION_FAILED", "details": details},
        )

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        logger.warning(exc.message, extra={"code": exc.error_code, "path": request.url.path})
        content = {"error": exc.message, "code": exc.error_code}
        if exc.details:
            content["details"] = exc.details
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(StarletteHTTPException)
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: Union[HTTPException, StarletteHTTPException]):
        message = exc.detail if isinstance(exc.detail, str) else "Richiesta non riuscita"
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled server error", extra={"path": request.url.path})
        return JSONResponse(status_code=500, content={"error": "Errore interno del server"})


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Vacation, sick and personal leave tracking",
    docs_url="/docs",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)
app.state.limiter = limiter

# Last added runs first: CORS, then correlation id, then access log
app.add_middleware(LoggingMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[settings.request_id_header, "X-Process-Time"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(api_router, prefix=settings.api_prefix)
