"""
FastAPI application factory for the ArchGraph diagram API.

Creates the API with CORS, request timing, and error mapping from the
ArchGraph exception hierarchy to HTTP statuses.
"""

import time
from datetime import datetime

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from ..shared import (
    get_logger, get_metrics, setup_logging, get_settings,
    ArchGraphError, ValidationError, NotFoundError, UpstreamError,
)
from .models import APIResponse, ErrorResponse
from .routers import business_capabilities, health, system_dependencies

API_PREFIX = "/api/v1"
DIAGRAM_PREFIX = f"{API_PREFIX}/diagram"

# Anything not listed maps to 500
ERROR_STATUS_CODES = {
    ValidationError: 400,
    NotFoundError: 404,
    UpstreamError: 502,
}


def status_code_for(exc: Exception) -> int:
    """HTTP status for an exception raised by a service."""
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


def _error_response(exc: Exception, status_code: int, request: Request) -> JSONResponse:
    error_response = ErrorResponse(
        error=type(exc).__name__,
        message=str(exc),
        details={"path": request.url.path},
        timestamp=datetime.utcnow().isoformat() + "Z"
    )
    return JSONResponse(status_code=status_code, content=error_response.model_dump())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger = get_logger(__name__)

    # Startup
    logger.info("Starting ArchGraph API...")
    try:
        settings = get_settings()
        setup_logging(settings.log_level, settings.log_file)
        logger.info(f"Loaded configuration: {settings.app_name} {settings.app_version}")
    except Exception as e:
        logger.error(f"Failed to initialize configuration: {e}")
        raise

    logger.info("ArchGraph API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down ArchGraph API...")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI app instance
    """
    settings = get_settings()

    app = FastAPI(
        title="ArchGraph API",
        description="""
        Architecture diagrams derived from system integration records:
        - System dependencies: single-system, path and landscape diagrams
        - Business capabilities: global and per-system capability trees
        """,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        metrics = get_metrics()
        metrics.record_api_request(
            endpoint=request.url.path,
            method=request.method,
            duration_seconds=process_time,
            status_code=response.status_code
        )

        return response

    @app.exception_handler(ArchGraphError)
    async def archgraph_exception_handler(request: Request, exc: ArchGraphError):
        logger = get_logger(__name__)
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc}")
        else:
            logger.warning(f"{type(exc).__name__} in {request.method} {request.url.path}: {exc}")
        return _error_response(exc, status_code, request)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger = get_logger(__name__)
        logger.error(f"Unhandled exception in {request.method} {request.url}: {exc}")
        return _error_response(exc, 500, request)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        error_response = ErrorResponse(
            error="HTTPException",
            message=str(exc.detail),
            timestamp=datetime.utcnow().isoformat() + "Z"
        )
        return JSONResponse(status_code=exc.status_code, content=error_response.model_dump())

    # Include routers
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])
    app.include_router(system_dependencies.router, prefix=DIAGRAM_PREFIX, tags=["System Dependencies"])
    app.include_router(business_capabilities.router, prefix=DIAGRAM_PREFIX, tags=["Business Capabilities"])

    @app.get("/", response_model=APIResponse)
    async def root():
        """Root endpoint with API information."""
        return APIResponse(
            success=True,
            data={
                "name": settings.app_name,
                "version": settings.app_version,
                "docs": "/docs",
                "health": f"{API_PREFIX}/health",
                "system_dependencies": f"{DIAGRAM_PREFIX}/system-dependencies",
                "business_capabilities": f"{DIAGRAM_PREFIX}/business-capabilities",
            },
            message="ArchGraph API is running",
            timestamp=datetime.utcnow().isoformat() + "Z"
        )

    return app
