"""
Common FastAPI application factory with standard middleware and configuration.

This module provides a factory function for creating FastAPI applications with
consistent configuration, middleware, and error handling across all services.

Features:
    - Automatic logging setup
    - CORS configuration (environment-aware)
    - Request timing middleware
    - Exception handlers for the common error taxonomy
    - Health check and capability listing endpoints
    - OpenAPI documentation

Endpoints:
    - GET /: Capability listing with the service's public endpoints
    - GET /health: Liveness check
    - GET /docs: Swagger UI documentation
    - GET /redoc: ReDoc documentation

Usage:
    ```python
    from common.fastapi import create_fastapi_app
    from fastapi import APIRouter

    api_router = APIRouter()

    @api_router.get("/accounts")
    async def list_accounts():
        return {"accounts": []}

    app = create_fastapi_app(
        service_name="reviews-service",
        description="Review statistics relay",
        api_router=api_router,
        endpoints={"GET /api/accounts": "List accounts"},
    )
    ```
"""

from collections.abc import Callable
from datetime import datetime, timezone
import time
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from loguru import logger

from common.config import get_settings
from common.exceptions import register_exception_handlers
from common.logging import setup_logging

DEV_CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:3001",
]


def create_fastapi_app(
    service_name: str,
    description: str,
    api_router: APIRouter | None = None,
    endpoints: dict[str, str] | None = None,
) -> FastAPI:
    """
    Create a FastAPI application with standardized configuration and middleware.

    Args:
        service_name: Name of the service (e.g., "reviews-service"). Used to load
            service-specific settings and configure logging.
        description: Human-readable description of the service. Used in OpenAPI
            documentation and the root capability listing.
        api_router: Optional APIRouter with the service routes. Included under
            the API_PREFIX setting (default: "/api").
        endpoints: Optional mapping of "METHOD path" to a short description,
            published by the root endpoint.

    Returns:
        Fully configured FastAPI application instance ready to run.

    Side Effects:
        - Configures logging for the service (via setup_logging)
        - Adds middleware and exception handlers to the application
        - Creates health check and root endpoints
    """

    # Setup logging first
    setup_logging(service_name)

    # Get service settings
    settings = get_settings(service_name)

    app = FastAPI(
        title=settings.SERVICE_NAME,
        version=settings.SERVICE_VERSION,
        description=description,
        openapi_url="/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Configure CORS
    allowed_origins = list(settings.CORS_ORIGINS)
    if settings.ENVIRONMENT != "production":
        allowed_origins += [o for o in DEV_CORS_ORIGINS if o not in allowed_origins]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request timing middleware
    @app.middleware("http")
    async def add_process_time_header(
        request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        """Add process time header to responses."""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        logger.info(
            f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s"
        )
        return response

    # Include API router if provided
    if api_router:
        app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/health")
    async def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {
            "status": "OK",
            "service": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "message": description,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Capability listing."""
        return {
            "name": settings.SERVICE_NAME,
            "version": settings.SERVICE_VERSION,
            "description": description,
            "endpoints": {
                "GET /health": "Check service health",
                **(endpoints or {}),
            },
            "authentication": "Bearer token required in the Authorization header",
            "docs": "/docs",
            "health": "/health",
        }

    register_exception_handlers(app)

    return app
