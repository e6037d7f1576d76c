"""
Reviews Service - FastAPI Application Entrypoint

This module serves as the entry point of the Reviews Service, a small relay in
front of the Google Business Profile API used by automation platforms (Zapier
webhooks). It forwards the caller's bearer token upstream and aggregates review
statistics across the locations of an account.

Example:
    To run the service locally:
        ```bash
        uvicorn services.reviews_service:app --port 8080 --reload
        ```
    or through the installed console script:
        ```bash
        reviews-service
        ```

    The service will be available at:
        - API Base: http://localhost:8080/api
        - Swagger UI: http://localhost:8080/docs
        - Health Check: http://localhost:8080/health

Attributes:
    app (FastAPI): The FastAPI application instance.
"""

import uvicorn

from common.config import get_settings
from common.fastapi import create_fastapi_app
from services.reviews_service.api.api import ENDPOINTS, api_router

SERVICE_NAME = "reviews-service"

app = create_fastapi_app(
    service_name=SERVICE_NAME,
    description="Google Business Profile API - review counts and ratings",
    api_router=api_router,
    endpoints=ENDPOINTS,
)


def run() -> None:
    """Serve the application with uvicorn on the configured HOST and PORT."""
    settings = get_settings(SERVICE_NAME)
    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
