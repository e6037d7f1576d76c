"""
Reviews Service Package

This package provides the Reviews Service. It exports the FastAPI application
instance for use with ASGI servers like Uvicorn.

The package structure:
    - main.py: FastAPI application entrypoint
    - api/: API layer with endpoints and models
    - clients/: Business Profile API client
    - services/: Business logic layer

Usage:
    ```python
    from services.reviews_service import app

    # uvicorn services.reviews_service:app --port 8080
    ```

Exports:
    app: FastAPI application instance configured for the reviews service
"""

from services.reviews_service.main import app

__all__ = ["app"]
