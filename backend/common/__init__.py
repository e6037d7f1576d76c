"""
Common utilities and shared code for the backend services.

Modules:
    - config: Environment-based settings (pydantic-settings)
    - exceptions: Error taxonomy and the JSON bodies errors are rendered as
    - fastapi: FastAPI application factory with common middleware and handlers
    - logging: Centralized logging configuration using loguru
    - security: Bearer token extraction for protected routes

Usage:
    ```python
    from common.config import get_settings
    from common.logging import setup_logging
    from common.exceptions import UpstreamError
    from common.security import get_bearer_token
    ```
"""

__version__ = "1.0.0"
