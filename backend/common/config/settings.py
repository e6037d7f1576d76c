"""
Centralized configuration management for the backend services.

This module defines Pydantic Settings classes for managing configuration. It
provides a small hierarchy with base settings shared by every service and
service-specific overrides.

Configuration Loading:
    Settings are loaded in the following priority order (highest to lowest):
    1. Environment variables
    2. .env file in the project root
    3. Default values defined in the classes

Validation:
    All settings are validated using Pydantic validators to ensure:
    - Type correctness
    - Value constraints (e.g., positive integers, positive timeouts)
    - Format requirements (e.g., CORS origins parsing)

Service Settings Hierarchy:
    BaseServiceSettings (base class)
    └── ReviewsServiceSettings

Example:
    ```python
    from common.config.settings import ReviewsServiceSettings

    settings = ReviewsServiceSettings()
    print(settings.SERVICE_NAME)  # "reviews-service"
    print(settings.PORT)  # 8080
    print(settings.GMB_API_BASE_URL)  # "https://mybusiness.googleapis.com/v4"
    ```

Environment Variables:
    All settings can be overridden via environment variables. For example:
    - PORT=9000
    - LOG_LEVEL=DEBUG
    - CORS_ORIGINS=https://zapier.com,https://hooks.zapier.com
    - MAX_CONCURRENT_LOCATION_FETCHES=5
"""

from typing import Any

from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Constants
MAX_REVIEWS_PAGE_SIZE = 50  # Upper bound accepted by the reviews.list endpoint
DEFAULT_CORS_ORIGINS = ["https://zapier.com", "https://hooks.zapier.com"]


class BaseServiceSettings(BaseSettings):
    """
    Base settings class providing common configuration for all services.

    Attributes:
        SERVICE_NAME (str): Name identifier for the service. Default: "base-service"
        SERVICE_VERSION (str): Version string for the service. Default: "1.0.0"
        HOST (str): Interface the ASGI server binds to. Default: "0.0.0.0"
        PORT (int): Port number the service listens on. Default: 8080

        ENVIRONMENT (str): Deployment environment. Values: "DEV" or "production". Default: "DEV"
        DEBUG (bool): Enable debug mode. Default: False
        LOG_LEVEL (str): Logging level. Default: "INFO"
        LOG_TO_FILE (bool): Also write rotating log files. Default: True
        LOG_DIR (str): Directory for log files. Default: "logs"

        API_PREFIX (str): Prefix for the protected routes. Default: "/api"
        CORS_ORIGINS (list[str]): Allowed CORS origins. Comma-separated string or list.

    Note:
        - CORS_ORIGINS defaults to the Zapier origins the service is called from
        - Integer fields are validated to be positive
    """

    # Service Information (defaults)
    SERVICE_NAME: str = "base-service"
    SERVICE_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Global Configuration
    ENVIRONMENT: str = "DEV"  # Can be "DEV" or "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_TO_FILE: bool = True
    LOG_DIR: str = "logs"

    # API Configuration
    API_PREFIX: str = "/api"

    # CORS Configuration
    CORS_ORIGINS: Any = DEFAULT_CORS_ORIGINS

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Any) -> list[str]:
        """
        Assemble CORS origins from string or list format.

        Accepts either a comma-separated string
        ("https://zapier.com, https://hooks.zapier.com") or a list of strings.
        Whitespace around origins is stripped and empty entries are dropped.
        Any other type yields an empty list.
        """
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("PORT", mode="before")
    @classmethod
    def validate_positive_int(cls, v: Any, info: ValidationInfo) -> int:
        """
        Validate that integer fields loaded from the environment are positive.

        Raises:
            ValueError: If the value cannot be converted to an integer or is not
                strictly positive.
        """
        try:
            int_val = int(v)
        except (ValueError, TypeError) as e:
            msg = f"{info.field_name} must be a valid positive integer, got: {v}"
            raise ValueError(msg) from e
        if int_val < 1:
            msg = f"{info.field_name} must be a positive integer"
            raise ValueError(msg)
        return int_val

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


class ReviewsServiceSettings(BaseServiceSettings):
    """
    Settings configuration for the reviews service.

    Inherited Attributes:
        All attributes from BaseServiceSettings are available with these overrides:
        - SERVICE_NAME: "reviews-service"
        - SERVICE_VERSION: "1.0.0"

    Additional Attributes:
        GMB_API_BASE_URL (str): Base URL of the Business Profile v4 API.
        UPSTREAM_TIMEOUT_SECONDS (float): httpx timeout for every upstream call.
        LOCATION_FETCH_TIMEOUT_SECONDS (float): Budget for one per-location review
            fetch inside the account aggregation. Expiry is reported on that
            location's entry instead of stalling the whole response.
        MAX_CONCURRENT_LOCATION_FETCHES (int): Maximum number of per-location
            fetches in flight at once for a single aggregation request.
        REVIEWS_PAGE_SIZE (int): pageSize sent to reviews.list. Only the summary
            counters are read, so one review is enough.
    """

    SERVICE_NAME: str = "reviews-service"
    SERVICE_VERSION: str = "1.0.0"

    # Upstream API Configuration
    GMB_API_BASE_URL: str = "https://mybusiness.googleapis.com/v4"
    UPSTREAM_TIMEOUT_SECONDS: float = 30.0

    # Aggregation Configuration
    LOCATION_FETCH_TIMEOUT_SECONDS: float = 20.0
    MAX_CONCURRENT_LOCATION_FETCHES: int = 10
    REVIEWS_PAGE_SIZE: int = 1

    @field_validator("GMB_API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("UPSTREAM_TIMEOUT_SECONDS", "LOCATION_FETCH_TIMEOUT_SECONDS")
    @classmethod
    def validate_timeouts(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            msg = f"{info.field_name} must be greater than 0"
            raise ValueError(msg)
        return v

    @field_validator("MAX_CONCURRENT_LOCATION_FETCHES", "REVIEWS_PAGE_SIZE")
    @classmethod
    def validate_bounds(cls, v: int, info: ValidationInfo) -> int:
        """
        Validate concurrency and page size bounds.

        Raises:
            ValueError: If the value is less than 1, or REVIEWS_PAGE_SIZE exceeds
                MAX_REVIEWS_PAGE_SIZE.
        """
        if v < 1:
            msg = f"{info.field_name} must be at least 1"
            raise ValueError(msg)
        if info.field_name == "REVIEWS_PAGE_SIZE" and v > MAX_REVIEWS_PAGE_SIZE:
            msg = f"{info.field_name} cannot exceed {MAX_REVIEWS_PAGE_SIZE}"
            raise ValueError(msg)
        return v
