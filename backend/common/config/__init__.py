"""
Centralized configuration management for the backend services.

This module provides a unified interface for accessing service-specific configuration
settings. It selects the appropriate settings class based on the service name.

The configuration system uses Pydantic Settings, which loads values from:
    1. Environment variables (highest priority)
    2. .env file in the project root
    3. Default values defined in the settings classes

Service-Specific Settings:
    - ReviewsServiceSettings: Configuration for reviews-service
    - BaseServiceSettings: Base configuration shared by all services

Example:
    ```python
    from common.config import get_settings

    settings = get_settings("reviews-service")
    print(settings.SERVICE_NAME)  # "reviews-service"
    print(settings.PORT)  # 8080
    ```
"""

from common.config.settings import (
    BaseServiceSettings,
    ReviewsServiceSettings,
)


def get_settings(service_name: str | None = None) -> BaseServiceSettings:
    """
    Get settings instance for the specified service.

    Args:
        service_name: Name of the service to get settings for. Any string
            containing "review" selects ReviewsServiceSettings; None or any
            other value returns BaseServiceSettings.

    Returns:
        Instance of the appropriate settings class.

    Note:
        - Each call returns a new instance (settings are not cached), so
          environment changes are picked up by the next call
        - Service name matching is case-insensitive
    """
    if service_name and "review" in service_name.lower():
        return ReviewsServiceSettings()
    # Default to base settings
    return BaseServiceSettings()


__all__ = [
    "BaseServiceSettings",
    "ReviewsServiceSettings",
    "get_settings",
]
