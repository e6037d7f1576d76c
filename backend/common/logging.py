"""
Common logging configuration for all backend services.

This module provides centralized logging configuration using loguru, ensuring
consistent logging behavior across services. It configures console logging and,
optionally, file-based logging with rotation and retention policies.

Features:
    - Console logging with colorized output for development
    - File-based logging with automatic rotation and compression
    - Service-specific log files for better organization
    - Configurable log levels via environment variables

Log Files (when LOG_TO_FILE is enabled):
    - {LOG_DIR}/{service_name}.log: All logs at configured level (default: INFO)
    - {LOG_DIR}/{service_name}-error.log: Only ERROR level logs

Log Rotation:
    - Error logs: Rotate at 10 MB, retain 30 days, compress with zip
    - General logs: Rotate at 50 MB, retain 7 days, compress with zip

Example:
    ```python
    from common.logging import setup_logging

    setup_logging("reviews-service")

    from loguru import logger
    logger.info("Service started successfully")
    ```
"""

from pathlib import Path
import sys

from loguru import logger

from common.config import get_settings

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"


def setup_logging(service_name: str | None = None) -> None:
    """
    Configure logging for the application using loguru.

    Args:
        service_name: Optional name of the service (e.g., "reviews-service").
            If provided, log files are named after it. If None, generic names
            are used.

    Side Effects:
        - Removes previously registered loguru handlers
        - Adds a console handler, plus file handlers when LOG_TO_FILE is set
        - Creates LOG_DIR if it doesn't exist and file logging is enabled

    Note:
        This function should be called early in the application startup process.
        Calling it again replaces the handlers instead of duplicating them.
    """

    settings = get_settings(service_name)

    # Remove default handler
    logger.remove()

    # Add console handler with custom format
    logger.add(
        sys.stdout,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        "<level>{message}</level>",
        level=settings.LOG_LEVEL,
        colorize=True,
    )

    if not settings.LOG_TO_FILE:
        return

    logs_dir = Path(settings.LOG_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)

    log_name = service_name or "app"
    error_name = f"{service_name}-error" if service_name else "error"

    # Add file handler for errors (service-specific)
    logger.add(
        logs_dir / f"{error_name}.log",
        format=FILE_FORMAT,
        level="ERROR",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
    )

    # Add file handler for all logs (service-specific)
    logger.add(
        logs_dir / f"{log_name}.log",
        format=FILE_FORMAT,
        level=settings.LOG_LEVEL,
        rotation="50 MB",
        retention="7 days",
        compression="zip",
    )
