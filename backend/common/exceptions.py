"""
Standardized error handling for API responses.

This module defines the error taxonomy shared by the backend services and the
JSON body each error is rendered as. The FastAPI handlers that turn these
exceptions into responses are installed by ``register_exception_handlers``,
which ``common.fastapi.create_fastapi_app`` calls for every service.

Taxonomy:
    - APIError: Base class. Carries a client-safe message and an HTTP status.
    - AuthError: Missing or malformed bearer token (401). Raised before any
      upstream call is made.
    - UpstreamError: Non-2xx answer, transport failure or unreadable body from
      an upstream HTTP API. Carries the upstream status (500 when there is none)
      and the upstream body so callers can relay it.

Per-item failures inside a fan-out are not exceptions: they are recorded on the
item itself and never escalated.

Example:
    ```python
    from common.exceptions import UpstreamError

    if response.status_code >= 400:
        raise UpstreamError(
            status_code=response.status_code,
            detail=response.json(),
        )
    ```
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

# HTTP Status Code Constants
HTTP_401_UNAUTHORIZED = 401
HTTP_500_INTERNAL_SERVER_ERROR = 500

GENERIC_ERROR_MESSAGE = (
    "An error occurred while processing your request. Please try again later."
)


class APIError(Exception):
    """
    Base exception class for API errors with user-friendly messages.

    Attributes:
        message (str): Error message that can be safely exposed to clients.
        status_code (int): HTTP status code to return (default: 500).
        internal_error (Exception | None): The original exception that caused this
            error, stored for logging purposes but not exposed to clients.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
        internal_error: Exception | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.internal_error = internal_error
        super().__init__(self.message)

    def to_response_body(self) -> dict[str, Any]:
        """Return the JSON body sent to the client for this error."""
        return {"success": False, "error": self.message}


class AuthError(APIError):
    """
    Raised when a protected route is called without a usable bearer token.

    Rendered as 401 with both a short error and a hint on how to authenticate.
    """

    def __init__(
        self,
        message: str = "Missing or invalid authentication token",
        hint: str = "Provide a Bearer token in the Authorization header",
    ) -> None:
        super().__init__(message, status_code=HTTP_401_UNAUTHORIZED)
        self.hint = hint

    def to_response_body(self) -> dict[str, Any]:
        return {"success": False, "error": self.message, "message": self.hint}


class UpstreamError(APIError):
    """
    Raised when an upstream API call fails.

    Attributes:
        status_code (int): Upstream HTTP status, or 500 when the request never
            produced a response (network error, timeout) or the body was unusable.
        detail (Any): What is relayed to the client: the decoded upstream JSON
            body, its raw text, or the transport error message.
        upstream_message (str | None): The ``error.message`` field of a Google
            style error body, when present.
    """

    def __init__(
        self,
        status_code: int | None,
        detail: Any,
        upstream_message: str | None = None,
        internal_error: Exception | None = None,
    ) -> None:
        self.detail = detail
        self.upstream_message = upstream_message
        message = upstream_message or (detail if isinstance(detail, str) else "Upstream request failed")
        super().__init__(
            message,
            status_code=status_code or HTTP_500_INTERNAL_SERVER_ERROR,
            internal_error=internal_error,
        )

    def to_response_body(self) -> dict[str, Any]:
        return {"success": False, "error": self.detail}


def extract_upstream_message(body: Any) -> str | None:
    """
    Pull the human readable message out of a Google API error body.

    Google APIs answer failures with ``{"error": {"code": ..., "message": ...}}``.
    Returns None for any other shape.
    """
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register the JSON error handlers of the taxonomy on a FastAPI app.

    - AuthError: 401 ``{success, error, message}`` with ``WWW-Authenticate: Bearer``
    - UpstreamError: upstream status (500 when none) ``{success, error: <upstream body>}``
    - APIError: its status ``{success, error: message}``
    - Any other exception: logged with its traceback, answered with a generic 500
    """

    @app.exception_handler(AuthError)
    async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response_body(),
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(
        request: Request, exc: UpstreamError
    ) -> JSONResponse:
        logger.warning(
            f"Upstream error in {request.method} {request.url.path}: "
            f"{exc.status_code} {exc.message}"
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        if exc.internal_error:
            logger.opt(exception=exc.internal_error).error(
                f"API error in {request.method} {request.url.path}: {exc.message}"
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.opt(exception=exc).error(
            f"Unhandled exception in {request.method} {request.url.path}: {exc}"
        )
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": GENERIC_ERROR_MESSAGE},
        )
