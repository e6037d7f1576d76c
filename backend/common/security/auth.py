"""
Authentication utilities for protected routes.

The services do not issue or validate tokens themselves: a caller-supplied
OAuth access token is extracted from the ``Authorization: Bearer <token>``
header and relayed to the upstream API untouched.
"""
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from common.exceptions import AuthError

# auto_error=False so a missing header reaches get_bearer_token and is reported
# with the service's own 401 body instead of FastAPI's default.
security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    """
    Return the bearer token sent by the caller.

    Raises:
        AuthError: If the Authorization header is missing, uses another scheme,
            or carries an empty token.
    """
    if credentials is None or not credentials.credentials.strip():
        logger.warning("Rejected request without a usable bearer token")
        raise AuthError()

    return credentials.credentials.strip()
