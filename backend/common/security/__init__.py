"""
Common security utilities for authentication.
"""

from .auth import get_bearer_token

__all__ = ["get_bearer_token"]
