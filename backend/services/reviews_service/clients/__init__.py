"""
Upstream API clients for the reviews service.
"""

from .gmb_client import GMBClient

__all__ = ["GMBClient"]
