"""
Maintenance endpoint guard.

Maintenance routes are called by schedulers, not users, so they are keyed
by a shared secret in the X-Admin-API-Key header instead of a bearer token.
"""

import logging
import secrets
from typing import Optional

from fastapi import Header, Request, status

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError

logger = logging.getLogger(__name__)

ADMIN_API_KEY_HEADER = "X-Admin-API-Key"


async def verify_admin_api_key(
    request: Request,
    admin_api_key: Optional[str] = Header(None, alias=ADMIN_API_KEY_HEADER),
) -> None:
    """Reject the request with 401 unless the header carries the configured key"""
    if not admin_api_key:
        raise ClientError(
            Error("UNAUTHORIZED", "Admin API key required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    if not secrets.compare_digest(
        admin_api_key.encode("utf-8"), ApplicationConfig.ADMIN_API_KEY.encode("utf-8")
    ):
        logger.warning(f"Rejected admin API key on {request.url.path}")
        raise ClientError(
            Error("INVALID_API_KEY", "Invalid admin API key"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
