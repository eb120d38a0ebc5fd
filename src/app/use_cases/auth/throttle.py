"""
Per-IP throttle shared by the credential endpoints.

Counts recorded login attempts from the client IP within the lockout window.
"""

import logging
from typing import Optional

from libs.result import Error
from src.app.services.unit_of_work import UnitOfWork
from .dtos import ClientInfo
from .policy import AuthPolicy

logger = logging.getLogger(__name__)


async def check_ip_throttle(
    uow: UnitOfWork, policy: AuthPolicy, client: ClientInfo
) -> Optional[Error]:
    """Return TOO_MANY_ATTEMPTS if the client IP is over budget, else None"""
    if not client.ip_address or policy.max_attempts_per_ip <= 0:
        return None

    window = policy.lockout_duration_minutes
    attempts = await uow.login_attempts.count_recent_by_ip(client.ip_address, window)
    if attempts < policy.max_attempts_per_ip:
        return None

    logger.warning(f"Throttled request from IP {client.ip_address}")
    return Error(
        "TOO_MANY_ATTEMPTS",
        f"Too many login attempts. Try again in {window} minutes",
    )
