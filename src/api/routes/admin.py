"""
Admin API Routes - Maintenance Endpoints

Authentication is via Admin API Key, not user JWTs.
"""

from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.admin import PurgeExpiredResponse, PurgeExpiredUseCase
from src.app.use_cases.auth import AuthPolicy
from src.depends import get_auth_policy, get_unit_of_work

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post(
    "/maintenance/purge",
    status_code=status.HTTP_200_OK,
    response_model=PurgeExpiredResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def purge_expired(
    uow: UnitOfWork = Depends(get_unit_of_work),
    policy: AuthPolicy = Depends(get_auth_policy),
):
    """
    Purge Expired Records

    Deletes expired refresh tokens and blacklist entries, and login
    attempts older than the retention period. Meant to be called on a
    schedule.

    Requires: X-Admin-API-Key header

    Raises:
        - 401 Unauthorized: Missing or invalid admin API key
        - 500 Internal Server Error: Server error
    """
    use_case = PurgeExpiredUseCase(uow, policy.login_attempt_retention_days)
    result = await use_case.execute()

    if result.is_err():
        raise_for_error(result.error)

    return result.value
