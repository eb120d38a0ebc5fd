from typing import Dict, NoReturn

from fastapi import status
from libs.result import Error

# Status codes for every business error a use case can return
ERROR_STATUS_CODES: Dict[str, int] = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_LOCKED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "INVALID_REFRESH_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "REFRESH_TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_REVOKED": status.HTTP_401_UNAUTHORIZED,
    "USER_INACTIVE": status.HTTP_401_UNAUTHORIZED,
    "TOO_MANY_ATTEMPTS": status.HTTP_429_TOO_MANY_REQUESTS,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)

    def to_dict(self) -> dict:
        error_dict = {"code": self.base_error.code, "message": self.base_error.message}
        if self.base_error.details:
            error_dict["details"] = self.base_error.details
        return error_dict


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error) -> NoReturn:
    """Raise the HTTP-mapped exception for a use case error; unknown codes are server errors"""
    status_code = ERROR_STATUS_CODES.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
