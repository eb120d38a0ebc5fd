"""
Request metadata helpers.

Derives the client IP, user agent and a device fingerprint stored with
sessions and login attempts.
"""

import json

from fastapi import Request

from src.app.use_cases.auth import ClientInfo

UNKNOWN = "unknown"


def get_ip_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN


def get_user_agent(request: Request) -> str:
    return request.headers.get("user-agent") or UNKNOWN


def get_device_info(request: Request) -> str:
    accept_language = request.headers.get("accept-language")
    return json.dumps(
        {
            "user_agent": get_user_agent(request),
            "platform": request.headers.get("sec-ch-ua-platform") or UNKNOWN,
            "language": accept_language.split(",")[0].strip() if accept_language else UNKNOWN,
        }
    )


def get_client_info(request: Request) -> ClientInfo:
    """FastAPI dependency building ClientInfo from the incoming request"""
    return ClientInfo(
        ip_address=get_ip_address(request),
        user_agent=get_user_agent(request),
        device_info=get_device_info(request),
    )
