"""
Rate limiting shared by the app and the auth routes.

All traffic shares a per-IP application window through ``SlowAPIMiddleware``;
sign-up and sign-in carry a stricter per-route limit.
"""
from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from mock_interviewer.utils.config import get_server_config
from mock_interviewer.utils.constants import ERROR_RATE_LIMITED

_server_config = get_server_config()

AUTH_RATE_LIMIT = _server_config["auth_rate_limit"]

limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[_server_config["default_rate_limit"]],
    enabled=_server_config["rate_limit_enabled"],
)


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={"success": False, "message": ERROR_RATE_LIMITED},
    )
