"""Caller session resolution and role checks for analytics endpoints.

The upstream authentication layer forwards the verified caller identity in
request headers; this module only reads it.
"""

from __future__ import annotations

from fastapi import Request, status
from fastapi.responses import JSONResponse

from app.domain import CallerSession, UserRole

SESSION_USER_ID_HEADER = "X-User-Id"
SESSION_ROLE_HEADER = "X-User-Role"


def api_resolve_caller_session(request: Request) -> CallerSession | None:
    """Read the caller session from forwarded identity headers.

    Args:
        request: Incoming request.

    Returns:
        CallerSession | None: Caller session, or None when no user id is present.
    """

    user_id = (request.headers.get(SESSION_USER_ID_HEADER) or "").strip()
    if not user_id:
        return None
    role = (request.headers.get(SESSION_ROLE_HEADER) or "").strip().upper()
    return CallerSession(user_id=user_id, role=role)


def api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Build the standard error envelope."""

    payload = {
        "status": "error",
        "code": code,
        "message": message,
    }
    return JSONResponse(content=payload, status_code=status_code)


def api_require_role(session: CallerSession | None, required_role: UserRole) -> JSONResponse | None:
    """Check that a caller is authenticated with the required role.

    Args:
        session: Resolved caller session.
        required_role: Role allowed to access the endpoint.

    Returns:
        JSONResponse | None: 401/403 error response, or None when access is granted.
    """

    if session is None:
        return api_error_response(
            status.HTTP_401_UNAUTHORIZED,
            "AUTHENTICATION_REQUIRED",
            "Authentication required",
        )
    if session.role != required_role.value:
        return api_error_response(
            status.HTTP_403_FORBIDDEN,
            "ACCESS_DENIED",
            f"Access denied. {required_role.value} role required.",
        )
    return None


__all__ = [
    "SESSION_ROLE_HEADER",
    "SESSION_USER_ID_HEADER",
    "api_error_response",
    "api_require_role",
    "api_resolve_caller_session",
]
