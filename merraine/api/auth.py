"""Cookie authentication helpers."""

from fastapi import HTTPException, Request

AUTH_COOKIE = "merraine-auth"
AUTH_COOKIE_VALUE = "authenticated"
AUTH_COOKIE_MAX_AGE = 60 * 60 * 24 * 7  # 1 week


def is_authenticated(request: Request) -> bool:
    return request.cookies.get(AUTH_COOKIE) == AUTH_COOKIE_VALUE


def require_auth(request: Request) -> None:
    """FastAPI dependency guarding every /api route except login/logout."""
    if not is_authenticated(request):
        raise HTTPException(status_code=401, detail="Unauthorized - Please log in")
