"""Login, logout and password change endpoints."""

import hmac
import logging

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from merraine.api.auth import AUTH_COOKIE, AUTH_COOKIE_MAX_AGE, AUTH_COOKIE_VALUE, require_auth
from merraine.api.schemas import ChangePasswordRequest, LoginRequest
from merraine.config import settings
from merraine.db import get_optional_db
from merraine.db import queries

router = APIRouter()
logger = logging.getLogger(__name__)

PASSWORD_HASH_KEY = "password_hash"
MIN_PASSWORD_LENGTH = 4
BCRYPT_ROUNDS = 12


def _stored_hash(db: Session | None) -> str | None:
    """Password hash saved via change-password, if any."""
    if db is None:
        return None
    try:
        return queries.get_setting(db, PASSWORD_HASH_KEY)
    except SQLAlchemyError as e:
        logger.warning(f"Password hash lookup failed, using env password: {e}")
        return None


def _check_password(password: str, stored_hash: str | None) -> bool:
    if stored_hash:
        return bcrypt.checkpw(password.encode("utf-8"), stored_hash.encode("utf-8"))
    if settings.auth_password:
        return hmac.compare_digest(password.encode("utf-8"), settings.auth_password.encode("utf-8"))
    return False


@router.post("/login")
def login(data: LoginRequest, response: Response, db: Session | None = Depends(get_optional_db)):
    """Check credentials and set the auth cookie."""
    if not settings.auth_username or not settings.auth_password:
        logger.error("AUTH_USERNAME and AUTH_PASSWORD must be set in environment")
        raise HTTPException(status_code=500, detail="Authentication not configured")

    username_ok = hmac.compare_digest(data.username.encode("utf-8"), settings.auth_username.encode("utf-8"))
    if not (username_ok and _check_password(data.password, _stored_hash(db))):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    response.set_cookie(
        AUTH_COOKIE,
        AUTH_COOKIE_VALUE,
        max_age=AUTH_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.auth_cookie_secure,
        samesite="strict",
    )
    return {"success": True}


@router.post("/logout")
def logout(response: Response):
    """Clear the auth cookie."""
    response.delete_cookie(AUTH_COOKIE, path="/")
    return {"success": True}


@router.post("/change-password", dependencies=[Depends(require_auth)])
def change_password(
    data: ChangePasswordRequest,
    request: Request,
    db: Session | None = Depends(get_optional_db),
):
    """Replace the login password with a bcrypt hash stored in app settings."""
    if not data.current_password or not data.new_password:
        raise HTTPException(status_code=400, detail="Current password and new password are required")
    if len(data.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400, detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters"
        )
    if db is None:
        raise HTTPException(status_code=503, detail="Password change is unavailable (database not configured)")

    try:
        stored_hash = queries.get_setting(db, PASSWORD_HASH_KEY)
    except SQLAlchemyError as e:
        logger.error(f"Password hash lookup failed: {e}")
        raise HTTPException(status_code=503, detail="Password change is unavailable (database error)")

    if not _check_password(data.current_password, stored_hash):
        raise HTTPException(status_code=403, detail="Current password is incorrect")

    new_hash = bcrypt.hashpw(data.new_password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS))
    try:
        queries.set_setting(db, PASSWORD_HASH_KEY, new_hash.decode("utf-8"))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Password change save error: {e}")
        raise HTTPException(status_code=503, detail="Failed to save new password")

    logger.info(f"Password changed from {request.client.host if request.client else 'unknown'}")
    return {"success": True}
