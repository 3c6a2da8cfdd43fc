from fastapi import HTTPException, Request, Response, status
from typing import Optional
from storefront.auth.jwt_tokens import token_manager
from storefront.config import settings
import logging

logger = logging.getLogger(__name__)

ADMIN_COOKIE_NAME = "admin_token"
ADMIN_COOKIE_MAX_AGE = 60 * 60 * 24


def _principal_from_payload(payload: dict) -> dict:
    return {
        "user_id": payload.get("userId"),
        "username": payload.get("username"),
        "name": payload.get("name"),
        "payload": payload,
    }


async def require_admin(request: Request) -> dict:
    """Dependency to authenticate the admin session cookie

    Raises 401 when the cookie is missing, invalid, expired or lacks userId.
    """
    token = request.cookies.get(ADMIN_COOKIE_NAME)

    if not token:
        logger.warning(f"Admin cookie missing for {request.method} {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - No authentication token provided"
        )

    payload = token_manager.verify_token(token)
    if not payload or not payload.get("userId"):
        logger.warning(f"Rejected admin token for {request.method} {request.url.path}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized - Invalid or expired token"
        )

    return _principal_from_payload(payload)


async def get_optional_admin(request: Request) -> Optional[dict]:
    """Dependency returning the admin principal, or None when not logged in"""
    token = request.cookies.get(ADMIN_COOKIE_NAME)
    if not token:
        return None

    payload = token_manager.verify_token(token)
    if not payload:
        return None
    return _principal_from_payload(payload)


def set_admin_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value=token,
        max_age=ADMIN_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


def clear_admin_cookie(response: Response) -> None:
    response.set_cookie(
        key=ADMIN_COOKIE_NAME,
        value="",
        max_age=0,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
