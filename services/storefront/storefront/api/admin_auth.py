from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session
from datetime import datetime, timezone
from typing import Optional
import logging

from storefront.auth.dependencies import get_optional_admin, set_admin_cookie, clear_admin_cookie
from storefront.auth.jwt_tokens import token_manager
from storefront.auth.rate_limiter import LoginRateLimiter, get_client_ip, get_login_rate_limiter
from storefront.db.database import get_db, check_database_connection
from storefront.schemas.admin import LoginRequest, LoginResponse, LogoutResponse, StatusResponse
from storefront.services import get_storage_provider
from storefront.services.admin_service import AdminService
from storefront.services.storage_providers.base import StorageProvider

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Session"]
)


def get_admin_service(db: Session = Depends(get_db)) -> AdminService:
    return AdminService(db)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Admin login",
    description="""
    Exchange admin credentials for an HTTP-only `admin_token` session cookie
    valid for 24 hours.

    **Rate limiting:** 5 attempts per client IP per 15 minutes. A successful
    login clears the client's counter.
    """,
    responses={
        200: {
            "description": "Logged in; the session cookie is set",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "username": "admin", "name": "Admin"}
                    }
                }
            }
        },
        400: {"description": "Username and password are required"},
        401: {"description": "Invalid credentials"},
        429: {"description": "Too many login attempts"}
    }
)
async def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    rate_limiter: LoginRateLimiter = Depends(get_login_rate_limiter),
    admin_service: AdminService = Depends(get_admin_service)
):
    client_ip = get_client_ip(request)
    if not rate_limiter.check(client_ip):
        logger.warning(f"Login rate limit exceeded for {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many login attempts. Please try again later."
        )

    if not credentials.username or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required"
        )

    user = admin_service.authenticate(credentials.username, credentials.password)
    if not user:
        logger.warning(f"Failed admin login for '{credentials.username}' from {client_ip}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    rate_limiter.reset(client_ip)
    token = token_manager.sign_token(user["id"], user["username"], user["name"])
    set_admin_cookie(response, token)
    return {"success": True, "user": user}


@router.post(
    "/logout",
    response_model=LogoutResponse,
    summary="Admin logout",
    description="Clears the `admin_token` cookie.",
)
async def logout(response: Response):
    clear_admin_cookie(response)
    return LogoutResponse()


@router.get(
    "/status",
    response_model=StatusResponse,
    summary="Dashboard connectivity status",
    description="""
    Reports database and storage reachability and, when the request carries a
    valid session cookie, who is logged in. This endpoint never fails:
    unexpected errors degrade to the database and storage checks being `false`.
    """,
    responses={
        200: {
            "description": "Connectivity report",
            "content": {
                "application/json": {
                    "example": {
                        "serverConnected": True,
                        "databaseConnected": True,
                        "storageConnected": False,
                        "adminInfo": None,
                        "timestamp": "2024-01-01T00:00:00Z"
                    }
                }
            }
        }
    }
)
def get_status(
    db: Session = Depends(get_db),
    storage: StorageProvider = Depends(get_storage_provider),
    admin: Optional[dict] = Depends(get_optional_admin)
):
    try:
        admin_info = None
        if admin:
            admin_info = {"name": admin.get("name"), "username": admin.get("username")}

        return StatusResponse(
            server_connected=True,
            database_connected=check_database_connection(db),
            storage_connected=storage.check_connection(),
            admin_info=admin_info,
            timestamp=datetime.now(timezone.utc),
        )
    except Exception as e:
        logger.error(f"Status check failed: {e}", exc_info=True)
        return StatusResponse(
            server_connected=True,
            database_connected=False,
            storage_connected=False,
            admin_info=None,
            timestamp=datetime.now(timezone.utc),
        )
