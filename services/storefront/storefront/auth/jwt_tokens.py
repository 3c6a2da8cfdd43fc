"""
HS256 session tokens for the admin dashboard cookie
"""
import jwt
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict
from storefront.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


class AdminTokenManager:
    def __init__(self, secret: Optional[str] = None, expire_hours: Optional[int] = None):
        self.secret = secret or settings.jwt_secret
        self.expire_hours = expire_hours or settings.jwt_expire_hours

        if self.secret == "fallback_secret_key_for_development" and settings.is_production:
            logger.warning("JWT_SECRET is not set; admin sessions are signed with the development fallback key")

    def sign_token(self, user_id: str, username: str, name: str) -> str:
        """
        Issue a signed token carrying {userId, username, name}.
        The token expires after `expire_hours` (24h by default).
        """
        now = datetime.now(timezone.utc)
        payload = {
            "userId": str(user_id),
            "username": username,
            "name": name,
            "iat": now,
            "exp": now + timedelta(hours=self.expire_hours),
        }
        return jwt.encode(payload, self.secret, algorithm=ALGORITHM)

    def verify_token(self, token: str) -> Optional[Dict]:
        """
        Verify signature and expiry.
        Returns the decoded payload, or None if the token is not acceptable.
        """
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[ALGORITHM],
                options={"verify_signature": True, "verify_exp": True},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Admin token has expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.warning(f"Admin token verification failed: {e}")
            return None


token_manager = AdminTokenManager()
