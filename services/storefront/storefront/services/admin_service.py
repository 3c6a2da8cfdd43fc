from sqlalchemy.orm import Session
from typing import Optional
import hmac
import logging

from storefront.auth.passwords import hash_password, verify_password
from storefront.config import settings
from storefront.models.admin_user import AdminUser
from storefront.services.errors import ConflictError

logger = logging.getLogger(__name__)

DEMO_ADMIN_ID = "demo-admin-id"


class AdminService:
    """Admin account lookups for the dashboard login"""

    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, username: str, password: str) -> Optional[dict]:
        """Return {id, username, name} for valid credentials, None otherwise"""
        demo_user = self._authenticate_demo(username, password)
        if demo_user:
            return demo_user

        user = self.db.query(AdminUser).filter(AdminUser.username == username).first()
        if not user:
            logger.warning(f"Login attempt for unknown admin '{username}'")
            return None

        if not verify_password(password, user.password_hash):
            logger.warning(f"Wrong password for admin '{username}'")
            return None

        logger.info(f"Admin '{username}' authenticated")
        return {"id": str(user.id), "username": user.username, "name": user.name}

    def _authenticate_demo(self, username: str, password: str) -> Optional[dict]:
        demo_username = settings.demo_admin_username
        demo_password = settings.demo_admin_password
        if not demo_username or not demo_password:
            return None

        if username == demo_username and hmac.compare_digest(password.encode("utf-8"), demo_password.encode("utf-8")):
            logger.info("Demo admin authenticated")
            return {"id": DEMO_ADMIN_ID, "username": demo_username, "name": settings.demo_admin_name}
        return None

    def create_admin(self, username: str, password: str, name: str) -> AdminUser:
        existing = self.db.query(AdminUser).filter(AdminUser.username == username).first()
        if existing:
            raise ConflictError(f"Admin user '{username}' already exists")

        user = AdminUser(username=username, password_hash=hash_password(password), name=name)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info(f"Created admin user {user.id} ({username})")
        return user
