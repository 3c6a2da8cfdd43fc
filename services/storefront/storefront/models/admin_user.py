from sqlalchemy import Column, Text, DateTime, Uuid
from sqlalchemy.sql import func
import uuid
from storefront.db.database import Base


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)  # bcrypt
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
