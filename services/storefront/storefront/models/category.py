from sqlalchemy import Column, Text, String, DateTime, ForeignKey, CheckConstraint, Index, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid
from storefront.db.database import Base


class Category(Base):
    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    description = Column(Text)
    image_url = Column(Text)
    status = Column(String(20), nullable=False, default="active", server_default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="category_status_valid"),
        Index("idx_categories_status", "status"),
    )

    sub_categories = relationship("SubCategory", back_populates="category")


class SubCategory(Base):
    __tablename__ = "sub_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"), nullable=False)
    description = Column(Text)
    image_url = Column(Text)
    status = Column(String(20), nullable=False, default="active", server_default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="sub_category_status_valid"),
        Index("idx_sub_categories_category", "category_id"),
    )

    category = relationship("Category", back_populates="sub_categories")
    super_sub_categories = relationship("SuperSubCategory", back_populates="sub_category")


class SuperSubCategory(Base):
    __tablename__ = "super_sub_categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    sub_category_id = Column(Uuid(as_uuid=True), ForeignKey("sub_categories.id"), nullable=False)
    description = Column(Text)
    image_url = Column(Text)
    status = Column(String(20), nullable=False, default="active", server_default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="super_sub_category_status_valid"),
        Index("idx_super_sub_categories_sub_category", "sub_category_id"),
    )

    sub_category = relationship("SubCategory", back_populates="super_sub_categories")
