from sqlalchemy import Column, Text, String, Boolean, DateTime, ForeignKey, CheckConstraint, Index, Uuid, false
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid
from storefront.db.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    description = Column(Text)
    key_features = Column(Text)
    # A product hangs off whichever taxonomy level is deepest for it
    category_id = Column(Uuid(as_uuid=True), ForeignKey("categories.id"))
    sub_category_id = Column(Uuid(as_uuid=True), ForeignKey("sub_categories.id"))
    super_sub_category_id = Column(Uuid(as_uuid=True), ForeignKey("super_sub_categories.id"))
    image_url = Column(Text)
    image_url_2 = Column(Text)
    image_url_3 = Column(Text)
    catalogue_pdf_url = Column(Text)
    featured = Column(Boolean, nullable=False, default=False, server_default=false())
    status = Column(String(20), nullable=False, default="active", server_default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('active', 'inactive')", name="product_status_valid"),
        Index("idx_products_category", "category_id"),
        Index("idx_products_sub_category", "sub_category_id"),
        Index("idx_products_super_sub_category", "super_sub_category_id"),
        Index("idx_products_status", "status"),
    )

    category = relationship("Category")
    sub_category = relationship("SubCategory")
    super_sub_category = relationship("SuperSubCategory")
