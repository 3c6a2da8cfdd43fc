from sqlalchemy import Column, Text, String, DateTime, ForeignKey, CheckConstraint, Index, Uuid
from sqlalchemy.sql import func
import uuid
from storefront.db.database import Base


class ContactEnquiry(Base):
    __tablename__ = "contact_enquiries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    business = Column(Text)
    email = Column(Text, nullable=False)
    phone = Column(Text)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default="pending", server_default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'resolved', 'archived')", name="contact_status_valid"),
        Index("idx_contact_enquiries_created", "created_at"),
    )


class NewsletterSubscription(Base):
    __tablename__ = "newsletter_subscriptions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(Text, nullable=False, unique=True)
    status = Column(String(20), nullable=False, default="active", server_default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('active', 'unsubscribed')", name="newsletter_status_valid"),
    )


class CatalogueRequest(Base):
    __tablename__ = "catalogue_requests"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id", ondelete="SET NULL"))
    product_name = Column(Text, nullable=False)
    customer_name = Column(Text, nullable=False)
    customer_phone = Column(Text, nullable=False)
    customer_email = Column(Text, nullable=False)
    catalogue_pdf_url = Column(Text)
    status = Column(String(20), nullable=False, default="pending", server_default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        CheckConstraint("status IN ('pending', 'sent', 'archived')", name="catalogue_request_status_valid"),
        Index("idx_catalogue_requests_created", "created_at"),
    )
