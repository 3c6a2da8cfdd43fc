from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Type
from uuid import UUID
import logging

from storefront.db.database import Base
from storefront.models.enquiry import ContactEnquiry, NewsletterSubscription, CatalogueRequest
from storefront.schemas.enquiry import ContactCreate, NewsletterCreate, CatalogueRequestCreate
from storefront.services.errors import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


class LeadService:
    """Service layer for the public lead-capture forms and their admin inbox"""

    def __init__(self, db: Session):
        self.db = db

    def create_contact(self, data: ContactCreate) -> ContactEnquiry:
        enquiry = ContactEnquiry(
            first_name=data.first_name,
            last_name=data.last_name,
            business=data.business,
            email=data.email,
            phone=data.phone,
            message=data.message,
            status="pending",
        )
        self.db.add(enquiry)
        self.db.commit()
        self.db.refresh(enquiry)

        logger.info(f"Stored contact enquiry {enquiry.id}")
        return enquiry

    def subscribe(self, data: NewsletterCreate) -> NewsletterSubscription:
        email = data.email.strip().lower()

        existing = self.db.query(NewsletterSubscription).filter(
            NewsletterSubscription.email == email
        ).first()
        if existing:
            raise ServiceError("Already subscribed")

        subscription = NewsletterSubscription(email=email, status="active")
        self.db.add(subscription)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same address
            self.db.rollback()
            raise ServiceError("Already subscribed")
        self.db.refresh(subscription)

        logger.info(f"New newsletter subscription {subscription.id}")
        return subscription

    def create_catalogue_request(self, data: CatalogueRequestCreate) -> CatalogueRequest:
        request = CatalogueRequest(**data.model_dump(), status="pending")
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)

        logger.info(f"Stored catalogue request {request.id} for '{request.product_name}'")
        return request

    def list_contacts(self) -> List[ContactEnquiry]:
        return self._list(ContactEnquiry)

    def list_subscriptions(self) -> List[NewsletterSubscription]:
        return self._list(NewsletterSubscription)

    def list_catalogue_requests(self) -> List[CatalogueRequest]:
        return self._list(CatalogueRequest)

    def set_contact_status(self, enquiry_id: UUID, status: str) -> ContactEnquiry:
        return self._set_status(ContactEnquiry, enquiry_id, status, "Enquiry not found")

    def set_subscription_status(self, subscription_id: UUID, status: str) -> NewsletterSubscription:
        return self._set_status(NewsletterSubscription, subscription_id, status, "Subscription not found")

    def set_catalogue_request_status(self, request_id: UUID, status: str) -> CatalogueRequest:
        return self._set_status(CatalogueRequest, request_id, status, "Catalogue request not found")

    def delete_contact(self, enquiry_id: UUID) -> None:
        self._delete(ContactEnquiry, enquiry_id)

    def delete_subscription(self, subscription_id: UUID) -> None:
        self._delete(NewsletterSubscription, subscription_id)

    def delete_catalogue_request(self, request_id: UUID) -> None:
        self._delete(CatalogueRequest, request_id)

    def _list(self, model: Type[Base]) -> list:
        return self.db.query(model).order_by(model.created_at.desc()).all()

    def _set_status(self, model: Type[Base], row_id: UUID, status: str, not_found_message: str):
        row = self.db.get(model, row_id)
        if row is None:
            raise NotFoundError(not_found_message)
        row.status = status
        self.db.commit()
        self.db.refresh(row)
        logger.info(f"{model.__tablename__} {row_id} marked {status}")
        return row

    def _delete(self, model: Type[Base], row_id: UUID) -> None:
        deleted = self.db.query(model).filter(model.id == row_id).delete(synchronize_session=False)
        self.db.commit()
        logger.info(f"Deleted {deleted} {model.__tablename__} row(s) for id {row_id}")
