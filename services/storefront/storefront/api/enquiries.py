from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID
import logging

from storefront.auth.dependencies import require_admin
from storefront.db.database import get_db
from storefront.schemas.common import SuccessResponse
from storefront.schemas.enquiry import (
    ContactCreate, ContactStatusUpdate, ContactResponse, ContactResult,
    NewsletterCreate, NewsletterStatusUpdate, NewsletterResponse, NewsletterResult,
    CatalogueRequestCreate, CatalogueRequestStatusUpdate, CatalogueRequestResult,
    CatalogueRequestUpdateResult, CatalogueRequestListResponse,
)
from storefront.services.lead_service import LeadService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Leads"]
)

ADMIN_ONLY = [Depends(require_admin)]
ADMIN_RESPONSES = {401: {"description": "Admin session cookie missing or invalid"}}


def get_lead_service(db: Session = Depends(get_db)) -> LeadService:
    """Dependency to get lead service"""
    return LeadService(db)


def _require_id(row_id: Optional[UUID]) -> UUID:
    if row_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="ID required")
    return row_id


# Contact enquiries

@router.post(
    "/contact",
    response_model=ContactResult,
    status_code=status.HTTP_201_CREATED,
    summary="Submit the contact form",
    description="""
    Store a contact enquiry. The body uses camelCase keys:
    `firstName`, `lastName`, `email` and `message` are required;
    `business` and `phone` are optional. New enquiries start as `pending`.
    """,
    responses={
        201: {"description": "Enquiry stored"},
        400: {"description": "Required fields missing"}
    }
)
async def submit_contact(
    enquiry: ContactCreate,
    lead_service: LeadService = Depends(get_lead_service)
):
    return {"success": True, "data": lead_service.create_contact(enquiry)}


@router.get(
    "/contact",
    response_model=List[ContactResponse],
    summary="List contact enquiries",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def list_contacts(lead_service: LeadService = Depends(get_lead_service)):
    return lead_service.list_contacts()


@router.delete(
    "/contact",
    response_model=SuccessResponse,
    summary="Delete a contact enquiry (query id)",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def delete_contact_by_query(
    id: Optional[UUID] = Query(None, description="Enquiry UUID"),
    lead_service: LeadService = Depends(get_lead_service)
):
    lead_service.delete_contact(_require_id(id))
    return SuccessResponse()


@router.delete(
    "/contact/{enquiry_id}",
    response_model=SuccessResponse,
    summary="Delete a contact enquiry",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def delete_contact(
    enquiry_id: UUID,
    lead_service: LeadService = Depends(get_lead_service)
):
    lead_service.delete_contact(enquiry_id)
    return SuccessResponse()


@router.patch(
    "/contact/{enquiry_id}",
    response_model=ContactResult,
    summary="Change a contact enquiry's status",
    dependencies=ADMIN_ONLY,
    responses={**ADMIN_RESPONSES, 404: {"description": "Enquiry not found"}}
)
async def update_contact_status(
    enquiry_id: UUID,
    update: ContactStatusUpdate,
    lead_service: LeadService = Depends(get_lead_service)
):
    return {"success": True, "data": lead_service.set_contact_status(enquiry_id, update.status)}


# Newsletter

@router.post(
    "/newsletter",
    response_model=NewsletterResult,
    status_code=status.HTTP_201_CREATED,
    summary="Subscribe to the newsletter",
    description="Addresses are stored lowercased; subscribing twice returns 400 `Already subscribed`.",
    responses={
        201: {"description": "Subscribed"},
        400: {"description": "Email is required, or already subscribed"}
    }
)
async def subscribe(
    subscription: NewsletterCreate,
    lead_service: LeadService = Depends(get_lead_service)
):
    return {"success": True, "data": lead_service.subscribe(subscription)}


@router.get(
    "/newsletter",
    response_model=List[NewsletterResponse],
    summary="List newsletter subscriptions",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def list_subscriptions(lead_service: LeadService = Depends(get_lead_service)):
    return lead_service.list_subscriptions()


@router.delete(
    "/newsletter",
    response_model=SuccessResponse,
    summary="Delete a subscription (query id)",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def delete_subscription_by_query(
    id: Optional[UUID] = Query(None, description="Subscription UUID"),
    lead_service: LeadService = Depends(get_lead_service)
):
    lead_service.delete_subscription(_require_id(id))
    return SuccessResponse()


@router.delete(
    "/newsletter/{subscription_id}",
    response_model=SuccessResponse,
    summary="Delete a subscription",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def delete_subscription(
    subscription_id: UUID,
    lead_service: LeadService = Depends(get_lead_service)
):
    lead_service.delete_subscription(subscription_id)
    return SuccessResponse()


@router.patch(
    "/newsletter/{subscription_id}",
    response_model=NewsletterResult,
    summary="Change a subscription's status",
    dependencies=ADMIN_ONLY,
    responses={**ADMIN_RESPONSES, 404: {"description": "Subscription not found"}}
)
async def update_subscription_status(
    subscription_id: UUID,
    update: NewsletterStatusUpdate,
    lead_service: LeadService = Depends(get_lead_service)
):
    return {"success": True, "data": lead_service.set_subscription_status(subscription_id, update.status)}


# Catalogue requests

@router.post(
    "/catalogue-request",
    response_model=CatalogueRequestResult,
    status_code=status.HTTP_201_CREATED,
    summary="Request a product catalogue",
    description="""
    Record a catalogue download request. The response echoes the stored request
    and the `pdf_url` the visitor can download right away, if any.
    """,
    responses={
        201: {"description": "Request stored"},
        400: {"description": "All fields are required"}
    }
)
async def request_catalogue(
    catalogue_request: CatalogueRequestCreate,
    lead_service: LeadService = Depends(get_lead_service)
):
    stored = lead_service.create_catalogue_request(catalogue_request)
    return {"success": True, "request": stored, "pdf_url": stored.catalogue_pdf_url}


@router.get(
    "/catalogue-request",
    response_model=CatalogueRequestListResponse,
    summary="List catalogue requests",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def list_catalogue_requests(lead_service: LeadService = Depends(get_lead_service)):
    return {"requests": lead_service.list_catalogue_requests()}


@router.delete(
    "/catalogue-request",
    response_model=SuccessResponse,
    summary="Delete a catalogue request",
    dependencies=ADMIN_ONLY,
    responses=ADMIN_RESPONSES
)
async def delete_catalogue_request(
    id: Optional[UUID] = Query(None, description="Catalogue request UUID"),
    lead_service: LeadService = Depends(get_lead_service)
):
    if id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Request ID is required")
    lead_service.delete_catalogue_request(id)
    return SuccessResponse()


@router.patch(
    "/catalogue-request/{request_id}",
    response_model=CatalogueRequestUpdateResult,
    summary="Change a catalogue request's status",
    dependencies=ADMIN_ONLY,
    responses={**ADMIN_RESPONSES, 404: {"description": "Catalogue request not found"}}
)
async def update_catalogue_request_status(
    request_id: UUID,
    update: CatalogueRequestStatusUpdate,
    lead_service: LeadService = Depends(get_lead_service)
):
    return {"success": True, "data": lead_service.set_catalogue_request_status(request_id, update.status)}
