from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime


# Contact form

class ContactCreate(BaseModel):
    """Body posted by the public contact form (camelCase keys)"""
    model_config = ConfigDict(populate_by_name=True)

    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
    business: Optional[str] = None
    email: str = Field(..., min_length=3, max_length=320)
    phone: Optional[str] = None
    message: str = Field(..., min_length=1)


class ContactStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(pending|resolved|archived)$")


class ContactResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str
    last_name: str
    business: Optional[str] = None
    email: str
    phone: Optional[str] = None
    message: str
    status: str
    created_at: datetime


class ContactResult(BaseModel):
    success: bool = True
    data: ContactResponse


# Newsletter

class NewsletterCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=3, max_length=320)


class NewsletterStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(active|unsubscribed)$")


class NewsletterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    status: str
    created_at: datetime


class NewsletterResult(BaseModel):
    success: bool = True
    data: NewsletterResponse


# Catalogue requests

class CatalogueRequestCreate(BaseModel):
    product_id: Optional[UUID] = None
    product_name: str = Field(..., min_length=1)
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    customer_email: str = Field(..., min_length=3, max_length=320)
    catalogue_pdf_url: Optional[str] = None


class CatalogueRequestStatusUpdate(BaseModel):
    status: str = Field(..., pattern="^(pending|sent|archived)$")


class CatalogueRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    product_id: Optional[UUID] = None
    product_name: str
    customer_name: str
    customer_phone: str
    customer_email: str
    catalogue_pdf_url: Optional[str] = None
    status: str
    created_at: datetime


class CatalogueRequestResult(BaseModel):
    success: bool = True
    request: CatalogueRequestResponse
    pdf_url: Optional[str] = None


class CatalogueRequestUpdateResult(BaseModel):
    success: bool = True
    data: CatalogueRequestResponse


class CatalogueRequestListResponse(BaseModel):
    requests: List[CatalogueRequestResponse]
