from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from storefront.schemas.common import SLUG_PATTERN, CATALOG_STATUS_PATTERN, BreadcrumbItem, blank_to_none
from storefront.schemas.category import CategoryRef, SubCategoryRef, SuperSubCategoryRef


class ProductFields(BaseModel):
    description: Optional[str] = Field(None, description="Long product description")
    key_features: Optional[str] = Field(None, description="Key features, one per line")
    category_id: Optional[UUID] = Field(None, description="Category UUID")
    sub_category_id: Optional[UUID] = Field(None, description="Sub-category UUID")
    super_sub_category_id: Optional[UUID] = Field(None, description="Super-sub-category UUID")
    image_url: Optional[str] = Field(None, description="Primary image URL")
    image_url_2: Optional[str] = None
    image_url_3: Optional[str] = None
    catalogue_pdf_url: Optional[str] = Field(None, description="Downloadable catalogue PDF URL")

    @field_validator("category_id", "sub_category_id", "super_sub_category_id", mode="before")
    @classmethod
    def empty_parent_is_null(cls, value):
        return blank_to_none(value)


class ProductCreate(ProductFields):
    name: str = Field(..., min_length=1, max_length=500, description="Product name")
    slug: str = Field(..., min_length=1, max_length=500, pattern=SLUG_PATTERN, description="Product URL slug")
    featured: Optional[bool] = Field(None, description="Show on the home page (defaults to false)")
    status: Optional[str] = Field(None, pattern=CATALOG_STATUS_PATTERN, description="active (default) or inactive")


class ProductUpdate(ProductFields):
    id: UUID = Field(..., description="Product UUID")
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    slug: Optional[str] = Field(None, min_length=1, max_length=500, pattern=SLUG_PATTERN)
    featured: Optional[bool] = None
    status: Optional[str] = Field(None, pattern=CATALOG_STATUS_PATTERN)


class ProductCard(BaseModel):
    """Compact product shape used in category landing pages"""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str
    image_url: Optional[str] = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Product UUID")
    name: str = Field(..., description="Product name")
    slug: str = Field(..., description="Product URL slug")
    description: Optional[str] = None
    key_features: Optional[str] = None
    category_id: Optional[UUID] = None
    sub_category_id: Optional[UUID] = None
    super_sub_category_id: Optional[UUID] = None
    image_url: Optional[str] = None
    image_url_2: Optional[str] = None
    image_url_3: Optional[str] = None
    catalogue_pdf_url: Optional[str] = None
    featured: bool = False
    status: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class ProductWithCategories(ProductResponse):
    category: Optional[CategoryRef] = None
    sub_category: Optional[SubCategoryRef] = None
    super_sub_category: Optional[SuperSubCategoryRef] = None


class ProductListResponse(BaseModel):
    products: List[ProductWithCategories]


class ProductEnvelope(BaseModel):
    product: ProductResponse


class ProductDetailResponse(BaseModel):
    product: ProductWithCategories
    breadcrumb: List[BreadcrumbItem]
