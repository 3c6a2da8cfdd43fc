from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime

from storefront.schemas.common import SLUG_PATTERN, CATALOG_STATUS_PATTERN


class CategoryRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    slug: str


class SubCategoryRef(CategoryRef):
    category: Optional[CategoryRef] = None


class SuperSubCategoryRef(CategoryRef):
    sub_category: Optional[SubCategoryRef] = None


# Requests

class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[str] = Field(None, pattern=CATALOG_STATUS_PATTERN)


class CategoryUpdate(BaseModel):
    id: UUID = Field(..., description="Category UUID")
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: Optional[str] = Field(None, pattern=CATALOG_STATUS_PATTERN)


class SubCategoryCreate(CategoryCreate):
    category_id: UUID = Field(..., description="Parent category UUID")


class SubCategoryUpdate(CategoryUpdate):
    category_id: Optional[UUID] = None


class SuperSubCategoryCreate(CategoryCreate):
    sub_category_id: UUID = Field(..., description="Parent sub-category UUID")


class SuperSubCategoryUpdate(CategoryUpdate):
    sub_category_id: Optional[UUID] = None


# Responses

class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID = Field(..., description="Category UUID")
    name: str = Field(..., description="Category name")
    slug: str = Field(..., description="Category URL slug")
    description: Optional[str] = None
    image_url: Optional[str] = None
    status: str = Field(..., description="active or inactive")
    created_at: datetime
    updated_at: Optional[datetime] = None


class SubCategoryResponse(CategoryResponse):
    category_id: UUID = Field(..., description="Parent category UUID")


class SubCategoryWithCategory(SubCategoryResponse):
    category: Optional[CategoryRef] = None


class SubCategoryDetail(SubCategoryResponse):
    category: Optional[CategoryResponse] = None


class SuperSubCategoryResponse(CategoryResponse):
    sub_category_id: UUID = Field(..., description="Parent sub-category UUID")


class SuperSubCategoryWithParents(SuperSubCategoryResponse):
    sub_category: Optional[SubCategoryRef] = None


class SuperSubCategoryDetail(SuperSubCategoryResponse):
    sub_category: Optional[SubCategoryDetail] = None


# Envelopes

class CategoryListResponse(BaseModel):
    categories: List[CategoryResponse]


class CategoryEnvelope(BaseModel):
    category: CategoryResponse


class SubCategoryListResponse(BaseModel):
    """Public listing; the storefront client reads the lowercase key"""
    subcategories: List[SubCategoryResponse]


class AdminSubCategoryListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sub_categories: List[SubCategoryWithCategory] = Field(..., alias="subCategories")


class SubCategoryEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sub_category: SubCategoryWithCategory = Field(..., alias="subCategory")


class SuperSubCategoryListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    super_subcategories: List[SuperSubCategoryResponse] = Field(..., alias="superSubcategories")


class AdminSuperSubCategoryListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    super_sub_categories: List[SuperSubCategoryWithParents] = Field(..., alias="superSubCategories")


class SuperSubCategoryEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    super_sub_category: SuperSubCategoryWithParents = Field(..., alias="superSubCategory")
