"""Response shapes for the public catalog pages and the slug resolver"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Annotated, List, Literal, Union

from storefront.schemas.common import BreadcrumbItem
from storefront.schemas.category import (
    CategoryResponse,
    SubCategoryResponse,
    SubCategoryDetail,
    SuperSubCategoryResponse,
    SuperSubCategoryDetail,
)
from storefront.schemas.product import ProductCard, ProductResponse


class CategoryPageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    category: CategoryResponse
    sub_categories: List[SubCategoryResponse] = Field(..., alias="subCategories")
    products: List[ProductCard]


class SubCategoryPageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sub_category: SubCategoryDetail = Field(..., alias="subCategory")
    super_sub_categories: List[SuperSubCategoryResponse] = Field(..., alias="superSubCategories")
    products: List[ProductCard]


class SuperSubCategoryPageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    super_sub_category: SuperSubCategoryDetail = Field(..., alias="superSubCategory")
    products: List[ProductResponse]


class SuperSubCategoryResolution(BaseModel):
    type: Literal["super_sub_category"] = "super_sub_category"
    data: SuperSubCategoryDetail
    products: List[ProductResponse]
    breadcrumb: List[BreadcrumbItem]


class SubCategoryResolution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["sub_category"] = "sub_category"
    data: SubCategoryDetail
    super_sub_categories: List[SuperSubCategoryResponse] = Field(..., alias="superSubCategories")
    products: List[ProductResponse]
    breadcrumb: List[BreadcrumbItem]


class CategoryResolution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: Literal["category"] = "category"
    data: CategoryResponse
    sub_categories: List[SubCategoryResponse] = Field(..., alias="subCategories")
    products: List[ProductResponse]
    breadcrumb: List[BreadcrumbItem]


SlugResolution = Annotated[
    Union[SuperSubCategoryResolution, SubCategoryResolution, CategoryResolution],
    Field(discriminator="type"),
]
