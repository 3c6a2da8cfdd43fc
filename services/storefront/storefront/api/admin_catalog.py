from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import Optional
from uuid import UUID
import logging

from storefront.auth.dependencies import require_admin
from storefront.db.database import get_db
from storefront.schemas.common import SuccessResponse
from storefront.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryListResponse, CategoryEnvelope,
    SubCategoryCreate, SubCategoryUpdate, AdminSubCategoryListResponse, SubCategoryEnvelope,
    SuperSubCategoryCreate, SuperSubCategoryUpdate, AdminSuperSubCategoryListResponse, SuperSubCategoryEnvelope,
)
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductEnvelope, ProductListResponse
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService

logger = logging.getLogger(__name__)

# Every route here requires the admin session cookie
router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Catalog"],
    dependencies=[Depends(require_admin)],
    responses={401: {"description": "Admin session cookie missing or invalid"}}
)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


def _require_id(row_id: Optional[UUID], label: str) -> UUID:
    if row_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} ID is required"
        )
    return row_id


# Categories

@router.get(
    "/categories",
    response_model=CategoryListResponse,
    summary="List all categories",
    description="All categories regardless of status, newest first.",
)
async def admin_list_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    return {"categories": category_service.list_categories()}


@router.post(
    "/categories",
    response_model=CategoryEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
    responses={
        201: {"description": "Category created"},
        400: {"description": "Name and slug are required"},
        409: {"description": "Slug already in use"}
    }
)
async def admin_create_category(
    category_data: CategoryCreate,
    category_service: CategoryService = Depends(get_category_service)
):
    return {"category": category_service.create_category(category_data)}


@router.put(
    "/categories",
    response_model=CategoryEnvelope,
    summary="Update a category",
    description="Partial update: only keys present in the body change.",
    responses={404: {"description": "Category not found"}, 409: {"description": "Slug already in use"}}
)
async def admin_update_category(
    category_data: CategoryUpdate,
    category_service: CategoryService = Depends(get_category_service)
):
    return {"category": category_service.update_category(category_data)}


@router.delete(
    "/categories",
    response_model=SuccessResponse,
    summary="Delete a category",
    description="Refused with 400 while the category still has sub-categories or products.",
)
async def admin_delete_category(
    id: Optional[UUID] = Query(None, description="Category UUID"),
    category_service: CategoryService = Depends(get_category_service)
):
    category_service.delete_category(_require_id(id, "Category"))
    return SuccessResponse()


# Sub-categories

@router.get(
    "/sub-categories",
    response_model=AdminSubCategoryListResponse,
    summary="List all sub-categories",
    description="All sub-categories with their parent category reference, newest first.",
)
async def admin_list_sub_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    return {"sub_categories": category_service.list_sub_categories()}


@router.post(
    "/sub-categories",
    response_model=SubCategoryEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a sub-category",
    responses={
        201: {"description": "Sub-category created"},
        400: {"description": "Name, slug, and category_id are required"},
        404: {"description": "Parent category not found"},
        409: {"description": "Slug already in use"}
    }
)
async def admin_create_sub_category(
    sub_category_data: SubCategoryCreate,
    category_service: CategoryService = Depends(get_category_service)
):
    return {"sub_category": category_service.create_sub_category(sub_category_data)}


@router.put(
    "/sub-categories",
    response_model=SubCategoryEnvelope,
    summary="Update a sub-category",
)
async def admin_update_sub_category(
    sub_category_data: SubCategoryUpdate,
    category_service: CategoryService = Depends(get_category_service)
):
    return {"sub_category": category_service.update_sub_category(sub_category_data)}


@router.delete(
    "/sub-categories",
    response_model=SuccessResponse,
    summary="Delete a sub-category",
    description="Refused with 400 while super-sub-categories or products still reference it.",
)
async def admin_delete_sub_category(
    id: Optional[UUID] = Query(None, description="Sub-category UUID"),
    category_service: CategoryService = Depends(get_category_service)
):
    category_service.delete_sub_category(_require_id(id, "Sub Category"))
    return SuccessResponse()


# Super-sub-categories

@router.get(
    "/super-sub-categories",
    response_model=AdminSuperSubCategoryListResponse,
    summary="List all super-sub-categories",
)
async def admin_list_super_sub_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    return {"super_sub_categories": category_service.list_super_sub_categories()}


@router.post(
    "/super-sub-categories",
    response_model=SuperSubCategoryEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a super-sub-category",
)
async def admin_create_super_sub_category(
    super_sub_category_data: SuperSubCategoryCreate,
    category_service: CategoryService = Depends(get_category_service)
):
    return {"super_sub_category": category_service.create_super_sub_category(super_sub_category_data)}


@router.put(
    "/super-sub-categories",
    response_model=SuperSubCategoryEnvelope,
    summary="Update a super-sub-category",
)
async def admin_update_super_sub_category(
    super_sub_category_data: SuperSubCategoryUpdate,
    category_service: CategoryService = Depends(get_category_service)
):
    return {"super_sub_category": category_service.update_super_sub_category(super_sub_category_data)}


@router.delete(
    "/super-sub-categories",
    response_model=SuccessResponse,
    summary="Delete a super-sub-category",
)
async def admin_delete_super_sub_category(
    id: Optional[UUID] = Query(None, description="Super-sub-category UUID"),
    category_service: CategoryService = Depends(get_category_service)
):
    category_service.delete_super_sub_category(_require_id(id, "Super Sub Category"))
    return SuccessResponse()


# Products

@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List all products",
    description="All products regardless of status with their taxonomy references, newest first.",
)
async def admin_list_products(
    product_service: ProductService = Depends(get_product_service)
):
    return {"products": product_service.list_products()}


@router.post(
    "/products",
    response_model=ProductEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
    description="""
    Create a product. `featured` defaults to false and `status` to active.
    Empty-string parent ids are stored as null.

    Upload images and the catalogue PDF through `/api/upload` first and pass
    the returned URLs here.
    """,
    responses={
        201: {"description": "Product created"},
        400: {"description": "Name and slug are required"},
        409: {"description": "Slug already in use"}
    }
)
async def admin_create_product(
    product_data: ProductCreate,
    product_service: ProductService = Depends(get_product_service)
):
    return {"product": product_service.create_product(product_data)}


@router.put(
    "/products",
    response_model=ProductEnvelope,
    summary="Update a product",
)
async def admin_update_product(
    product_data: ProductUpdate,
    product_service: ProductService = Depends(get_product_service)
):
    return {"product": product_service.update_product(product_data)}


@router.delete(
    "/products",
    response_model=SuccessResponse,
    summary="Delete a product",
)
async def admin_delete_product(
    id: Optional[UUID] = Query(None, description="Product UUID"),
    product_service: ProductService = Depends(get_product_service)
):
    product_service.delete_product(_require_id(id, "Product"))
    return SuccessResponse()
