from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from storefront.db.database import get_db
from storefront.schemas.category import (
    CategoryListResponse,
    SubCategoryListResponse,
    SuperSubCategoryListResponse,
)
from storefront.schemas.catalog import (
    CategoryPageResponse,
    SubCategoryPageResponse,
    SuperSubCategoryPageResponse,
)
from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Categories"]
)


def get_category_service(db: Session = Depends(get_db)) -> CategoryService:
    """Dependency to get category service"""
    return CategoryService(db)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get product service"""
    return ProductService(db)


@router.get(
    "/categories",
    response_model=CategoryListResponse,
    summary="List active categories",
    description="""
    Active top-level categories ordered by name.

    If the database cannot be reached the endpoint still answers 200 with an
    empty list and an `error` message so the storefront navigation renders.
    """,
    responses={
        200: {
            "description": "Active categories",
            "content": {
                "application/json": {
                    "example": {
                        "categories": [
                            {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "name": "Laboratory Equipment",
                                "slug": "laboratory-equipment",
                                "status": "active"
                            }
                        ]
                    }
                }
            }
        }
    }
)
async def list_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    """List active categories (public)"""
    try:
        categories = category_service.list_active_categories()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load categories: {e}", exc_info=True)
        return JSONResponse(content={"error": "Failed to fetch categories", "categories": []})
    return {"categories": categories}


@router.get(
    "/categories/{slug}",
    response_model=CategoryPageResponse,
    summary="Category landing page",
    description="""
    The category, its active sub-categories (by name) and up to 20 product
    cards attached directly to the category.
    """,
    responses={
        200: {"description": "Category page data"},
        404: {"description": "Category not found"}
    }
)
async def get_category_page(
    slug: str,
    category_service: CategoryService = Depends(get_category_service),
    product_service: ProductService = Depends(get_product_service)
):
    category = category_service.get_active_category(slug)
    return {
        "category": category,
        "sub_categories": category_service.list_active_sub_categories(category.id),
        "products": product_service.list_category_cards(category.id),
    }


@router.get(
    "/subcategories",
    response_model=SubCategoryListResponse,
    summary="List active sub-categories",
)
async def list_sub_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    return {"subcategories": category_service.list_active_sub_categories()}


@router.get(
    "/subcategories/{slug}",
    response_model=SubCategoryPageResponse,
    summary="Sub-category landing page",
    description="""
    The sub-category with its parent category, its active super-sub-categories
    and up to 20 product cards attached directly to the sub-category.
    """,
    responses={
        200: {"description": "Sub-category page data"},
        404: {"description": "Subcategory not found"}
    }
)
async def get_sub_category_page(
    slug: str,
    category_service: CategoryService = Depends(get_category_service),
    product_service: ProductService = Depends(get_product_service)
):
    sub_category = category_service.get_active_sub_category(slug)
    return {
        "sub_category": sub_category,
        "super_sub_categories": category_service.list_active_super_sub_categories(sub_category.id),
        "products": product_service.list_sub_category_cards(sub_category.id),
    }


@router.get(
    "/super-subcategories",
    response_model=SuperSubCategoryListResponse,
    summary="List active super-sub-categories",
)
async def list_super_sub_categories(
    category_service: CategoryService = Depends(get_category_service)
):
    return {"super_subcategories": category_service.list_active_super_sub_categories()}


@router.get(
    "/super-subcategories/{slug}",
    response_model=SuperSubCategoryPageResponse,
    summary="Super-sub-category landing page",
    responses={
        200: {"description": "Super-sub-category with its full parent chain and products"},
        404: {"description": "Super subcategory not found"}
    }
)
async def get_super_sub_category_page(
    slug: str,
    category_service: CategoryService = Depends(get_category_service),
    product_service: ProductService = Depends(get_product_service)
):
    super_sub_category = category_service.get_active_super_sub_category(slug)
    return {
        "super_sub_category": super_sub_category,
        "products": product_service.list_super_sub_category_products(super_sub_category.id),
    }
