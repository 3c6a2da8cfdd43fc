from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
import logging

from storefront.db.database import get_db
from storefront.schemas.catalog import SlugResolution
from storefront.schemas.product import ProductListResponse, ProductDetailResponse
from storefront.services.catalog_resolver import CatalogResolver
from storefront.services.product_service import ProductService, build_breadcrumb

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Products"]
)


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """Dependency to get product service"""
    return ProductService(db)


def get_catalog_resolver(db: Session = Depends(get_db)) -> CatalogResolver:
    return CatalogResolver(db)


@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List active products",
    description="""
    All active products, newest first. Each product carries its `category`
    and `sub_category` references for display.
    """,
    responses={
        200: {"description": "Active products"}
    }
)
async def list_products(
    product_service: ProductService = Depends(get_product_service)
):
    """List active products (public)"""
    return {"products": product_service.list_active_products()}


@router.get(
    "/products/{slug_path:path}",
    response_model=SlugResolution,
    summary="Resolve a catalog path",
    description="""
    Resolve a catalog URL such as `/api/products/lab/glassware/beakers`.

    Only the **last** segment is looked up, trying in order:
    1. active super-sub-category
    2. active sub-category
    3. active category

    The `type` field tells which level matched. `products` holds the node's
    active products, newest first.
    """,
    responses={
        200: {
            "description": "Resolved catalog node",
            "content": {
                "application/json": {
                    "example": {
                        "type": "category",
                        "data": {"id": "123e4567-e89b-12d3-a456-426614174000", "name": "Lab", "slug": "lab"},
                        "subCategories": [],
                        "products": [],
                        "breadcrumb": [{"name": "Lab", "slug": "lab"}]
                    }
                }
            }
        },
        400: {"description": "No slug provided"},
        404: {"description": "Nothing matches the last slug"}
    }
)
async def resolve_catalog_path(
    slug_path: str,
    resolver: CatalogResolver = Depends(get_catalog_resolver)
):
    return resolver.resolve(slug_path.split("/"))


@router.get(
    "/product/{slug}",
    response_model=ProductDetailResponse,
    summary="Product detail",
    description="""
    A single active product with its taxonomy references and a breadcrumb that
    follows the deepest level the product is attached to.
    """,
    responses={
        200: {"description": "Product with breadcrumb"},
        404: {"description": "Product not found"}
    }
)
async def get_product(
    slug: str,
    product_service: ProductService = Depends(get_product_service)
):
    product = product_service.get_active_product(slug)
    return {"product": product, "breadcrumb": build_breadcrumb(product)}
