"""
Resolve a catalog URL path (``/products/a/b/c``) to a taxonomy node.

Only the last slug segment is looked up. Super-sub-categories win over
sub-categories, which win over categories, so a slug shared across levels
resolves to the deepest one.
"""
from sqlalchemy.orm import Session
from typing import List
import logging

from storefront.services.category_service import CategoryService
from storefront.services.product_service import ProductService, breadcrumb_item
from storefront.services.errors import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


class CatalogResolver:

    def __init__(self, db: Session):
        self.categories = CategoryService(db)
        self.products = ProductService(db)

    def resolve(self, slug_parts: List[str]) -> dict:
        parts = [part for part in slug_parts if part]
        if not parts:
            raise ServiceError("No slug provided")
        slug = parts[-1]

        super_sub = self.categories.find_active_super_sub_category(slug)
        if super_sub is not None:
            sub = super_sub.sub_category
            return {
                "type": "super_sub_category",
                "data": super_sub,
                "products": self.products.list_active_products_under(super_sub_category_id=super_sub.id),
                "breadcrumb": [breadcrumb_item(sub.category if sub else None), breadcrumb_item(sub), breadcrumb_item(super_sub)],
            }

        sub = self.categories.find_active_sub_category(slug)
        if sub is not None:
            return {
                "type": "sub_category",
                "data": sub,
                "super_sub_categories": self.categories.list_active_super_sub_categories(sub.id),
                "products": self.products.list_active_products_under(sub_category_id=sub.id),
                "breadcrumb": [breadcrumb_item(sub.category), breadcrumb_item(sub)],
            }

        category = self.categories.find_active_category(slug)
        if category is not None:
            return {
                "type": "category",
                "data": category,
                "sub_categories": self.categories.list_active_sub_categories(category.id),
                "products": self.products.list_active_products_under(category_id=category.id),
                "breadcrumb": [breadcrumb_item(category)],
            }

        logger.info(f"No catalog node matches slug '{slug}'")
        raise NotFoundError("Not found")
