from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
from uuid import UUID
import logging

from storefront.models.category import Category, SubCategory, SuperSubCategory
from storefront.models.product import Product
from storefront.schemas.product import ProductCreate, ProductUpdate
from storefront.services.errors import NotFoundError, ConflictError

logger = logging.getLogger(__name__)

ACTIVE = "active"
# Landing pages show a bounded set of product cards
LANDING_PAGE_PRODUCT_LIMIT = 20


def build_breadcrumb(product: Product) -> List[dict]:
    """Breadcrumb for a product, following its deepest assigned taxonomy level"""
    if product.super_sub_category is not None:
        super_sub = product.super_sub_category
        sub = super_sub.sub_category
        category = sub.category if sub is not None else None
        return [breadcrumb_item(category), breadcrumb_item(sub), breadcrumb_item(super_sub)]
    if product.sub_category is not None:
        sub = product.sub_category
        return [breadcrumb_item(sub.category), breadcrumb_item(sub)]
    if product.category is not None:
        return [breadcrumb_item(product.category)]
    return []


def breadcrumb_item(node) -> dict:
    if node is None:
        return {"name": None, "slug": None}
    return {"name": node.name, "slug": node.slug}


class ProductService:
    """Service layer for product operations"""

    def __init__(self, db: Session):
        self.db = db

    def _with_refs(self):
        return self.db.query(Product).options(
            selectinload(Product.category),
            selectinload(Product.sub_category).selectinload(SubCategory.category),
            selectinload(Product.super_sub_category).selectinload(SuperSubCategory.sub_category),
        )

    # Public reads

    def list_active_products(self) -> List[Product]:
        return self._with_refs().filter(
            Product.status == ACTIVE
        ).order_by(Product.created_at.desc()).all()

    def get_active_product(self, slug: str) -> Product:
        product = self._with_refs().filter(
            Product.slug == slug,
            Product.status == ACTIVE
        ).first()
        if not product:
            raise NotFoundError("Product not found")
        return product

    def list_category_cards(self, category_id: UUID) -> List[Product]:
        """Products attached directly to a category (no sub-category)"""
        return self.db.query(Product).filter(
            Product.category_id == category_id,
            Product.sub_category_id.is_(None),
            Product.status == ACTIVE
        ).order_by(Product.name).limit(LANDING_PAGE_PRODUCT_LIMIT).all()

    def list_sub_category_cards(self, sub_category_id: UUID) -> List[Product]:
        """Products attached directly to a sub-category (no super-sub-category)"""
        return self.db.query(Product).filter(
            Product.sub_category_id == sub_category_id,
            Product.super_sub_category_id.is_(None),
            Product.status == ACTIVE
        ).order_by(Product.name).limit(LANDING_PAGE_PRODUCT_LIMIT).all()

    def list_super_sub_category_products(self, super_sub_category_id: UUID) -> List[Product]:
        return self.db.query(Product).filter(
            Product.super_sub_category_id == super_sub_category_id,
            Product.status == ACTIVE
        ).order_by(Product.name).all()

    def list_active_products_under(
        self,
        category_id: Optional[UUID] = None,
        sub_category_id: Optional[UUID] = None,
        super_sub_category_id: Optional[UUID] = None,
    ) -> List[Product]:
        """Active products referencing the given node, newest first"""
        query = self.db.query(Product).filter(Product.status == ACTIVE)
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if sub_category_id is not None:
            query = query.filter(Product.sub_category_id == sub_category_id)
        if super_sub_category_id is not None:
            query = query.filter(Product.super_sub_category_id == super_sub_category_id)
        return query.order_by(Product.created_at.desc()).all()

    # Admin

    def list_products(self) -> List[Product]:
        return self._with_refs().order_by(Product.created_at.desc()).all()

    def create_product(self, product_data: ProductCreate) -> Product:
        self._ensure_unique_slug(product_data.slug)
        self._check_parents(product_data)

        values = product_data.model_dump()
        values["featured"] = bool(values.get("featured"))
        values["status"] = values.get("status") or ACTIVE
        product = Product(**values)

        self.db.add(product)
        self._commit()
        self.db.refresh(product)

        logger.info(f"Created product {product.id} ({product.slug})")
        return product

    def update_product(self, product_data: ProductUpdate) -> Product:
        product = self.db.get(Product, product_data.id)
        if not product:
            raise NotFoundError("Product not found")

        update_data = product_data.model_dump(exclude_unset=True, exclude={"id"})
        if update_data.get("slug"):
            self._ensure_unique_slug(update_data["slug"], exclude_id=product.id)
        self._check_parents(product_data)

        for field, value in update_data.items():
            if field in ("name", "slug", "status", "featured") and value is None:
                continue
            setattr(product, field, value)

        self._commit()
        self.db.refresh(product)

        logger.info(f"Updated product {product.id}")
        return product

    def delete_product(self, product_id: UUID) -> None:
        deleted = self.db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)
        self._commit()
        logger.info(f"Deleted {deleted} product row(s) for id {product_id}")

    def _ensure_unique_slug(self, slug: str, exclude_id: Optional[UUID] = None) -> None:
        query = self.db.query(Product.id).filter(Product.slug == slug)
        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Slug '{slug}' is already in use")

    def _check_parents(self, product_data) -> None:
        parents = (
            (Category, product_data.category_id, "Category not found"),
            (SubCategory, product_data.sub_category_id, "Sub Category not found"),
            (SuperSubCategory, product_data.super_sub_category_id, "Super Sub Category not found"),
        )
        for model, parent_id, message in parents:
            if parent_id is not None and self.db.get(model, parent_id) is None:
                raise NotFoundError(message)

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error: {e.orig}")
            raise ConflictError("Record conflicts with existing data")
