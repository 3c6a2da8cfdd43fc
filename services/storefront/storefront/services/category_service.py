from sqlalchemy.orm import Session, selectinload
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Type
from uuid import UUID
import logging

from storefront.db.database import Base
from storefront.models.category import Category, SubCategory, SuperSubCategory
from storefront.models.product import Product
from storefront.schemas.category import (
    CategoryCreate, CategoryUpdate,
    SubCategoryCreate, SubCategoryUpdate,
    SuperSubCategoryCreate, SuperSubCategoryUpdate,
)
from storefront.services.errors import NotFoundError, ConflictError, InUseError

logger = logging.getLogger(__name__)

ACTIVE = "active"

# Columns that are NOT NULL; an explicit null in an update leaves them unchanged
NON_NULLABLE_FIELDS = ("name", "slug", "status", "category_id", "sub_category_id")


class CategoryService:
    """Service layer for the three taxonomy levels"""

    def __init__(self, db: Session):
        self.db = db

    # Public reads

    def list_active_categories(self) -> List[Category]:
        return self.db.query(Category).filter(
            Category.status == ACTIVE
        ).order_by(Category.name).all()

    def find_active_category(self, slug: str) -> Optional[Category]:
        return self.db.query(Category).filter(
            Category.slug == slug,
            Category.status == ACTIVE
        ).first()

    def get_active_category(self, slug: str) -> Category:
        category = self.find_active_category(slug)
        if not category:
            raise NotFoundError("Category not found")
        return category

    def list_active_sub_categories(self, category_id: Optional[UUID] = None) -> List[SubCategory]:
        query = self.db.query(SubCategory).filter(SubCategory.status == ACTIVE)
        if category_id is not None:
            query = query.filter(SubCategory.category_id == category_id)
        return query.order_by(SubCategory.name).all()

    def find_active_sub_category(self, slug: str) -> Optional[SubCategory]:
        return self.db.query(SubCategory).options(
            selectinload(SubCategory.category)
        ).filter(
            SubCategory.slug == slug,
            SubCategory.status == ACTIVE
        ).first()

    def get_active_sub_category(self, slug: str) -> SubCategory:
        sub_category = self.find_active_sub_category(slug)
        if not sub_category:
            raise NotFoundError("Subcategory not found")
        return sub_category

    def list_active_super_sub_categories(self, sub_category_id: Optional[UUID] = None) -> List[SuperSubCategory]:
        query = self.db.query(SuperSubCategory).filter(SuperSubCategory.status == ACTIVE)
        if sub_category_id is not None:
            query = query.filter(SuperSubCategory.sub_category_id == sub_category_id)
        return query.order_by(SuperSubCategory.name).all()

    def find_active_super_sub_category(self, slug: str) -> Optional[SuperSubCategory]:
        return self.db.query(SuperSubCategory).options(
            selectinload(SuperSubCategory.sub_category).selectinload(SubCategory.category)
        ).filter(
            SuperSubCategory.slug == slug,
            SuperSubCategory.status == ACTIVE
        ).first()

    def get_active_super_sub_category(self, slug: str) -> SuperSubCategory:
        super_sub_category = self.find_active_super_sub_category(slug)
        if not super_sub_category:
            raise NotFoundError("Super subcategory not found")
        return super_sub_category

    # Admin listing (all statuses, newest first)

    def list_categories(self) -> List[Category]:
        return self.db.query(Category).order_by(Category.created_at.desc()).all()

    def list_sub_categories(self) -> List[SubCategory]:
        return self.db.query(SubCategory).options(
            selectinload(SubCategory.category)
        ).order_by(SubCategory.created_at.desc()).all()

    def list_super_sub_categories(self) -> List[SuperSubCategory]:
        return self.db.query(SuperSubCategory).options(
            selectinload(SuperSubCategory.sub_category).selectinload(SubCategory.category)
        ).order_by(SuperSubCategory.created_at.desc()).all()

    # Admin writes

    def create_category(self, data: CategoryCreate) -> Category:
        return self._create(Category, data)

    def update_category(self, data: CategoryUpdate) -> Category:
        return self._update(Category, data, "Category not found")

    def delete_category(self, category_id: UUID) -> None:
        if self._has_rows(SubCategory, SubCategory.category_id == category_id):
            raise InUseError("Cannot delete category. Please delete all sub-categories first.")
        if self._has_rows(Product, Product.category_id == category_id):
            raise InUseError("Cannot delete category. Please delete or reassign all products first.")
        self._delete(Category, category_id)

    def create_sub_category(self, data: SubCategoryCreate) -> SubCategory:
        self._require(Category, data.category_id, "Category not found")
        return self._create(SubCategory, data)

    def update_sub_category(self, data: SubCategoryUpdate) -> SubCategory:
        if data.category_id is not None:
            self._require(Category, data.category_id, "Category not found")
        return self._update(SubCategory, data, "Sub Category not found")

    def delete_sub_category(self, sub_category_id: UUID) -> None:
        if self._has_rows(SuperSubCategory, SuperSubCategory.sub_category_id == sub_category_id):
            raise InUseError("Cannot delete sub-category. Please delete all super-sub-categories first.")
        if self._has_rows(Product, Product.sub_category_id == sub_category_id):
            raise InUseError("Cannot delete sub-category. Please delete or reassign all products first.")
        self._delete(SubCategory, sub_category_id)

    def create_super_sub_category(self, data: SuperSubCategoryCreate) -> SuperSubCategory:
        self._require(SubCategory, data.sub_category_id, "Sub Category not found")
        return self._create(SuperSubCategory, data)

    def update_super_sub_category(self, data: SuperSubCategoryUpdate) -> SuperSubCategory:
        if data.sub_category_id is not None:
            self._require(SubCategory, data.sub_category_id, "Sub Category not found")
        return self._update(SuperSubCategory, data, "Super Sub Category not found")

    def delete_super_sub_category(self, super_sub_category_id: UUID) -> None:
        if self._has_rows(Product, Product.super_sub_category_id == super_sub_category_id):
            raise InUseError("Cannot delete super-sub-category. Please delete or reassign all products first.")
        self._delete(SuperSubCategory, super_sub_category_id)

    # Helpers

    def _has_rows(self, model: Type[Base], criterion) -> bool:
        return self.db.query(model.id).filter(criterion).first() is not None

    def _require(self, model: Type[Base], row_id: UUID, message: str) -> None:
        if self.db.get(model, row_id) is None:
            raise NotFoundError(message)

    def _ensure_unique_slug(self, model: Type[Base], slug: str, exclude_id: Optional[UUID] = None) -> None:
        query = self.db.query(model).filter(model.slug == slug)
        if exclude_id is not None:
            query = query.filter(model.id != exclude_id)
        if query.first() is not None:
            raise ConflictError(f"Slug '{slug}' is already in use")

    def _create(self, model: Type[Base], data) -> Base:
        self._ensure_unique_slug(model, data.slug)

        values = data.model_dump()
        values["status"] = values.get("status") or ACTIVE
        row = model(**values)

        self.db.add(row)
        self._commit()
        self.db.refresh(row)
        logger.info(f"Created {model.__tablename__} row {row.id} ({row.slug})")
        return row

    def _update(self, model: Type[Base], data, not_found_message: str) -> Base:
        row = self.db.get(model, data.id)
        if row is None:
            raise NotFoundError(not_found_message)

        # Only keys present in the request body change
        update_data = data.model_dump(exclude_unset=True, exclude={"id"})
        if update_data.get("slug"):
            self._ensure_unique_slug(model, update_data["slug"], exclude_id=row.id)
        for field, value in update_data.items():
            if field in NON_NULLABLE_FIELDS and value is None:
                continue
            setattr(row, field, value)

        self._commit()
        self.db.refresh(row)
        logger.info(f"Updated {model.__tablename__} row {row.id}")
        return row

    def _delete(self, model: Type[Base], row_id: UUID) -> None:
        deleted = self.db.query(model).filter(model.id == row_id).delete(synchronize_session=False)
        self._commit()
        logger.info(f"Deleted {deleted} {model.__tablename__} row(s) for id {row_id}")

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Integrity error: {e.orig}")
            raise ConflictError("Record conflicts with existing data")
