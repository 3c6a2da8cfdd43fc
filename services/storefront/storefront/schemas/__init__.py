# Package exports - these allow cleaner imports like:
# from storefront.schemas import ProductCreate, ProductResponse
from storefront.schemas.common import BreadcrumbItem, SuccessResponse
from storefront.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryResponse,
    SubCategoryCreate, SubCategoryUpdate, SubCategoryResponse,
    SuperSubCategoryCreate, SuperSubCategoryUpdate, SuperSubCategoryResponse,
)
from storefront.schemas.product import ProductCreate, ProductUpdate, ProductResponse, ProductListResponse
from storefront.schemas.enquiry import ContactCreate, NewsletterCreate, CatalogueRequestCreate
from storefront.schemas.admin import LoginRequest, LoginResponse, StatusResponse
from storefront.schemas.storage import UploadResponse, StorageListResponse
