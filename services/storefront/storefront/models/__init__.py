# Package exports - these allow cleaner imports like:
# from storefront.models import Product, Category
# Used by alembic/env.py for migration autogenerate
from storefront.models.category import Category, SubCategory, SuperSubCategory
from storefront.models.product import Product
from storefront.models.enquiry import ContactEnquiry, NewsletterSubscription, CatalogueRequest
from storefront.models.admin_user import AdminUser
