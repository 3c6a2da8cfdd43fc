# Package exports - these allow cleaner imports like:
# from storefront.services.storage_providers import StorageProvider, CloudinaryStorageProvider
from storefront.services.storage_providers.base import StorageProvider
from storefront.services.storage_providers.cloudinary_provider import CloudinaryStorageProvider
