# Initialize the active storage provider (Cloudinary)
_storage_provider = None

def get_storage_provider():
    """Get the configured storage provider instance"""
    global _storage_provider
    if _storage_provider is None:
        from storefront.services.storage_providers.cloudinary_provider import CloudinaryStorageProvider
        _storage_provider = CloudinaryStorageProvider()
    return _storage_provider
