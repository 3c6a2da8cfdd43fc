class ServiceError(Exception):
    """Base class for errors the API maps to a client-facing status"""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    status_code = 404


class ConflictError(ServiceError):
    status_code = 409


class InUseError(ServiceError):
    """A row still has dependents and cannot be deleted"""
    status_code = 400


class UploadRejectedError(ServiceError):
    status_code = 400


class StorageError(ServiceError):
    status_code = 500
