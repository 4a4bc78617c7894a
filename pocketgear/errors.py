from typing import Optional


class CatalogError(Exception):
    """Base class for errors that translate into a client-facing response."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnauthorizedError(CatalogError):
    status_code = 401
    message = "Unauthorized - Please log in to add products"


class ValidationError(CatalogError):
    status_code = 400
    message = "Invalid product data"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ConflictError(CatalogError):
    status_code = 409
    message = "A product with this name already exists"


class NotFoundError(CatalogError):
    status_code = 404
    message = "Product not found"


class StoreUnavailableError(CatalogError):
    """The document store is not configured or could not be reached."""

    status_code = 500
    message = "Product store is unavailable"


class InternalError(CatalogError):
    status_code = 500
