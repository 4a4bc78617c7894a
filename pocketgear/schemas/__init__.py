from pocketgear.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductCreatedResponse,
    ErrorResponse,
    StoreHealthResponse,
)
from pocketgear.schemas.auth import LoginRequest, SessionIdentity, SessionResponse

__all__ = [
    "ProductCreate",
    "ProductResponse",
    "ProductCreatedResponse",
    "ErrorResponse",
    "StoreHealthResponse",
    "LoginRequest",
    "SessionIdentity",
    "SessionResponse",
]
