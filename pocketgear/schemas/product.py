import math
from typing import Any, Dict, List, Optional
from pydantic import AnyUrl, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pocketgear.errors import ValidationError
from pocketgear.models.product import PRODUCT_FIELDS
from pocketgear.results import Err, Ok, Result

FIELD_LABELS = {
    "name": "Product name",
    "description": "Description",
    "price": "Price",
    "details": "Details",
    "image": "Image URL",
}


class ProductCreate(BaseModel):
    """A product submission after whitespace trimming and type coercion."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=3, description="Product name (unique, case-insensitive)")
    description: str = Field(..., min_length=10, description="Product description")
    price: float = Field(..., gt=0, description="Unit price")
    details: str = Field(..., min_length=10, description="Comma-separated feature phrases")
    image: str = Field(..., description="Absolute image URL")

    @field_validator("image")
    @classmethod
    def image_must_be_absolute_url(cls, value: str) -> str:
        try:
            url = AnyUrl(value)
        except PydanticValidationError:
            raise ValueError("Please enter a valid image URL")
        if not url.host:
            raise ValueError("Please enter a valid image URL")
        return value


class ProductResponse(BaseModel):
    id: Optional[str] = None
    name: str
    description: str
    price: float
    details: str
    image: str
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    createdBy: Optional[str] = None


class ProductCreatedResponse(BaseModel):
    message: str
    product: ProductResponse


class ErrorResponse(BaseModel):
    error: str


class StoreHealthResponse(BaseModel):
    status: str
    message: str
    database: str
    collections: List[str]
    productCount: int
    timestamp: str


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_price(value: Any) -> Optional[float]:
    """Return the price as a float, or None when it is not a positive number."""
    if isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price) or price <= 0:
        return None
    return price


def _first_error_message(exc: PydanticValidationError) -> ValidationError:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error.get("loc") else None
    label = FIELD_LABELS.get(field, field or "Field")

    if error["type"] == "string_too_short":
        min_length = error.get("ctx", {}).get("min_length")
        return ValidationError(f"{label} must be at least {min_length} characters", field=field)
    if field == "image":
        return ValidationError("Please enter a valid image URL", field=field)
    if field == "price":
        return ValidationError("Price must be a positive number", field=field)
    if error["type"] == "string_type":
        return ValidationError(f"{label} must be a string", field=field)
    return ValidationError(f"{label} is invalid", field=field)


def validate_submission(payload: Any) -> Result[ProductCreate]:
    """Validate a raw product submission.

    Checks run in a fixed order and the first failure wins: required fields,
    then price, then per-field constraints.
    """
    if not isinstance(payload, dict):
        return Err(ValidationError("All fields are required"))

    if any(_is_missing(payload.get(field)) for field in PRODUCT_FIELDS):
        return Err(ValidationError("All fields are required"))

    price = parse_price(payload["price"])
    if price is None:
        return Err(ValidationError("Price must be a positive number", field="price"))

    candidate: Dict[str, Any] = {field: payload[field] for field in PRODUCT_FIELDS}
    candidate["price"] = price
    try:
        return Ok(ProductCreate.model_validate(candidate))
    except PydanticValidationError as e:
        return Err(_first_error_message(e))
