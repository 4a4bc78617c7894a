import re
from datetime import date, datetime
from typing import Any, Dict
from bson import Decimal128, ObjectId
from pymongo import ASCENDING, IndexModel
from pymongo.collation import Collation, CollationStrength

# Case-insensitive comparison for product names
NAME_COLLATION = Collation(locale="en", strength=CollationStrength.SECONDARY)

PRODUCT_INDEXES = [
    IndexModel(
        [("name", ASCENDING)],
        name="name_ci_unique",
        unique=True,
        collation=NAME_COLLATION,
    ),
    IndexModel([("createdAt", -1)], name="created_at_desc"),
]

PRODUCT_FIELDS = ("name", "description", "price", "details", "image")


def new_product_document(submission, created_by: str, now: datetime) -> Dict[str, Any]:
    """Build the document stored for a validated submission."""
    return {
        "name": submission.name,
        "description": submission.description,
        "price": float(submission.price),
        "details": submission.details,
        "image": submission.image,
        "createdAt": now,
        "updatedAt": now,
        "createdBy": created_by,
    }


def _to_json_value(value: Any) -> Any:
    """Recursively convert BSON values into JSON-native types."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, Decimal128):
        return float(value.to_decimal())
    if isinstance(value, dict):
        return {str(k): _to_json_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_to_json_value(v) for v in value]
    return str(value)


def serialize_product(document: Dict[str, Any]) -> Dict[str, Any]:
    """Convert a stored document into the JSON-native record returned by the API."""
    record = {k: _to_json_value(v) for k, v in document.items() if k != "_id"}
    if "_id" in document:
        record = {"id": str(document["_id"]), **record}
    return record


def product_slug(name: str) -> str:
    """URL slug used by product detail pages."""
    return re.sub(r"\s+", "-", name.strip().lower())
