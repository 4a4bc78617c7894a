import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
from pymongo.errors import DuplicateKeyError
from pocketgear.config import settings
from pocketgear.errors import ConflictError, InternalError, NotFoundError, UnauthorizedError
from pocketgear.models.product import new_product_document, product_slug, serialize_product
from pocketgear.results import Err, Ok, Result, attempt
from pocketgear.schemas.auth import SessionIdentity
from pocketgear.schemas.product import validate_submission

logger = logging.getLogger(__name__)

SOURCE_STORE = "store"
SOURCE_SNAPSHOT = "snapshot"


@dataclass(frozen=True)
class CatalogListing:
    products: List[Dict[str, Any]]
    source: str


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductService:
    """Catalog read and write paths."""

    @staticmethod
    async def read_store(store) -> Result[CatalogListing]:
        """Primary branch: every product in the store, newest first."""
        async def fetch_and_serialize():
            documents = await store.fetch_newest_first()
            return CatalogListing([serialize_product(doc) for doc in documents], SOURCE_STORE)

        return await attempt(fetch_and_serialize())

    @staticmethod
    async def read_snapshot(snapshot) -> Result[CatalogListing]:
        """Degraded branch: the bundled snapshot, returned as-is."""
        result = await attempt(snapshot.read())
        if isinstance(result, Err):
            return result
        return Ok(CatalogListing(result.value, SOURCE_SNAPSHOT))

    @staticmethod
    async def list_products(store, snapshot) -> CatalogListing:
        """List all products, falling back to the snapshot once if the store fails."""
        primary = await ProductService.read_store(store)
        if isinstance(primary, Ok):
            return primary.value

        logger.warning("Error fetching products from store, falling back to snapshot: %s", primary.error)
        fallback = await ProductService.read_snapshot(snapshot)
        if isinstance(fallback, Ok):
            logger.info("Serving %d products from snapshot", len(fallback.value.products))
            return fallback.value

        logger.error("Fallback to snapshot also failed: %s", fallback.error)
        raise InternalError("Internal server error - Failed to fetch products")

    @staticmethod
    async def get_product_by_slug(store, snapshot, slug: str) -> Dict[str, Any]:
        listing = await ProductService.list_products(store, snapshot)
        wanted = slug.lower()
        for product in listing.products:
            name = product.get("name")
            if isinstance(name, str) and product_slug(name) == wanted:
                return product
        raise NotFoundError()

    @staticmethod
    async def create_product(
        store,
        identity: Optional[SessionIdentity],
        payload: Any,
        now: Optional[datetime] = None,
    ) -> Tuple[str, Dict[str, Any]]:
        """Validate and insert a new product.

        Returns the new identifier and the stored record. Raises
        UnauthorizedError, ValidationError, ConflictError or InternalError.
        """
        if identity is None:
            raise UnauthorizedError()

        validated = validate_submission(payload)
        if isinstance(validated, Err):
            raise validated.error
        submission = validated.value

        try:
            existing = await store.find_by_name(submission.name)
        except Exception as e:
            logger.exception("Error checking for existing product %r", submission.name)
            raise InternalError("Internal server error - Failed to add product") from e
        if existing:
            raise ConflictError()

        created_by = identity.email or settings.created_by_fallback
        document = new_product_document(submission, created_by, now or _utcnow())

        try:
            inserted_id = await store.insert(document)
        except DuplicateKeyError as e:
            # Lost the race against a concurrent insert with the same name
            logger.warning("Unique index rejected product %r: %s", submission.name, e)
            raise ConflictError() from e
        except Exception as e:
            logger.exception("Error adding product %r", submission.name)
            raise InternalError("Internal server error - Failed to add product") from e

        document["_id"] = inserted_id
        record = serialize_product(document)
        logger.info("Product %s (%r) created by %s", record["id"], submission.name, created_by)
        return record["id"], record
