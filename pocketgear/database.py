import asyncio
import logging
from typing import Any, Dict, List, Optional
from motor.motor_asyncio import AsyncIOMotorClient
from pocketgear.config import settings
from pocketgear.errors import StoreUnavailableError
from pocketgear.models.product import NAME_COLLATION, PRODUCT_INDEXES

logger = logging.getLogger(__name__)


class MongoClientProvider:
    """Owns the single Mongo client used by the process.

    The first call to get_client() connects and pings the server; concurrent
    callers wait on the same lock and all receive that one client. A failed
    connection is not cached, so the next caller tries again.
    """

    def __init__(self, uri: Optional[str], timeout_ms: int = 5000):
        self._uri = uri
        self._timeout_ms = timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._lock = asyncio.Lock()

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def get_client(self) -> AsyncIOMotorClient:
        if self._client is not None:
            return self._client

        async with self._lock:
            if self._client is None:
                if not self._uri:
                    raise StoreUnavailableError("MONGODB_URI is not configured")
                client = self._create_client()
                try:
                    await client.admin.command("ping")
                except Exception:
                    client.close()
                    raise
                logger.info("Connected to MongoDB")
                self._client = client
        return self._client

    def _create_client(self) -> AsyncIOMotorClient:
        return AsyncIOMotorClient(self._uri, serverSelectionTimeoutMS=self._timeout_ms, tz_aware=True)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None


class ProductStore:
    """Document access for the products collection."""

    def __init__(
        self,
        provider: MongoClientProvider,
        database: str = settings.mongodb_db,
        collection: str = settings.products_collection,
    ):
        self.provider = provider
        self.database = database
        self.collection_name = collection

    async def _collection(self):
        client = await self.provider.get_client()
        return client[self.database][self.collection_name]

    async def fetch_newest_first(self) -> List[Dict[str, Any]]:
        collection = await self._collection()
        cursor = collection.find({}).sort("createdAt", -1)
        return await cursor.to_list(length=None)

    async def find_by_name(self, name: str) -> Optional[Dict[str, Any]]:
        """Case-insensitive exact match on name."""
        collection = await self._collection()
        return await collection.find_one({"name": name}, collation=NAME_COLLATION)

    async def insert(self, document: Dict[str, Any]) -> Any:
        collection = await self._collection()
        result = await collection.insert_one(document)
        return result.inserted_id

    async def ensure_indexes(self) -> List[str]:
        collection = await self._collection()
        return await collection.create_indexes(PRODUCT_INDEXES)

    async def stats(self) -> Dict[str, Any]:
        client = await self.provider.get_client()
        db = client[self.database]
        collections = await db.list_collection_names()
        count = await db[self.collection_name].count_documents({})
        return {"collections": collections, "product_count": count}
