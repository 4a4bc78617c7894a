import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pocketgear.api.deps import get_store
from pocketgear.database import ProductStore
from pocketgear.schemas.product import StoreHealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/database", response_model=StoreHealthResponse)
async def database_health(store: ProductStore = Depends(get_store)):
    """Check the connection to the product store."""
    try:
        stats = await store.stats()
    except Exception as e:
        logger.exception("MongoDB health check failed")
        return JSONResponse(
            status_code=500,
            content={
                "status": "error",
                "message": "MongoDB connection failed",
                "error": str(e),
            },
        )

    return StoreHealthResponse(
        status="success",
        message="MongoDB connection successful",
        database=store.database,
        collections=stats["collections"],
        productCount=stats["product_count"],
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
