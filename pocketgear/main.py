import logging
import os
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from pocketgear.api.routes import auth, health, products
from pocketgear.config import settings
from pocketgear.database import MongoClientProvider, ProductStore
from pocketgear.errors import CatalogError

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="PocketGear API",
    description="Product catalog for the PocketGear storefront",
    version="1.0.0",
    debug=settings.debug,
)

app.state.mongo = MongoClientProvider(settings.mongodb_uri, settings.mongodb_timeout_ms)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
    same_site="lax",
)

# Include routers
app.include_router(products.router)
app.include_router(auth.router)
app.include_router(health.router)

# Mount static files
static_dir = os.path.join(os.path.dirname(__file__), "static")
if os.path.exists(static_dir):
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected (%d): %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    field = ".".join(str(part) for part in errors[0]["loc"][1:]) if errors else ""
    message = f"Invalid request: {field} {errors[0]['msg']}".strip() if errors else "Invalid request"
    logger.info("%s %s rejected (400): %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.get("/")
async def root():
    """Service banner."""
    return {"message": "PocketGear API", "docs": "/docs"}


@app.on_event("startup")
async def startup():
    """Create the case-insensitive name index if the store is reachable."""
    store = ProductStore(app.state.mongo, settings.mongodb_db, settings.products_collection)
    try:
        created = await store.ensure_indexes()
        logger.info("Product indexes ready: %s", created)
    except Exception as e:
        logger.warning("Could not ensure product indexes at startup: %s", e)


@app.on_event("shutdown")
async def shutdown():
    """Release the Mongo client."""
    app.state.mongo.close()
