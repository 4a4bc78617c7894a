from typing import Optional
from fastapi import Request
from pocketgear.config import settings
from pocketgear.database import MongoClientProvider, ProductStore
from pocketgear.schemas.auth import SessionIdentity
from pocketgear.services.auth_service import AuthService
from pocketgear.services.snapshot import SnapshotReader


def get_client_provider(request: Request) -> MongoClientProvider:
    return request.app.state.mongo


def get_store(request: Request) -> ProductStore:
    """Products collection bound to the application's Mongo client."""
    return ProductStore(get_client_provider(request), settings.mongodb_db, settings.products_collection)


def get_snapshot() -> SnapshotReader:
    return SnapshotReader(settings.snapshot_path)


def get_session_identity(request: Request) -> Optional[SessionIdentity]:
    """The logged-in user, or None when the request carries no session."""
    return AuthService.identity_from_session(request.session)
