"""Shared fixtures: an in-memory product store and an app wired to it."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from pocketgear.api.deps import get_session_identity, get_snapshot, get_store
from pocketgear.main import app
from pocketgear.schemas.auth import SessionIdentity
from pocketgear.services.snapshot import SnapshotReader

SNAPSHOT_PRODUCTS = [
    {
        "name": "Snapshot Speaker",
        "description": "A speaker that only exists in the snapshot file.",
        "price": 49.5,
        "details": "Bluetooth, 10h battery, splash proof",
        "image": "https://example.com/speaker.jpg",
    },
    {
        "name": "Snapshot Cable",
        "description": "Braided cable served when the store is down.",
        "price": 9.99,
        "details": "USB-C to USB-C, 2m, braided",
        "image": "https://example.com/cable.jpg",
    },
]


class FakeProductStore:
    """In-memory stand-in for ProductStore."""

    database = "pocketgear"

    def __init__(self, documents: Optional[List[Dict[str, Any]]] = None, fail: bool = False):
        self.documents = list(documents or [])
        self.fail = fail
        self.calls: List[str] = []

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if self.fail:
            raise ServerSelectionTimeoutError("store unreachable")

    async def fetch_newest_first(self):
        self._check("fetch")
        return sorted(self.documents, key=lambda d: d["createdAt"], reverse=True)

    async def find_by_name(self, name: str):
        self._check("find")
        for doc in self.documents:
            if doc["name"].casefold() == name.casefold():
                return doc
        return None

    async def insert(self, document: Dict[str, Any]):
        self._check("insert")
        inserted_id = ObjectId()
        self.documents.append({**document, "_id": inserted_id})
        return inserted_id

    async def stats(self):
        self._check("stats")
        return {"collections": ["products"], "product_count": len(self.documents)}


def make_document(name: str, created_at: datetime, **overrides) -> Dict[str, Any]:
    doc = {
        "_id": ObjectId(),
        "name": name,
        "description": f"{name} description text",
        "price": 10.0,
        "details": "detail one, detail two",
        "image": "https://example.com/item.jpg",
        "createdAt": created_at,
        "updatedAt": created_at,
        "createdBy": "seed@example.com",
    }
    doc.update(overrides)
    return doc


@pytest.fixture
def store():
    return FakeProductStore()


@pytest.fixture
def snapshot_path(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(SNAPSHOT_PRODUCTS), encoding="utf-8")
    return path


@pytest.fixture
def identity():
    return SessionIdentity(email="user@example.com", name="User")


@pytest.fixture
def valid_payload():
    return {
        "name": "USB-C Hub",
        "description": "A compact multiport hub",
        "price": 29.99,
        "details": "4 ports, USB-C, aluminum",
        "image": "https://example.com/hub.jpg",
    }


@pytest.fixture
def make_client(store, snapshot_path, identity):
    """Build a TestClient with the store, snapshot and session identity overridden."""

    def _make(store=store, snapshot_path=snapshot_path, identity=identity):
        app.dependency_overrides[get_store] = lambda: store
        app.dependency_overrides[get_snapshot] = lambda: SnapshotReader(snapshot_path)
        app.dependency_overrides[get_session_identity] = lambda: identity
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def anonymous_client(make_client):
    return make_client(identity=None)


@pytest.fixture
def earlier():
    return datetime(2024, 1, 1, tzinfo=timezone.utc)
