"""Tests for the lazily-connected Mongo client provider."""

import asyncio

import pytest
from pymongo.errors import ServerSelectionTimeoutError

from pocketgear.database import MongoClientProvider, ProductStore
from pocketgear.errors import StoreUnavailableError


class FakeAdmin:
    def __init__(self, fail=False):
        self.fail = fail

    async def command(self, name):
        await asyncio.sleep(0)
        if self.fail:
            raise ServerSelectionTimeoutError("no servers")
        return {"ok": 1}


class FakeClient:
    def __init__(self, fail=False):
        self.admin = FakeAdmin(fail)
        self.closed = False

    def close(self):
        self.closed = True


class CountingProvider(MongoClientProvider):
    def __init__(self, uri="mongodb://localhost:27017", fail=False):
        super().__init__(uri)
        self.fail = fail
        self.created = []

    def _create_client(self):
        client = FakeClient(self.fail)
        self.created.append(client)
        return client


async def test_first_call_connects_and_later_calls_reuse():
    provider = CountingProvider()

    first = await provider.get_client()
    second = await provider.get_client()

    assert first is second
    assert len(provider.created) == 1
    assert provider.connected


async def test_concurrent_first_callers_share_one_client():
    provider = CountingProvider()

    clients = await asyncio.gather(*(provider.get_client() for _ in range(10)))

    assert len(provider.created) == 1
    assert all(c is clients[0] for c in clients)


async def test_missing_uri_raises_store_unavailable():
    provider = MongoClientProvider(None)

    with pytest.raises(StoreUnavailableError):
        await provider.get_client()
    assert not provider.connected


async def test_unreachable_store_propagates_and_is_not_cached():
    provider = CountingProvider(fail=True)

    with pytest.raises(ServerSelectionTimeoutError):
        await provider.get_client()

    assert not provider.connected
    assert provider.created[0].closed

    provider.fail = False
    client = await provider.get_client()
    assert client is provider.created[-1]
    assert len(provider.created) == 2


async def test_close_releases_client():
    provider = CountingProvider()
    client = await provider.get_client()

    provider.close()

    assert client.closed
    assert not provider.connected


async def test_store_operations_fail_without_uri():
    store = ProductStore(MongoClientProvider(None))

    with pytest.raises(StoreUnavailableError):
        await store.fetch_newest_first()
    with pytest.raises(StoreUnavailableError):
        await store.insert({"name": "x"})


async def test_client_returns_timezone_aware_datetimes():
    provider = MongoClientProvider("mongodb://localhost:27017")
    client = provider._create_client()
    try:
        assert client.codec_options.tz_aware is True
    finally:
        client.close()
