"""Shared pytest fixtures."""
from __future__ import annotations

import pytest

from storefront.core.exceptions import StorageException
from storefront.core.storage import MemoryStorage
from storefront.domain.cart_item import CartItem


class FailingStorage(MemoryStorage):
    """Reads work, writes fail the way a full or read-only disk would."""

    def set_item(self, key: str, value: str) -> None:
        raise StorageException(key, "quota exceeded")

    def remove_item(self, key: str) -> None:
        raise StorageException(key, "quota exceeded")


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def failing_storage() -> FailingStorage:
    return FailingStorage()


@pytest.fixture()
def make_item():
    def _make_item(product_id: str = "A", quantity: int = 1, price: float = 10, **extra) -> CartItem:
        fields = {"name": f"Product {product_id}", "image_url": "", "material": "wood"}
        fields.update(extra)
        return CartItem(product_id=product_id, quantity=quantity, price=price, **fields)

    return _make_item


@pytest.fixture()
async def aiohttp_client():
    """Minimal aiohttp_client fixture to avoid pytest-aiohttp dependency."""
    clients: list[object] = []

    async def _make_client(app):
        from aiohttp.test_utils import TestClient, TestServer

        server = TestServer(app)
        client = TestClient(server)
        await client.start_server()
        clients.append(client)
        return client

    try:
        yield _make_client
    finally:
        for client in clients:
            await client.close()
