import os

import pytest

from storefront.core.config import ApiConfig, Settings, StorageConfig
from storefront.core.exceptions import ConfigurationException, StorageException
from storefront.core.storage import (
    FileStorage,
    KeyValueStorage,
    MemoryStorage,
    NamespacedStorage,
    build_storage,
)
from storefront.stores.cart import CartStore


def _settings(backend: str, directory: str = ".storefront") -> Settings:
    return Settings(
        storage=StorageConfig(backend=backend, directory=directory, redis_url=None, ttl_seconds=60),
        api=ApiConfig(host="127.0.0.1", port=8080, max_sessions=16),
        log_level="INFO",
    )


def test_memory_storage_roundtrip() -> None:
    storage = MemoryStorage()
    storage.set_item("k", "v")
    assert storage.get_item("k") == "v"

    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_adapters_satisfy_protocol(tmp_path) -> None:
    assert isinstance(MemoryStorage(), KeyValueStorage)
    assert isinstance(FileStorage(tmp_path), KeyValueStorage)
    assert isinstance(NamespacedStorage(MemoryStorage(), "s1"), KeyValueStorage)


def test_file_storage_survives_new_instance(tmp_path, make_item) -> None:
    cart = CartStore(FileStorage(tmp_path))
    cart.add_item(make_item("A", quantity=3, price=5))

    reloaded = CartStore(FileStorage(tmp_path))

    assert reloaded.get_total_price() == 15
    assert [p.name for p in tmp_path.iterdir()] == ["cart-storage.json"]


def test_file_storage_quotes_unsafe_keys(tmp_path) -> None:
    storage = FileStorage(tmp_path)
    storage.set_item("session:a/b:cart-storage", "{}")

    assert storage.get_item("session:a/b:cart-storage") == "{}"
    assert all(os.sep not in p.name for p in tmp_path.iterdir())


def test_file_storage_remove_missing_key_is_noop(tmp_path) -> None:
    storage = FileStorage(tmp_path)
    storage.remove_item("nothing")
    assert storage.get_item("nothing") is None


def test_file_storage_write_error_wrapped(tmp_path) -> None:
    storage = FileStorage(tmp_path / "data")
    (tmp_path / "data").rmdir()

    with pytest.raises(StorageException):
        storage.set_item("k", "v")


def test_namespaced_storage_isolates_sessions() -> None:
    backend = MemoryStorage()
    first = NamespacedStorage(backend, "one")
    second = NamespacedStorage(backend, "two")

    first.set_item("cart-storage", "1")
    second.set_item("cart-storage", "2")

    assert first.get_item("cart-storage") == "1"
    assert second.get_item("cart-storage") == "2"
    assert sorted(backend.keys()) == ["session:one:cart-storage", "session:two:cart-storage"]


def test_namespace_required() -> None:
    with pytest.raises(ValueError):
        NamespacedStorage(MemoryStorage(), "")


def test_build_storage_selects_adapter(tmp_path) -> None:
    assert isinstance(build_storage(_settings("memory")), MemoryStorage)
    file_storage = build_storage(_settings("file", str(tmp_path / "store")))
    assert isinstance(file_storage, FileStorage)
    assert file_storage.directory == tmp_path / "store"


def test_build_storage_unknown_backend() -> None:
    with pytest.raises(ConfigurationException):
        build_storage(_settings("sqlite"))


def test_file_storage_unencodable_value_wrapped_and_cleaned_up(tmp_path) -> None:
    storage = FileStorage(tmp_path)

    with pytest.raises(StorageException):
        storage.set_item("k", "bad \ud800")

    assert list(tmp_path.iterdir()) == []


def test_file_storage_cart_with_surrogate_text_keeps_working(tmp_path, make_item) -> None:
    cart = CartStore(FileStorage(tmp_path))
    cart.add_item(make_item("A", name="\ud800"))
    cart.add_item(make_item("B"))

    reloaded = CartStore(FileStorage(tmp_path))

    assert [item.product_id for item in reloaded.items] == ["A", "B"]
    assert not any(p.suffix == ".tmp" for p in tmp_path.iterdir())
