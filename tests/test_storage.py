"""Tests for cart persistence and storage backends"""
import json
from unittest.mock import Mock

import pytest

from storefront.cart import (
    CART_STORAGE_KEY,
    CartLine,
    CartPersistence,
    JsonFileStorage,
    MemoryStorage,
    RedisStorage,
)
from storefront.cart.storage import create_storage, decode_lines, encode_lines
from storefront.db import TTL
from storefront.errors import PersistenceCorruption


@pytest.fixture
def lines(make_product):
    return [
        CartLine(id=1700000000001, product=make_product(5, "7.00"), quantity=2),
        CartLine(id=1700000000002, product=make_product(2, "120.50", nameAr="تظليل"), quantity=1),
    ]


class TestCartPersistence:
    """save/load against the fixed slot"""

    def test_round_trip(self, persistence, lines):
        persistence.save(lines)

        assert persistence.load() == lines

    def test_absent_key_loads_empty(self, persistence):
        assert persistence.load() == []

    def test_save_writes_json_array_under_fixed_key(self, storage, persistence, lines):
        persistence.save(lines)

        raw = json.loads(storage.get(CART_STORAGE_KEY))
        assert isinstance(raw, list)
        assert raw[0]["product"]["id"] == 5
        assert raw[0]["quantity"] == 2

    def test_arabic_names_stored_readable(self, storage, persistence, lines):
        persistence.save(lines)

        assert "تظليل" in storage.get(CART_STORAGE_KEY)

    @pytest.mark.parametrize("raw", [
        "{broken",
        '{"items": []}',
        '[{"id": 1, "quantity": 1}]',
        '[{"id": 1, "product": {"id": 1}, "quantity": 1}]',
        '[{"id": 1, "product": {"id": 1, "nameEn": "a", "nameAr": "b", "price": "1.00"}, "quantity": 1.5}]',
        "1" * 5000,  # past the int string conversion limit
        "[" * 100000,  # nesting deeper than the decoder recursion limit
    ])
    def test_corrupt_value_loads_empty_and_is_discarded(self, storage, persistence, raw):
        storage.set(CART_STORAGE_KEY, raw)

        assert persistence.load() == []
        assert storage.get(CART_STORAGE_KEY) is None

    def test_read_failure_loads_empty(self):
        storage = Mock()
        storage.get.side_effect = ConnectionError("unreachable")

        assert CartPersistence(storage).load() == []

    def test_write_failure_is_swallowed(self, lines):
        storage = Mock()
        storage.set.side_effect = OSError("quota exceeded")

        assert CartPersistence(storage).save(lines) is False

    def test_custom_key(self, storage, lines):
        CartPersistence(storage, key="cart:abc").save(lines)

        assert storage.get("cart:abc") is not None
        assert storage.get(CART_STORAGE_KEY) is None


class TestDecodeLines:
    def test_decode_reports_key(self):
        with pytest.raises(PersistenceCorruption) as exc_info:
            decode_lines("nope", key="cart:xyz")

        assert exc_info.value.key == "cart:xyz"

    def test_encode_decode(self, lines):
        assert decode_lines(encode_lines(lines)) == lines


class TestJsonFileStorage:
    def test_set_get_delete(self, tmp_path):
        storage = JsonFileStorage(str(tmp_path / "data" / "carts.json"))

        storage.set("a", "[]")
        storage.set("b", '[{"x": 1}]')

        assert storage.get("a") == "[]"
        assert storage.get("b") == '[{"x": 1}]'

        storage.delete("a")
        assert storage.get("a") is None
        assert storage.get("b") is not None

    def test_survives_new_instance(self, tmp_path, lines):
        path = str(tmp_path / "carts.json")
        CartPersistence(JsonFileStorage(path)).save(lines)

        assert CartPersistence(JsonFileStorage(path)).load() == lines

    def test_corrupt_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "carts.json"
        path.write_text("not json", encoding="utf-8")

        storage = JsonFileStorage(str(path))

        assert storage.get(CART_STORAGE_KEY) is None
        storage.set("k", "v")
        assert storage.get("k") == "v"


class TestRedisStorage:
    def test_set_uses_cart_ttl(self):
        client = Mock()
        storage = RedisStorage(client)

        storage.set("cart:1", "[]")

        client.set.assert_called_once_with("cart:1", "[]", ex=TTL.CART)

    def test_get_and_delete_delegate(self):
        client = Mock()
        client.get.return_value = "[]"
        storage = RedisStorage(client)

        assert storage.get("cart:1") == "[]"
        storage.delete("cart:1")
        client.delete.assert_called_once_with("cart:1")


class TestCreateStorage:
    def test_memory_backend(self):
        assert isinstance(create_storage("memory"), MemoryStorage)

    def test_redis_backend_is_lazy(self):
        assert isinstance(create_storage("redis"), RedisStorage)

    def test_unknown_backend(self):
        with pytest.raises(ValueError):
            create_storage("localstorage")
