"""
Cart persistence.

`CartPersistence` mirrors the cart lines into one key of a synchronous
key-value storage as a JSON array. Backends:

- MemoryStorage: process-local dict
- JsonFileStorage: one JSON file holding every key
- RedisStorage: Upstash Redis, values expire after TTL.CART
"""
import json
import os
import threading
from typing import Iterable, List, Optional, Protocol

from pydantic import ValidationError

from storefront.db import TTL, get_redis_sync
from storefront.errors import PersistenceCorruption
from storefront.logging import get_logger, sanitize_cart_key, sanitize_string_for_logging
from .models import CartLine

logger = get_logger(__name__)

# Fixed slot the storefront client has always used
CART_STORAGE_KEY = "actionProtectionCart"

CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "file").lower()
CART_STORAGE_PATH = os.environ.get("CART_STORAGE_PATH", os.path.join("data", "carts.json"))


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: Optional[dict] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JsonFileStorage:
    """
    All keys in a single JSON object file.

    Every write rewrites the whole file through a temp file and
    os.replace, so readers never see a half-written document.
    """

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._lock = threading.Lock()
        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def _read_all(self) -> dict:
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError as e:
            logger.warning(f"Storage file {self.file_path} is not valid JSON, starting empty: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.file_path} does not hold an object, starting empty")
            return {}
        return data

    def _write_all(self, data: dict) -> None:
        tmp = self.file_path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp, self.file_path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read_all()
            data[key] = value
            self._write_all(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._read_all()
            if key in data:
                del data[key]
                self._write_all(data)


class RedisStorage:
    """Upstash Redis storage; abandoned carts expire after the TTL."""

    def __init__(self, client=None, ttl: int = TTL.CART):
        self._client = client
        self.ttl = ttl

    @property
    def client(self):
        """Redis client (lazy, so importing never needs credentials)."""
        if self._client is None:
            self._client = get_redis_sync()
        return self._client

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def set(self, key: str, value: str) -> None:
        self.client.set(key, value, ex=self.ttl)

    def delete(self, key: str) -> None:
        self.client.delete(key)


def create_storage(backend: str = CART_STORAGE_BACKEND) -> KeyValueStorage:
    """Build the storage backend named by CART_STORAGE_BACKEND."""
    if backend == "memory":
        return MemoryStorage()
    if backend == "file":
        return JsonFileStorage(CART_STORAGE_PATH)
    if backend == "redis":
        return RedisStorage()
    raise ValueError(f"Unknown CART_STORAGE_BACKEND: {backend!r} (expected memory, file or redis)")


def encode_lines(lines: Iterable[CartLine]) -> str:
    return json.dumps([line.to_dict() for line in lines], ensure_ascii=False)


def decode_lines(raw: str, key: str = CART_STORAGE_KEY) -> List[CartLine]:
    """Parse a stored cart. Raises PersistenceCorruption on any malformed input."""
    try:
        data = json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        # JSONDecodeError, oversized int literals and runaway nesting all land here
        raise PersistenceCorruption(key, f"invalid JSON: {e}") from e

    if not isinstance(data, list):
        raise PersistenceCorruption(key, f"expected a list, got {type(data).__name__}")

    try:
        return [CartLine.from_dict(entry) for entry in data]
    except (KeyError, TypeError, ValueError, RecursionError, ValidationError) as e:
        raise PersistenceCorruption(key, f"malformed line: {e}") from e


class CartPersistence:
    """Saves and restores cart lines under one storage key."""

    def __init__(self, storage: KeyValueStorage, key: str = CART_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def save(self, lines: Iterable[CartLine]) -> bool:
        """Write the full line list. Failures are logged, never raised."""
        try:
            self.storage.set(self.key, encode_lines(lines))
            return True
        except Exception as e:
            logger.error(f"Failed to save cart under {sanitize_cart_key(self.key)}: {e}", exc_info=True)
            return False

    def load(self) -> List[CartLine]:
        """Read the stored lines; empty list when absent, unreadable or corrupt."""
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read cart under {sanitize_cart_key(self.key)}: {e}", exc_info=True)
            return []

        if raw is None:
            return []

        try:
            lines = decode_lines(raw, self.key)
        except PersistenceCorruption as e:
            # Corrupted data - discard it and start from an empty cart
            logger.warning(
                f"Corrupted cart data under {sanitize_cart_key(self.key)}, discarding: "
                f"{sanitize_string_for_logging(e.reason, max_length=120)}"
            )
            self._discard()
            return []

        logger.debug(f"Restored {len(lines)} cart lines from {sanitize_cart_key(self.key)}")
        return lines

    def _discard(self) -> None:
        try:
            self.storage.delete(self.key)
        except Exception as e:
            logger.error(f"Failed to discard corrupted cart: {e}")
