"""Cart package: models, reducer, persistence, and store facade."""
from .models import CartLine, CartState, EMPTY_CART
from .reducer import reduce
from .service import CartStore, create_cart_store
from .storage import (
    CART_STORAGE_KEY,
    CartPersistence,
    JsonFileStorage,
    MemoryStorage,
    RedisStorage,
)

__all__ = [
    "CartLine",
    "CartState",
    "EMPTY_CART",
    "reduce",
    "CartStore",
    "create_cart_store",
    "CART_STORAGE_KEY",
    "CartPersistence",
    "JsonFileStorage",
    "MemoryStorage",
    "RedisStorage",
]
