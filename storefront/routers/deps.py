"""
Shared Dependencies for Routers

The storage backend is built once and reused; cart stores are built per
request, bound to the caller's session slot.
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from storefront.cart import CartStore, create_cart_store
from storefront.cart.storage import KeyValueStorage, create_storage
from storefront.db import RedisKeys
from storefront.errors import ERROR_SESSION_REQUIRED


@lru_cache(maxsize=1)
def get_storage() -> KeyValueStorage:
    """Storage backend singleton (lazy, built on first request)."""
    return create_storage()


def get_session_id(
    x_cart_session: str = Header(..., alias="X-Cart-Session", max_length=128),
) -> str:
    session_id = x_cart_session.strip()
    if not session_id:
        raise HTTPException(status_code=400, detail=ERROR_SESSION_REQUIRED)
    return session_id


def get_cart_store(
    session_id: str = Depends(get_session_id),
    storage: KeyValueStorage = Depends(get_storage),
) -> CartStore:
    return create_cart_store(storage, key=RedisKeys.cart_key(session_id))
