"""Pytest configuration and fixtures"""
import os
import pytest

# Set test environment variables
os.environ.setdefault("CART_STORAGE_BACKEND", "memory")
os.environ.setdefault("STORE_CURRENCY", "SAR")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from storefront.cart import CartPersistence, CartStore, MemoryStorage
from storefront.models import Product


def _build_product(product_id: int, price: str = "10.00", **overrides) -> Product:
    data = {
        "id": product_id,
        "nameEn": f"Protection package {product_id}",
        "nameAr": f"باقة حماية {product_id}",
        "price": price,
        "categoryId": 1,
        "stock": 10,
        "isActive": True,
        "isAvailable": True,
    }
    data.update(overrides)
    return Product.model_validate(data)


@pytest.fixture
def sample_product():
    """Sample product data as served by the catalog API"""
    return {
        "id": 1,
        "nameEn": "Full Body PPF",
        "nameAr": "حماية كاملة للسيارة",
        "descriptionEn": "Paint protection film, full coverage",
        "descriptionAr": "فيلم حماية الطلاء، تغطية كاملة",
        "price": "15.00",
        "categoryId": 2,
        "image": "/uploads/ppf.jpg",
        "stock": 4,
        "isActive": True,
        "isFeatured": False,
        "isAvailable": True,
        "sortOrder": 0,
        "createdAt": "2025-01-01T00:00:00Z",
    }


@pytest.fixture
def make_product():
    """Factory for catalog products: make_product(id, price, **overrides)"""
    return _build_product


@pytest.fixture
def storage():
    """Empty in-memory key-value storage"""
    return MemoryStorage()


@pytest.fixture
def persistence(storage):
    return CartPersistence(storage)


@pytest.fixture
def store(persistence):
    """Fresh cart store over empty storage"""
    return CartStore(persistence)
