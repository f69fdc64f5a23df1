"""
FastAPI Routers Package

All routers are mounted in api/index.py.
"""

from storefront.routers.cart import router as cart_router

__all__ = [
    "cart_router",
]
