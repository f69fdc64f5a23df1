"""
Cart Router

Storefront cart endpoints. Every response is the cart summary in the
requested language, so the client can re-render from any call.

This layer owns input validation: quantities are checked by the request
models and unorderable products are refused before they reach the store.
"""
from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.cart import CartStore
from storefront.errors import ERROR_PRODUCT_INACTIVE, ERROR_PRODUCT_UNAVAILABLE
from storefront.logging import get_logger, sanitize_id_for_logging
from storefront.models import AddToCartRequest, Product, UpdateCartItemRequest
from .deps import get_cart_store

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


def _ensure_product_orderable(product: Product) -> None:
    """Validate product flags for cart operations."""
    if product.is_active is False:
        raise HTTPException(status_code=400, detail=ERROR_PRODUCT_INACTIVE)
    if product.is_available is False:
        raise HTTPException(status_code=400, detail=ERROR_PRODUCT_UNAVAILABLE)


@router.get("/cart")
def get_cart(lang: str = Query("en"), store: CartStore = Depends(get_cart_store)):
    """Current cart with totals."""
    return store.summary(lang)


@router.post("/cart/add")
def add_to_cart(request: AddToCartRequest, lang: str = Query("en"), store: CartStore = Depends(get_cart_store)):
    """Add a product (merges into an existing line)."""
    _ensure_product_orderable(request.product)
    store.add_item(request.product, request.quantity)
    logger.info(
        f"Added product {sanitize_id_for_logging(request.product.id)} x{request.quantity}, "
        f"cart now {store.item_count} units"
    )
    return store.summary(lang)


@router.patch("/cart/item")
def update_cart_item(
    request: UpdateCartItemRequest,
    lang: str = Query("en"),
    store: CartStore = Depends(get_cart_store),
):
    """Set a line's quantity (0 = remove)."""
    store.update_quantity(request.product_id, request.quantity)
    return store.summary(lang)


@router.delete("/cart/item")
def remove_cart_item(product_id: int, lang: str = Query("en"), store: CartStore = Depends(get_cart_store)):
    """Remove a product's line."""
    store.remove_item(product_id)
    return store.summary(lang)


@router.delete("/cart")
def clear_cart(lang: str = Query("en"), store: CartStore = Depends(get_cart_store)):
    """Empty the cart."""
    store.clear()
    return store.summary(lang)
