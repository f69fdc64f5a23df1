"""Cart store: applies the reducer and mirrors every change to storage."""
from decimal import Decimal
from typing import Optional, Tuple

from storefront.i18n import detect_language, get_text, is_rtl
from storefront.logging import get_logger, sanitize_cart_key
from storefront.models import Product
from storefront.money import STORE_CURRENCY, format_money, round_money, to_float
from .models import CartLine, CartState, EMPTY_CART
from .reducer import (
    AddItem,
    CartAction,
    ClearCart,
    LoadCart,
    RemoveItem,
    UpdateQuantity,
    reduce,
)
from .storage import CART_STORAGE_KEY, CartPersistence, KeyValueStorage, create_storage

logger = get_logger(__name__)


class CartStore:
    """
    Authoritative in-memory cart for one client session.

    Construction restores whatever the persistence slot holds. Each of the
    four operations replaces the state through `reduce` and then writes the
    full line list back. None of them raise: unknown product ids are no-ops
    and non-positive quantities remove the line.
    """

    def __init__(self, persistence: CartPersistence):
        self._persistence = persistence
        self._state: CartState = EMPTY_CART
        self._state = reduce(self._state, LoadCart(tuple(persistence.load())))

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> Tuple[CartLine, ...]:
        return self._state.items

    @property
    def total(self) -> Decimal:
        return self._state.total

    @property
    def item_count(self) -> int:
        return self._state.item_count

    def _dispatch(self, action: CartAction) -> CartState:
        self._state = reduce(self._state, action)
        self._persistence.save(self._state.items)
        return self._state

    def add_item(self, product: Product, quantity: int = 1) -> CartState:
        """Add `quantity` units of product, merging into an existing line."""
        return self._dispatch(AddItem(product=product, quantity=quantity))

    def remove_item(self, product_id: int) -> CartState:
        """Drop the line for product_id, if any."""
        return self._dispatch(RemoveItem(product_id=product_id))

    def update_quantity(self, product_id: int, quantity: int) -> CartState:
        """Set an absolute quantity; <= 0 removes the line."""
        return self._dispatch(UpdateQuantity(product_id=product_id, quantity=quantity))

    def clear(self) -> CartState:
        return self._dispatch(ClearCart())

    def summary(self, lang: str = "en", currency: str = STORE_CURRENCY) -> dict:
        """
        Cart view for the storefront UI.

        Amounts come twice: as strings for exact arithmetic on the client
        and pre-formatted with the localized currency label for display.
        """
        lang = detect_language(lang)
        state = self._state
        symbol = get_text(f"currency.{currency}", lang, default=currency)

        return {
            "is_empty": state.is_empty,
            "lang": lang,
            "rtl": is_rtl(lang),
            "title": get_text("cart", lang),
            "empty_message": get_text("cart_empty", lang) if state.is_empty else None,
            "items": [
                {
                    "id": line.id,
                    "product_id": line.product_id,
                    "name": line.product.display_name(lang),
                    "image": line.product.image,
                    "quantity": line.quantity,
                    "unit_price": str(round_money(line.product.unit_price)),
                    "line_total": str(round_money(line.line_total)),
                    "line_total_display": format_money(line.line_total, currency, symbol),
                }
                for line in state.items
            ],
            "item_count": state.item_count,
            "item_count_label": get_text("item_count", lang, count=state.item_count),
            "total": str(state.total),
            "total_value": to_float(state.total),
            "total_display": format_money(state.total, currency, symbol),
            "currency": currency,
        }


def create_cart_store(storage: Optional[KeyValueStorage] = None, key: str = CART_STORAGE_KEY) -> CartStore:
    """
    Build a store bound to one storage slot.

    Call once per session at startup and pass the store to whatever needs
    it; nothing here is shared between callers except the storage backend.
    """
    if storage is None:
        storage = create_storage()
    store = CartStore(CartPersistence(storage, key))
    logger.debug(
        f"Cart store ready for {sanitize_cart_key(key)} "
        f"({len(store.items)} lines, {store.item_count} units)"
    )
    return store
