"""
Cart reducer.

`reduce(state, action)` is a pure function: it never touches storage and
never mutates its input. Operations on an unknown product id return the
very same state object.
"""
import time
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from storefront.models import Product
from .models import CartLine, CartState, EMPTY_CART


@dataclass(frozen=True)
class AddItem:
    product: Product
    quantity: int = 1
    line_id: Optional[int] = None  # Generated from the clock when omitted


@dataclass(frozen=True)
class RemoveItem:
    product_id: int


@dataclass(frozen=True)
class UpdateQuantity:
    product_id: int
    quantity: int  # Absolute, not a delta


@dataclass(frozen=True)
class ClearCart:
    pass


@dataclass(frozen=True)
class LoadCart:
    items: tuple


CartAction = Union[AddItem, RemoveItem, UpdateQuantity, ClearCart, LoadCart]


def next_line_id(items: Iterable[CartLine], now_ms: Optional[int] = None) -> int:
    """Millisecond timestamp, bumped past any line id already in use."""
    candidate = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    highest = max((line.id for line in items), default=None)
    if highest is not None and candidate <= highest:
        candidate = highest + 1
    return candidate


def _positive(lines: Iterable[CartLine]) -> tuple:
    return tuple(line for line in lines if line.quantity > 0)


def _normalize(lines: Iterable[CartLine]) -> tuple:
    """Merge lines sharing a product id and drop non-positive quantities."""
    merged: dict[int, CartLine] = {}
    for line in lines:
        existing = merged.get(line.product_id)
        if existing is None:
            merged[line.product_id] = line
        else:
            merged[line.product_id] = existing.with_quantity(existing.quantity + line.quantity)
    return _positive(merged.values())


def _add_item(state: CartState, action: AddItem) -> CartState:
    product_id = action.product.id
    if state.find(product_id) is not None:
        items = tuple(
            line.with_quantity(line.quantity + action.quantity) if line.product_id == product_id else line
            for line in state.items
        )
    else:
        line_id = action.line_id if action.line_id is not None else next_line_id(state.items)
        items = state.items + (CartLine(id=line_id, product=action.product, quantity=action.quantity),)
    return CartState(items=_positive(items))


def _remove_item(state: CartState, action: RemoveItem) -> CartState:
    if state.find(action.product_id) is None:
        return state
    return CartState(items=tuple(line for line in state.items if line.product_id != action.product_id))


def _update_quantity(state: CartState, action: UpdateQuantity) -> CartState:
    if state.find(action.product_id) is None:
        return state
    items = (
        line.with_quantity(action.quantity) if line.product_id == action.product_id else line
        for line in state.items
    )
    return CartState(items=_positive(items))


def reduce(state: CartState, action: CartAction) -> CartState:
    """Apply one action and return the resulting state."""
    if isinstance(action, AddItem):
        return _add_item(state, action)
    if isinstance(action, RemoveItem):
        return _remove_item(state, action)
    if isinstance(action, UpdateQuantity):
        return _update_quantity(state, action)
    if isinstance(action, ClearCart):
        return EMPTY_CART
    if isinstance(action, LoadCart):
        return CartState(items=_normalize(action.items))
    raise TypeError(f"Unknown cart action: {action!r}")
