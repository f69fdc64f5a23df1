"""Cart models with Decimal-based totals."""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Tuple

from storefront.models import Product
from storefront.money import multiply, round_money


@dataclass(frozen=True)
class CartLine:
    """Single row in the cart: a product snapshot and a quantity."""
    id: int  # Synthetic line id, not the product id
    product: Product
    quantity: int

    @property
    def product_id(self) -> int:
        return self.product.id

    @property
    def line_total(self) -> Decimal:
        """Unit price times quantity, unrounded."""
        return multiply(self.product.unit_price, self.quantity)

    def with_quantity(self, quantity: int) -> "CartLine":
        return replace(self, quantity=quantity)

    def to_dict(self) -> dict:
        """Convert to the stored/JSON form."""
        return {
            "id": self.id,
            "product": self.product.to_wire(),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """Create from the stored form. Raises on missing or bad fields."""
        quantity = data["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError(f"quantity must be an integer, got {type(quantity).__name__}")
        return cls(
            id=int(data["id"]),
            product=Product.model_validate(data["product"]),
            quantity=quantity,
        )


@dataclass(frozen=True)
class CartState:
    """
    Full cart view at a point in time.

    `total` and `item_count` are derived from `items` on every read;
    there is nothing to keep in sync.
    """
    items: Tuple[CartLine, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Decimal:
        """Sum of price x quantity over all lines, rounded to cents."""
        return round_money(sum((line.line_total for line in self.items), Decimal("0")))

    @property
    def item_count(self) -> int:
        """Total number of units in the cart."""
        return sum(line.quantity for line in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, product_id: int) -> CartLine | None:
        return next((line for line in self.items if line.product_id == product_id), None)


EMPTY_CART = CartState()
