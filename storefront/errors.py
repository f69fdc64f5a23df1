"""
Common Error Constants

Centralized error messages shared by the cart store and the HTTP layer.
"""

# Cart errors
ERROR_SESSION_REQUIRED = "Cart session header is required"

# Product errors
ERROR_PRODUCT_UNAVAILABLE = "Product is not available for order"
ERROR_PRODUCT_INACTIVE = "Product is no longer sold"


class PersistenceCorruption(ValueError):
    """Stored cart data is present but cannot be decoded."""

    def __init__(self, key: str, reason: str):
        super().__init__(f"Corrupted cart data under {key!r}: {reason}")
        self.key = key
        self.reason = reason
