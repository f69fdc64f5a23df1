"""Action Protection storefront: cart store and its HTTP surface."""

__version__ = "1.0.0"
