"""
Pydantic Models - Catalog records and API request schemas

Contains:
- Product record as supplied by the catalog service
- Cart API request bodies
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storefront.money import to_decimal, to_price_string


# ============================================================
# Catalog
# ============================================================

class Product(BaseModel):
    """
    Product snapshot as served by the catalog API.

    Field names are camelCase on the wire (nameEn, isAvailable, ...).
    The price stays a decimal string; numeric input is normalized to one.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Catalog rows carry timestamps we don't keep
    )

    id: int
    name_en: str
    name_ar: str
    description_en: Optional[str] = None
    description_ar: Optional[str] = None
    price: str
    category_id: Optional[int] = None
    image: Optional[str] = None
    stock: Optional[int] = 0
    is_active: Optional[bool] = True
    is_featured: Optional[bool] = False
    is_available: Optional[bool] = True
    sort_order: Optional[int] = 0

    @field_validator("price", mode="before")
    @classmethod
    def normalize_price(cls, v):
        if isinstance(v, str):
            return v.strip()
        if isinstance(v, bool) or v is None:
            return v
        return to_price_string(v)

    @property
    def unit_price(self):
        """Price parsed to Decimal (0 if the catalog sent garbage)."""
        return to_decimal(self.price)

    @property
    def is_orderable(self) -> bool:
        return self.is_active is not False and self.is_available is not False

    def display_name(self, lang: str = "en") -> str:
        """Name in the requested language, falling back to the other one."""
        if lang == "ar":
            return self.name_ar or self.name_en
        return self.name_en or self.name_ar

    def to_wire(self) -> dict:
        """Serialize with camelCase keys, as stored in the cart slot."""
        return self.model_dump(by_alias=True, mode="json")


# ============================================================
# Cart API
# ============================================================

class AddToCartRequest(BaseModel):
    product: Product
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    product_id: int
    quantity: int = Field(ge=0)  # 0 removes the line
