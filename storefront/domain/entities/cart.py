from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .product import to_price


class CartItem(BaseModel):
    product_id: int = Field(..., gt=0)
    product_name: str
    price: Decimal
    quantity: int = Field(..., gt=0)
    picture_url: str = ""
    brand: str = ""
    type: str = ""

    model_config = ConfigDict(frozen=True)

    @field_validator("price", mode="before")
    @classmethod
    def _ensure_decimal(cls, v: Decimal | int | float | str) -> Decimal:
        price = to_price(v)
        if price < 0:
            raise ValueError("price must not be negative")
        return price


class ShoppingCart(BaseModel):
    """Snapshot of a shopping cart keyed by an opaque string.

    Frozen, and ``items`` is a tuple, so a stored snapshot cannot be changed
    in place; updates replace the whole cart.
    """

    id: str = Field(..., min_length=1)
    items: tuple[CartItem, ...] = ()

    model_config = ConfigDict(frozen=True)
