from __future__ import annotations

from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation

from pydantic import Field, field_validator

from .base import Entity

CENT = Decimal("0.01")


def to_price(v: Decimal | int | float | str) -> Decimal:
    """Coerce ``v`` to a cent-quantised ``Decimal``.

    Raises ``ValueError`` for text that is not a number, for NaN and
    infinities, and for values too large to carry cent precision.
    """
    try:
        price = v if isinstance(v, Decimal) else Decimal(str(v))
        if not price.is_finite():
            raise ValueError(f"price must be a finite number, got {v!r}")
        return price.quantize(CENT, rounding=ROUND_HALF_EVEN)
    except InvalidOperation:
        raise ValueError(f"invalid price: {v!r}") from None


class Product(Entity):
    name: str
    description: str = ""
    price: Decimal = Field(..., description="Unit price")
    picture_url: str = ""
    type: str
    brand: str
    quantity_in_stock: int = Field(0, ge=0)

    @field_validator("price", mode="before")
    @classmethod
    def _ensure_decimal(cls, v: Decimal | int | float | str) -> Decimal:
        return to_price(v)

    @field_validator("price")
    @classmethod
    def _check_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("price must not be negative")
        return v
