"""Product listing specifications built from validated request parameters."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..entities.product import Product
from ..value_objects.enums import ProductSort, SortDirection
from .base import Criterion, Operator, OrderBy, Paging, Specification

DEFAULT_PAGE_SIZE = 6


class ProductSpecParams(BaseModel):
    """Filter, sort and paging parameters for the product listing.

    ``brands`` and ``types`` accept lists or comma-separated strings; entries
    are trimmed and lower-cased, and blank entries are dropped. No upper
    bound is placed on ``page_size`` here.

    >>> ProductSpecParams(brands="Acme, zeta,").brands
    ['acme', 'zeta']
    """

    brands: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    sort: Optional[str] = None
    page_index: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, gt=0)

    model_config = ConfigDict(frozen=True)

    @field_validator("brands", "types", mode="before")
    @classmethod
    def _split_csv(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        out: list[str] = []
        for chunk in v:
            for part in str(chunk).split(","):
                part = part.strip().lower()
                if part:
                    out.append(part)
        return out


def _criteria(params: ProductSpecParams) -> tuple[Criterion, ...]:
    terms: list[Criterion] = []
    if params.brands:
        terms.append(Criterion("brand", Operator.IN_CI, params.brands))
    if params.types:
        terms.append(Criterion("type", Operator.IN_CI, params.types))
    return tuple(terms)


def _ordering(sort: str | None) -> OrderBy:
    token = ProductSort.parse(sort)
    if token is ProductSort.PRICE_ASC:
        return OrderBy("price", SortDirection.ASC)
    if token is ProductSort.PRICE_DESC:
        return OrderBy("price", SortDirection.DESC)
    return OrderBy("name", SortDirection.ASC)


def product_specification(params: ProductSpecParams) -> Specification[Product]:
    """Return the filtered, sorted and paged product listing specification."""
    return Specification(
        criteria=_criteria(params),
        order_by=_ordering(params.sort),
        paging=Paging(
            skip=params.page_size * (params.page_index - 1),
            take=params.page_size,
        ),
    )


def product_filter_specification(params: ProductSpecParams) -> Specification[Product]:
    """Return the same filter as :func:`product_specification`, unsorted and unpaged."""
    return Specification(criteria=_criteria(params))
