from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from storefront.domain.entities.product import Product
from storefront.domain.specifications.products import (
    ProductSpecParams,
    product_filter_specification,
    product_specification,
)
from storefront.repositories.products import ProductsRepo

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_PAGE_SIZE = 50


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the unpaged total ``count``."""

    page_index: int
    page_size: int
    count: int
    data: list[T]


class CatalogService:
    """Product catalog operations on top of a :class:`ProductsRepo`.

    - Caps ``page_size`` at ``max_page_size``; the specification itself
      accepts any positive size.
    - Expected failures come back as ``None``/``False``, never exceptions.
    """

    def __init__(self, products: ProductsRepo, *, max_page_size: int = MAX_PAGE_SIZE) -> None:
        if max_page_size <= 0:
            raise ValueError("max_page_size must be positive")
        self._products = products
        self._max_page_size = max_page_size

    @classmethod
    def from_settings(cls, products: ProductsRepo) -> "CatalogService":
        # Lazy import so tests can construct the service without the env
        from storefront.config.settings import settings

        return cls(products, max_page_size=settings.max_page_size)

    def list_products(self, params: ProductSpecParams) -> Page[Product]:
        if params.page_size > self._max_page_size:
            params = params.model_copy(update={"page_size": self._max_page_size})
        data = self._products.list_by_spec(product_specification(params))
        count = self._products.count_by_spec(product_filter_specification(params))
        return Page(
            page_index=params.page_index,
            page_size=params.page_size,
            count=count,
            data=data,
        )

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._products.get_by_id(product_id)

    def create_product(self, product: Product) -> Optional[Product]:
        self._products.add(product)
        if not self._products.save_all():
            logger.warning("Problem creating product", extra={"product_name": product.name})
            return None
        return product

    def update_product(self, product_id: int, product: Product) -> bool:
        if product.id != product_id or not self._products.exists(product_id):
            logger.warning("Cannot update product", extra={"product_id": product_id})
            return False
        self._products.update(product)
        return self._products.save_all()

    def delete_product(self, product_id: int) -> bool:
        product = self._products.get_by_id(product_id)
        if product is None:
            return False
        self._products.remove(product)
        return self._products.save_all()

    def list_brands(self) -> list[str]:
        return self._products.list_brands()

    def list_types(self) -> list[str]:
        return self._products.list_types()
