from __future__ import annotations

from abc import abstractmethod

from storefront.domain.entities.product import Product

from .generic import GenericRepo


class ProductsRepo(GenericRepo[Product]):
    """Repository interface for products."""

    @abstractmethod
    def list_brands(self) -> list[str]:
        """Return the distinct brands of all products, sorted."""

    @abstractmethod
    def list_types(self) -> list[str]:
        """Return the distinct product types, sorted."""
