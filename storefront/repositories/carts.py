from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from storefront.domain.entities.cart import ShoppingCart


class CartStore(ABC):
    """Keyed store of shopping-cart snapshots.

    Implementations must make each operation atomic for a single key.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[ShoppingCart]:
        """Return the cart stored under ``key`` or ``None``."""

    @abstractmethod
    def replace(self, cart: ShoppingCart) -> ShoppingCart:
        """Store ``cart`` under ``cart.id``, overwriting any previous snapshot."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove the cart under ``key``; return whether one existed."""
