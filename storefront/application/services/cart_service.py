from __future__ import annotations

import logging

from storefront.domain.entities.cart import ShoppingCart
from storefront.repositories.carts import CartStore

logger = logging.getLogger(__name__)


class CartService:
    """Cart operations for request handlers.

    An absent cart is reported as an empty cart for that key, never as an
    error.
    """

    def __init__(self, store: CartStore) -> None:
        self._store = store

    def get_cart(self, key: str) -> ShoppingCart:
        cart = self._store.get(key)
        return cart if cart is not None else ShoppingCart(id=key)

    def update_cart(self, cart: ShoppingCart) -> ShoppingCart:
        stored = self._store.replace(cart)
        logger.debug("Cart stored", extra={"cart_id": cart.id, "items": len(cart.items)})
        return stored

    def delete_cart(self, key: str) -> bool:
        deleted = self._store.delete(key)
        if not deleted:
            logger.info("Cart not found for delete", extra={"cart_id": key})
        return deleted
