from __future__ import annotations

from storefront.application.services.cart_service import CartService
from storefront.domain.entities.cart import CartItem, ShoppingCart
from storefront.infrastructure.cart_store import InMemoryCartStore


def _service() -> CartService:
    return CartService(InMemoryCartStore())


def test_absent_cart_is_empty_not_error() -> None:
    cart = _service().get_cart("new-basket")
    assert cart == ShoppingCart(id="new-basket")
    assert cart.items == ()


def test_update_then_get_round_trip() -> None:
    svc = _service()
    cart = ShoppingCart(
        id="basket",
        items=[CartItem(product_id=3, product_name="Boots", price="49.99", quantity=2)],
    )
    assert svc.update_cart(cart) == cart
    assert svc.get_cart("basket") == cart


def test_delete_cart() -> None:
    svc = _service()
    svc.update_cart(ShoppingCart(id="basket"))
    assert svc.delete_cart("basket") is True
    assert svc.delete_cart("basket") is False
    assert svc.get_cart("basket").items == ()
