from decimal import Decimal

import pytest

from storefront.domain.entities import CartItem, Entity, Product, ShoppingCart


def _product(**overrides: object) -> Product:
    data: dict[str, object] = {
        "name": "Blue Boots",
        "description": "Waterproof",
        "price": "19.999",
        "picture_url": "images/boots.png",
        "type": "Boots",
        "brand": "Acme",
        "quantity_in_stock": 3,
    }
    data.update(overrides)
    return Product(**data)  # type: ignore[arg-type]


def test_product_defaults_to_transient_and_quantises_price() -> None:
    p = _product()
    assert p.id == 0
    assert p.is_transient
    assert p.price == Decimal("20.00")
    assert isinstance(p.price, Decimal)


def test_product_price_from_float_is_exact_cents() -> None:
    assert _product(price=0.1).price == Decimal("0.10")


@pytest.mark.parametrize(
    "overrides",
    [
        {"price": "-0.01"},
        {"quantity_in_stock": -1},
        {"id": -5},
        {"price": "abc"},
        {"price": "Infinity"},
        {"price": "NaN"},
        {"price": float("inf")},
        {"price": "1e30"},
    ],
)
def test_product_rejects_invalid_values(overrides: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        _product(**overrides)


def test_entity_id_is_assigned_once() -> None:
    p = _product()
    with pytest.raises(ValueError):
        p.id = -1
    p.id = 7
    assert not p.is_transient
    # Same value is a no-op
    p.id = 7
    with pytest.raises(ValueError):
        p.id = 99
    with pytest.raises(ValueError):
        p.id = 0
    assert p.id == 7


def test_entity_base_has_only_identity() -> None:
    assert Entity().id == 0


def test_cart_item_validation() -> None:
    item = CartItem(product_id=1, product_name="Boots", price=10, quantity=2)
    assert item.price == Decimal("10.00")
    with pytest.raises(ValueError):
        CartItem(product_id=1, product_name="Boots", price=10, quantity=0)
    with pytest.raises(ValueError):
        CartItem(product_id=0, product_name="Boots", price=10, quantity=1)
    with pytest.raises(ValueError):
        CartItem(product_id=1, product_name="Boots", price=-1, quantity=1)


@pytest.mark.parametrize("price", ["abc", "Infinity", "-Infinity", "NaN", "1e30"])
def test_cart_item_rejects_unusable_prices(price: str) -> None:
    with pytest.raises(ValueError):
        CartItem(product_id=1, product_name="Boots", price=price, quantity=1)


def test_shopping_cart_is_an_immutable_snapshot() -> None:
    items = [CartItem(product_id=1, product_name="Boots", price="10.50", quantity=1)]
    cart = ShoppingCart(id="basket-1", items=items)
    assert isinstance(cart.items, tuple)
    items.append(CartItem(product_id=2, product_name="Hat", price=5, quantity=1))
    assert len(cart.items) == 1
    with pytest.raises(ValueError):
        cart.items = ()  # type: ignore[misc]
    with pytest.raises(ValueError):
        cart.items[0].quantity = 5  # type: ignore[misc]


def test_shopping_cart_requires_key() -> None:
    assert ShoppingCart(id="k").items == ()
    with pytest.raises(ValueError):
        ShoppingCart(id="")
