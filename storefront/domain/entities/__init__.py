from .base import Entity
from .cart import CartItem, ShoppingCart
from .product import Product

__all__ = [
    "CartItem",
    "Entity",
    "Product",
    "ShoppingCart",
]
