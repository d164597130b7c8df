from __future__ import annotations

import sqlite3
from decimal import Decimal
from typing import Any, Sequence

from storefront.domain.entities.product import Product, to_price

from ..products import ProductsRepo
from .generic_sqlite import SqliteRepo
from .query_sqlite import TableMapping


def price_to_cents(price: Decimal | int | float | str) -> int:
    return int((to_price(price) * 100).to_integral_value())


def _to_row(p: Product) -> tuple[Any, ...]:
    return (
        p.name,
        p.description,
        price_to_cents(p.price),
        p.picture_url,
        p.type,
        p.brand,
        p.quantity_in_stock,
    )


def _from_row(row: Sequence[Any]) -> Product:
    return Product(
        id=row[0],
        name=row[1],
        description=row[2],
        price=Decimal(row[3]) / 100,
        picture_url=row[4],
        type=row[5],
        brand=row[6],
        quantity_in_stock=row[7],
    )


PRODUCTS = TableMapping[Product](
    table="products",
    pk="product_id",
    columns={
        "name": "name",
        "description": "description",
        # Integer cents keep SQL ordering identical to Decimal ordering
        "price": "price_cents",
        "picture_url": "picture_url",
        "type": "type",
        "brand": "brand",
        "quantity_in_stock": "quantity_in_stock",
    },
    to_row=_to_row,
    from_row=_from_row,
    encoders={"price": price_to_cents},
)


class ProductsRepoSqlite(SqliteRepo[Product], ProductsRepo):
    """SQLite implementation of :class:`ProductsRepo`.

    Example:
        >>> conn = sqlite3.connect(":memory:")
        >>> repo = ProductsRepoSqlite(conn)
        >>> p = Product(name="Mug", price="4.50", type="Kitchen", brand="Acme")
        >>> repo.add(p)
        >>> repo.save_all()
        True
        >>> repo.get_by_id(p.id).price
        Decimal('4.50')
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        super().__init__(conn, PRODUCTS)
        self._conn.execute(
            """
            CREATE TABLE IF NOT EXISTS products (
                product_id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                description TEXT NOT NULL DEFAULT '',
                price_cents INTEGER NOT NULL CHECK(price_cents >= 0),
                picture_url TEXT NOT NULL DEFAULT '',
                type TEXT NOT NULL,
                brand TEXT NOT NULL,
                quantity_in_stock INTEGER NOT NULL DEFAULT 0 CHECK(quantity_in_stock >= 0)
            )
            """
        )
        self._conn.commit()

    def list_brands(self) -> list[str]:
        cur = self._conn.execute("SELECT DISTINCT brand FROM products ORDER BY brand")
        return [row[0] for row in cur.fetchall()]

    def list_types(self) -> list[str]:
        cur = self._conn.execute("SELECT DISTINCT type FROM products ORDER BY type")
        return [row[0] for row in cur.fetchall()]
