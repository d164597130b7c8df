from __future__ import annotations

import sqlite3
from decimal import Decimal
from typing import Iterator

import pytest

from storefront.application.services.catalog_service import CatalogService
from storefront.domain.entities.product import Product
from storefront.domain.specifications import ProductSpecParams
from storefront.repositories.sqlite.products_sqlite import ProductsRepoSqlite


@pytest.fixture
def repo() -> Iterator[ProductsRepoSqlite]:
    conn = sqlite3.connect(":memory:")
    yield ProductsRepoSqlite(conn)
    conn.close()


def _add(svc: CatalogService, name: str, brand: str, type_: str, price: str) -> Product:
    created = svc.create_product(Product(name=name, brand=brand, type=type_, price=price))
    assert created is not None
    return created


def _seed(svc: CatalogService) -> list[Product]:
    return [
        _add(svc, f"Item {n:02d}", "Acme" if n % 2 else "Zeta", "Shoes", str(n))
        for n in range(1, 13)
    ]


def test_list_products_page_with_total_count(repo: ProductsRepoSqlite) -> None:
    svc = CatalogService(repo)
    _seed(svc)
    page = svc.list_products(ProductSpecParams(brands=["acme"], page_index=2, page_size=4))
    assert page.page_index == 2
    assert page.page_size == 4
    assert page.count == 6
    assert [p.name for p in page.data] == ["Item 09", "Item 11"]


def test_page_size_is_capped_at_boundary(repo: ProductsRepoSqlite) -> None:
    svc = CatalogService(repo, max_page_size=5)
    _seed(svc)
    page = svc.list_products(ProductSpecParams(page_size=500))
    assert page.page_size == 5
    assert len(page.data) == 5
    assert page.count == 12


def test_invalid_max_page_size() -> None:
    with pytest.raises(ValueError):
        CatalogService(object(), max_page_size=0)  # type: ignore[arg-type]


def test_from_settings_uses_configured_cap(
    repo: ProductsRepoSqlite, monkeypatch: pytest.MonkeyPatch
) -> None:
    import storefront.config.settings as settings_module

    monkeypatch.setattr(
        settings_module, "settings", settings_module.Settings(max_page_size=3, default_page_size=2)
    )
    svc = CatalogService.from_settings(repo)
    _seed(svc)
    assert svc.list_products(ProductSpecParams(page_size=10)).page_size == 3


def test_get_create_and_facets(repo: ProductsRepoSqlite) -> None:
    svc = CatalogService(repo)
    created = _add(svc, "Boots", "Acme", "Shoes", "19.90")
    assert created.id > 0
    assert svc.get_product(created.id) == created
    assert svc.get_product(created.id + 100) is None
    _add(svc, "Hat", "Zeta", "Hats", "5")
    assert svc.list_brands() == ["Acme", "Zeta"]
    assert svc.list_types() == ["Hats", "Shoes"]


def test_create_failure_returns_none(repo: ProductsRepoSqlite) -> None:
    svc = CatalogService(repo)
    first = _add(svc, "Boots", "Acme", "Shoes", "1")
    clash = Product(id=first.id, name="Other", brand="Acme", type="Shoes", price=1)
    assert svc.create_product(clash) is None


def test_update_product_rules(repo: ProductsRepoSqlite) -> None:
    svc = CatalogService(repo)
    p = _add(svc, "Boots", "Acme", "Shoes", "10")

    changed = p.model_copy(update={"price": Decimal("12.00")})
    assert svc.update_product(p.id, changed) is True
    assert svc.get_product(p.id).price == Decimal("12.00")

    # Identifier mismatch
    assert svc.update_product(p.id + 1, changed) is False
    # Target does not exist
    ghost = Product(id=999, name="Ghost", brand="X", type="Y", price=1)
    assert svc.update_product(999, ghost) is False
    assert svc.get_product(p.id).price == Decimal("12.00")


def test_delete_product(repo: ProductsRepoSqlite) -> None:
    svc = CatalogService(repo)
    p = _add(svc, "Boots", "Acme", "Shoes", "10")
    assert svc.delete_product(p.id) is True
    assert svc.get_product(p.id) is None
    assert svc.delete_product(p.id) is False
