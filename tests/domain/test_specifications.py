from __future__ import annotations

from decimal import Decimal

import pytest

from storefront.domain.entities.product import Product
from storefront.domain.specifications import (
    Criterion,
    Operator,
    OrderBy,
    Paging,
    ProductSpecParams,
    Specification,
    product_filter_specification,
    product_specification,
)
from storefront.domain.value_objects.enums import SortDirection


def _p(name: str, brand: str, type_: str, price: str = "1") -> Product:
    return Product(name=name, brand=brand, type=type_, price=price)


def test_params_split_trim_and_lower() -> None:
    params = ProductSpecParams(brands="Acme, ZETA ,,", types=["Boots,hats", " Gloves "])
    assert params.brands == ["acme", "zeta"]
    assert params.types == ["boots", "hats", "gloves"]
    assert ProductSpecParams(brands=None).brands == []


@pytest.mark.parametrize("field,value", [("page_index", 0), ("page_size", 0), ("page_size", -3)])
def test_params_reject_invalid_paging(field: str, value: int) -> None:
    with pytest.raises(ValueError):
        ProductSpecParams(**{field: value})


def test_params_have_no_upper_page_size_bound() -> None:
    assert ProductSpecParams(page_size=10_000).page_size == 10_000


@pytest.mark.parametrize(
    "page_index,page_size,skip",
    [(1, 6, 0), (2, 6, 6), (3, 5, 10)],
)
def test_paging_window(page_index: int, page_size: int, skip: int) -> None:
    spec = product_specification(ProductSpecParams(page_index=page_index, page_size=page_size))
    assert spec.paging == Paging(skip=skip, take=page_size)


@pytest.mark.parametrize(
    "sort,expected",
    [
        ("priceAsc", OrderBy("price", SortDirection.ASC)),
        ("priceDesc", OrderBy("price", SortDirection.DESC)),
        ("name", OrderBy("name", SortDirection.ASC)),
        ("bogus", OrderBy("name", SortDirection.ASC)),
        (None, OrderBy("name", SortDirection.ASC)),
    ],
)
def test_ordering_from_sort_token(sort: str | None, expected: OrderBy) -> None:
    assert product_specification(ProductSpecParams(sort=sort)).order_by == expected


def test_empty_filters_match_everything() -> None:
    spec = product_specification(ProductSpecParams())
    assert spec.criteria == ()
    assert spec.is_satisfied_by(_p("A", "Anything", "Whatever"))


def test_brand_and_type_filters_are_case_insensitive_conjunction() -> None:
    spec = product_specification(ProductSpecParams(brands=["acme"], types=["BOOTS"]))
    assert spec.is_satisfied_by(_p("A", "ACME", "boots"))
    assert spec.is_satisfied_by(_p("B", "Acme", "Boots"))
    assert not spec.is_satisfied_by(_p("C", "Acme", "Hats"))
    assert not spec.is_satisfied_by(_p("D", "Zeta", "Boots"))


def test_filter_specification_has_same_criteria_without_order_or_paging() -> None:
    params = ProductSpecParams(brands=["acme"], sort="priceDesc", page_index=3)
    full = product_specification(params)
    filt = product_filter_specification(params)
    assert filt.criteria == full.criteria
    assert filt.order_by is None and filt.paging is None


def test_without_paging_keeps_criteria_and_order() -> None:
    spec = product_specification(ProductSpecParams(brands=["acme"], page_index=2))
    bare = spec.without_paging()
    assert bare.paging is None
    assert bare.criteria == spec.criteria
    assert bare.order_by == spec.order_by
    assert spec.paging is not None


@pytest.mark.parametrize("skip,take", [(-1, 5), (0, 0), (0, -2)])
def test_paging_validation(skip: int, take: int) -> None:
    with pytest.raises(ValueError):
        Paging(skip=skip, take=take)


def test_criterion_operators() -> None:
    p = _p("A", "Acme", "Boots", price="10")
    assert Criterion("price", Operator.EQ, Decimal("10.00")).matches(p)
    assert not Criterion("name", Operator.EQ, "a").matches(p)
    assert Criterion("brand", Operator.IN_CI, ["ACME", "zeta"]).matches(p)
    assert not Criterion("brand", Operator.IN_CI, []).matches(p)


@pytest.mark.parametrize("value", ["acme", b"acme"])
def test_membership_criterion_rejects_bare_string(value: object) -> None:
    with pytest.raises(ValueError):
        Criterion("brand", Operator.IN_CI, value)


def test_criterion_values_are_frozen_copies() -> None:
    brands = ["acme"]
    c = Criterion("brand", Operator.IN_CI, brands)
    brands.append("zeta")
    assert c.value == frozenset({"acme"})


def test_specification_is_hashable_value() -> None:
    a = Specification(criteria=(Criterion("brand", Operator.IN_CI, ["x"]),), order_by=OrderBy("name"))
    b = Specification(criteria=(Criterion("brand", Operator.IN_CI, ["X"]),), order_by=OrderBy("name"))
    assert a == b
    assert hash(a) == hash(b)
