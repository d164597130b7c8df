"""Declarative query specifications (filter, ordering, paging)."""

from .base import Criterion, Operator, OrderBy, Paging, Specification
from .products import ProductSpecParams, product_filter_specification, product_specification

__all__ = [
    "Criterion",
    "Operator",
    "OrderBy",
    "Paging",
    "ProductSpecParams",
    "Specification",
    "product_filter_specification",
    "product_specification",
]
