from __future__ import annotations

from typing import TypeVar

from storefront.domain.specifications.base import Specification

from .query import QuerySource

T = TypeVar("T")


def evaluate(source: QuerySource[T], spec: Specification[T]) -> QuerySource[T]:
    """Shape ``source`` according to ``spec``.

    Criteria are applied first, then ordering, then paging. The source is not
    modified; a new query is returned.
    """
    query = source
    if spec.criteria:
        query = query.where(spec.criteria)
    if spec.order_by is not None:
        query = query.order_by(spec.order_by)
    if spec.paging is not None:
        query = query.page(spec.paging)
    return query
