from __future__ import annotations

from typing import Generic, Iterable, Protocol, Sequence, TypeVar

from storefront.domain.specifications.base import Criterion, OrderBy, Paging

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


class QuerySource(Protocol[T_co]):
    """Lazily composed query over one entity type.

    Every method returns a new source; the receiver is left untouched.
    """

    def where(self, criteria: Sequence[Criterion]) -> "QuerySource[T_co]": ...

    def order_by(self, ordering: OrderBy) -> "QuerySource[T_co]": ...

    def page(self, paging: Paging) -> "QuerySource[T_co]": ...

    def to_list(self) -> list[T_co]: ...

    def count(self) -> int: ...


class InMemoryQuery(Generic[T]):
    """:class:`QuerySource` over an in-memory snapshot of entities.

    Sorting is stable, so equal keys keep the order of the snapshot.

    Example:
        >>> from types import SimpleNamespace as NS
        >>> q = InMemoryQuery([NS(n=2), NS(n=1)])
        >>> [e.n for e in q.order_by(OrderBy("n")).to_list()]
        [1, 2]
    """

    def __init__(self, items: Iterable[T]) -> None:
        self._items: tuple[T, ...] = tuple(items)

    def where(self, criteria: Sequence[Criterion]) -> "InMemoryQuery[T]":
        return InMemoryQuery(
            item for item in self._items if all(c.matches(item) for c in criteria)
        )

    def order_by(self, ordering: OrderBy) -> "InMemoryQuery[T]":
        return InMemoryQuery(
            sorted(
                self._items,
                key=lambda item: getattr(item, ordering.field),
                reverse=ordering.descending,
            )
        )

    def page(self, paging: Paging) -> "InMemoryQuery[T]":
        return InMemoryQuery(self._items[paging.skip : paging.skip + paging.take])

    def to_list(self) -> list[T]:
        return list(self._items)

    def count(self) -> int:
        return len(self._items)
