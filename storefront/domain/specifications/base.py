"""Specification primitives.

A :class:`Specification` describes a query over one entity type as plain
data: AND-combined filter terms, at most one sort key and an optional paging
window. Query sources interpret that data; the in-memory evaluation offered
by :meth:`Specification.is_satisfied_by` is the reference semantics every
source must agree with.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from ..value_objects.enums import SortDirection

T = TypeVar("T")


class Operator(str, Enum):
    EQ = "eq"
    IN_CI = "in_ci"  # case-insensitive membership


def fold(value: Any) -> Any:
    """Normalise a value for case-insensitive comparison."""
    return value.casefold() if isinstance(value, str) else value


@dataclass(frozen=True)
class Criterion:
    """Single filter term ``<field> <operator> <value>``."""

    field: str
    op: Operator
    value: Any

    def __post_init__(self) -> None:
        if self.op is Operator.IN_CI:
            if isinstance(self.value, (str, bytes)):
                raise ValueError(f"{self.op.value} needs a collection of values, got {self.value!r}")
            # Stored folded and frozen so matching never depends on caller input
            object.__setattr__(self, "value", frozenset(fold(v) for v in self.value))

    def matches(self, entity: Any) -> bool:
        actual = getattr(entity, self.field)
        if self.op is Operator.EQ:
            return bool(actual == self.value)
        return fold(actual) in self.value


@dataclass(frozen=True)
class OrderBy:
    field: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC


@dataclass(frozen=True)
class Paging:
    skip: int
    take: int

    def __post_init__(self) -> None:
        if self.skip < 0:
            raise ValueError(f"skip must be >= 0, got {self.skip}")
        if self.take <= 0:
            raise ValueError(f"take must be > 0, got {self.take}")


@dataclass(frozen=True)
class Specification(Generic[T]):
    criteria: tuple[Criterion, ...] = field(default_factory=tuple)
    order_by: Optional[OrderBy] = None
    paging: Optional[Paging] = None

    def is_satisfied_by(self, entity: T) -> bool:
        return all(c.matches(entity) for c in self.criteria)

    def without_paging(self) -> "Specification[T]":
        return replace(self, paging=None)
