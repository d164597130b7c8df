from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Iterator, TypeVar

from storefront.domain.entities.base import Entity

E = TypeVar("E", bound=Entity)


class TransientEntityError(ValueError):
    """Raised when an operation needs a persisted entity but got a transient one."""


class ChangeKind(str, Enum):
    ADD = "ADD"
    UPDATE = "UPDATE"
    REMOVE = "REMOVE"


@dataclass(frozen=True)
class StagedChange(Generic[E]):
    kind: ChangeKind
    entity: E


class UnitOfWork(Generic[E]):
    """Explicit, ordered batch of staged changes for one repository.

    Nothing here touches storage; the owning repository flushes the batch
    on commit and then calls :meth:`clear`.
    """

    def __init__(self) -> None:
        self._changes: list[StagedChange[E]] = []

    def stage_add(self, entity: E) -> None:
        if any(c.kind is ChangeKind.ADD and c.entity is entity for c in self._changes):
            raise ValueError("Entity is already staged for insert")
        self._changes.append(StagedChange(ChangeKind.ADD, entity))

    def stage_update(self, entity: E) -> None:
        self._changes.append(StagedChange(ChangeKind.UPDATE, entity))

    def stage_remove(self, entity: E) -> None:
        if entity.is_transient:
            raise TransientEntityError("Cannot remove an entity that was never persisted")
        self._changes.append(StagedChange(ChangeKind.REMOVE, entity))

    def clear(self) -> None:
        self._changes.clear()

    def __iter__(self) -> Iterator[StagedChange[E]]:
        return iter(list(self._changes))

    def __len__(self) -> int:
        return len(self._changes)
