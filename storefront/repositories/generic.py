from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from storefront.domain.entities.base import Entity
from storefront.domain.specifications.base import Specification

E = TypeVar("E", bound=Entity)


class GenericRepo(ABC, Generic[E]):
    """Repository interface shared by every persisted entity type.

    Reads hit storage directly. ``add``/``update``/``remove`` only stage
    changes; nothing is written until :meth:`save_all` is called.
    """

    @abstractmethod
    def get_by_id(self, entity_id: int) -> Optional[E]:
        """Return the entity with ``entity_id`` or ``None`` when absent."""

    @abstractmethod
    def list_all(self) -> list[E]:
        """Return every persisted entity in identifier order."""

    @abstractmethod
    def list_by_spec(self, spec: Specification[E]) -> list[E]:
        """Return the entities selected by ``spec`` (filtered, ordered, paged)."""

    @abstractmethod
    def count_by_spec(self, spec: Specification[E]) -> int:
        """Count the entities matching ``spec``; paging is ignored."""

    @abstractmethod
    def add(self, entity: E) -> None:
        """Stage an insert. The identifier is assigned by :meth:`save_all`."""

    @abstractmethod
    def update(self, entity: E) -> None:
        """Stage a whole-entity replace by identifier."""

    @abstractmethod
    def remove(self, entity: E) -> None:
        """Stage a delete by identifier.

        :raises TransientEntityError: if ``entity`` was never persisted.
        """

    @abstractmethod
    def exists(self, entity_id: int) -> bool:
        """Return whether an entity with ``entity_id`` is persisted."""

    @abstractmethod
    def save_all(self) -> bool:
        """Commit every staged change atomically.

        :return: ``False`` if nothing was written, a staged update or delete
            matched no row, or storage rejected the batch. In all of those
            cases no change from the batch is persisted.
        """
