from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Entity(BaseModel):
    """Base record with an integer surrogate identifier.

    ``id == 0`` marks an entity that has not been persisted yet. The
    repository assigns the identifier when the insert is committed; after
    that it is fixed and reassigning a different value raises ``ValueError``.
    """

    id: int = Field(0, ge=0)

    model_config = ConfigDict(validate_assignment=True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "id" and self.id != 0 and value != self.id:
            raise ValueError(f"id of a persisted entity cannot change ({self.id} -> {value!r})")
        super().__setattr__(name, value)

    @property
    def is_transient(self) -> bool:
        return self.id == 0
