"""
Shared base for partial-update schemas.

Update endpoints apply ``model_dump(exclude_unset=True)`` of the payload, so
a field that is sent is written even when its value is ``null``.
"""

from __future__ import annotations

from typing import ClassVar, FrozenSet

from pydantic import BaseModel, model_validator


class PartialUpdate(BaseModel):
    """Update schema where omitted fields keep their stored value.

    Fields listed in ``non_nullable`` back NOT NULL columns; an explicit
    ``null`` for any of them fails validation.
    """

    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self) -> "PartialUpdate":
        nulls = sorted(name for name in self.non_nullable & self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self
