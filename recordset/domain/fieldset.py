"""
Field metadata for recordset.

A `FieldSet` names one field and says whether it is valid, meaning the field is
known to be populated in a record. It keeps a weak back-reference to the record
it was last resolved against. The record never owns its metadata: owning
datasets hand out their own entries, and standalone records build transient
ones on demand.
"""
from __future__ import annotations

import weakref
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field, PrivateAttr

if TYPE_CHECKING:
    from recordset.domain.record import RecordSet


class FieldSet(BaseModel):
    """
    Metadata for a single field of a record.
    """

    name: str = Field(..., description="Field name as registered in the record.")
    is_valid: bool = Field(False, description="Whether the field holds a registered value.")

    _record: Optional[weakref.ReferenceType] = PrivateAttr(default=None)

    model_config = {
        "validate_assignment": True,
    }

    @property
    def record(self) -> Optional["RecordSet"]:
        """The record this entry was last resolved against, if it is still alive."""
        return self._record() if self._record is not None else None

    def bind(self, record: Optional["RecordSet"]) -> "FieldSet":
        """Point the back-reference at `record` (or clear it) and return self."""
        self._record = weakref.ref(record) if record is not None else None
        return self


def new_field_set(name: str, record: Optional["RecordSet"] = None) -> FieldSet:
    """Build a transient, not-yet-valid entry bound to `record`."""
    return FieldSet(name=name).bind(record)


__all__ = ["FieldSet", "new_field_set"]
