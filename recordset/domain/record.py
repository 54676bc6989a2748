"""
The record: an ordered set of named fields holding untyped values.

Each field owns one slot with two lanes: the primary value and a "classic"
value (an alternate representation such as a pre-cast or legacy-typed value).
Both lanes share the field's index, and either may be absent. Fields are
registered in insertion order and never removed.

Usage:
    from recordset.domain import RecordSet

    rec = RecordSet({"id": 7, "name": "alice"})
    rec.get_by_name("name")          # "alice"
    rec.set_by_name(None, "age", 30) # registers a new field
    rec.as_json()                    # '{"id": 7, "name": "alice", "age": 30}'
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from recordset.casting import to_str
from recordset.domain.dataset import DataSet
from recordset.domain.fieldset import FieldSet, new_field_set
from recordset.errors import EncodingError
from recordset.projection import ProjectionReport, project


class _Absent:
    """Marker for a lane that was never written."""

    _instance: Optional["_Absent"] = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "<absent>"

    def __bool__(self) -> bool:
        return False


_ABSENT: Any = _Absent()


@dataclass
class _Slot:
    value: Any = _ABSENT
    classic: Any = _ABSENT

    def read(self, classic: bool = False) -> Any:
        return self.classic if classic else self.value

    def write(self, value: Any, classic: bool = False) -> None:
        if classic:
            self.classic = value
        else:
            self.value = value


def _present(value: Any) -> Any:
    return None if value is _ABSENT else value


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class RecordSet:
    """
    One row / entity worth of named, positionally indexed values.

    Positional misses return ``None`` (reads) or ``False`` (writes) and unknown
    names read as ``""``. Instances are not synchronized; callers sharing one
    across threads must lock around it.
    """

    def __init__(
        self,
        record: Optional[Mapping[str, Any]] = None,
        dataset: Optional[DataSet] = None,
    ) -> None:
        self._dataset: Optional[DataSet] = dataset
        self._fields: List[str] = []
        self._slots: List[_Slot] = []
        self._name_index: Dict[str, int] = {}

        for name, value in (record or {}).items():
            self._register(name, _Slot(value=value))

        self._is_empty = not self._fields

    def _register(self, name: str, slot: _Slot) -> int:
        index = len(self._fields)
        self._name_index[name] = index
        self._fields.append(name)
        self._slots.append(slot)
        return index

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._slots)

    # ------------------------------------------------------------------ #
    # introspection
    # ------------------------------------------------------------------ #
    @property
    def length(self) -> int:
        """Number of registered fields."""
        return len(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        for name, slot in zip(self._fields, self._slots):
            yield name, _present(slot.value)

    def __contains__(self, name: object) -> bool:
        return name in self._name_index

    def __repr__(self) -> str:
        return f"RecordSet({self.as_map()!r})"

    @property
    def is_empty(self) -> bool:
        """True when the record was constructed without any fields."""
        return self._is_empty

    @property
    def fields(self) -> List[str]:
        """Field names in registration order."""
        return list(self._fields)

    @property
    def classic_values(self) -> List[Any]:
        """The classic lane aligned to `fields`; unwritten entries are ``None``."""
        return [_present(slot.classic) for slot in self._slots]

    def field_index(self, name: str) -> int:
        """Position of `name`, or ``-1`` when it is not registered."""
        return self._name_index.get(name, -1)

    @property
    def dataset(self) -> Optional[DataSet]:
        return self._dataset

    def set_dataset(self, dataset: Optional[DataSet]) -> None:
        self._dataset = dataset

    # ------------------------------------------------------------------ #
    # positional access
    # ------------------------------------------------------------------ #
    def get(self, index: int, classic: bool = False) -> Any:
        """
        Primary value at `index`, or ``None`` when out of range or unwritten.

        `classic` mirrors `set` but positional reads always serve the primary lane.
        """
        if not self._in_range(index):
            return None
        return _present(self._slots[index].value)

    def set(self, index: int, value: Any, classic: bool = False) -> bool:
        """Write the selected lane at `index`; ``False`` when out of range."""
        if not self._in_range(index):
            return False
        self._slots[index].write(value, classic)
        return True

    # ------------------------------------------------------------------ #
    # named access
    # ------------------------------------------------------------------ #
    def get_by_name(self, name: str, classic: bool = False) -> Any:
        """Value of `name`; an unregistered name reads as ``""``."""
        index = self._name_index.get(name)
        if index is None:
            return ""
        return self.get(index, classic)

    def set_by_name(
        self,
        field: Optional[FieldSet],
        name: str,
        value: Any,
        classic: bool = False,
    ) -> bool:
        """
        Write `value` into the lane selected by `classic`, registering `name`
        on first use.

        A first write only fills the selected lane; the other lane of the new
        slot stays absent. `field`, when given, is marked valid since the
        record now holds a value for it.
        """
        if field is not None:
            field.is_valid = True

        index = self._name_index.get(name)
        if index is not None:
            return self.set(index, value, classic)

        slot = _Slot()
        slot.write(value, classic)
        self._register(name, slot)
        return True

    # ------------------------------------------------------------------ #
    # field metadata
    # ------------------------------------------------------------------ #
    def field_by_name(self, name: str) -> FieldSet:
        """
        Metadata for `name`, preferring the attached dataset's entry even when
        the dataset's field count differs from this record's length.

        Without a matching dataset entry a transient one is built, valid only
        if `name` is registered in this record.
        """
        if self._dataset is not None:
            field = self._dataset.fields().get(name)
            if field is not None:
                return field.bind(self)

        field = new_field_set(name, self)
        field.is_valid = name in self._name_index
        return field

    def field_by_index(self, index: int) -> Optional[FieldSet]:
        """
        Metadata for the field at `index`, or ``None``.

        With a dataset attached, ``None`` is also returned when the dataset's
        field count disagrees with this record's length.
        """
        if not self._in_range(index):
            return None

        name = self._fields[index]
        if self._dataset is not None:
            dataset_fields = self._dataset.fields()
            if len(dataset_fields) != self.length:
                return None
            field = dataset_fields.get(name)
            return field.bind(self) if field is not None else None

        field = new_field_set(name, self)
        field.is_valid = True
        return field

    # ------------------------------------------------------------------ #
    # exports
    # ------------------------------------------------------------------ #
    def as_str_map(self) -> Dict[str, str]:
        """Field name ➜ primary value rendered as text."""
        return self.merge_to_str_map({})

    def merge_to_str_map(self, target: Dict[str, str]) -> Dict[str, str]:
        """Write the text rendering of every field into `target` and return it."""
        for name, value in self:
            target[name] = to_str(value)
        return target

    def as_map(self) -> Dict[str, Any]:
        """Field name ➜ primary value, untransformed."""
        return dict(self)

    def as_json(self) -> str:
        """
        Serialize `as_map()` to JSON text.

        Timestamps are written as ISO-8601 and decimals as fixed-point text.
        NaN and infinities are not valid JSON and are rejected.

        Raises
        ------
        EncodingError
            If a value is cyclic or of a type JSON cannot represent.
        """
        try:
            return json.dumps(self.as_map(), default=_json_default, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise EncodingError(str(exc)) from exc

    def as_struct(self, target: Any, classic: bool = False) -> ProjectionReport:
        """
        Populate `target`'s annotated attributes from this record.

        See `recordset.projection.project` for the coercion rules.
        """
        return project(self, target, classic=classic)

    def read_lane(self, index: int, classic: bool = False) -> Any:
        """Value of the selected lane at `index`; ``None`` when unwritten or out of range."""
        if not self._in_range(index):
            return None
        return _present(self._slots[index].read(classic))


__all__ = ["RecordSet"]
