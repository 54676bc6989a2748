"""
Value kinds and width markers used by struct projection.

Python has a single ``int`` and a single ``float``; fixed-width members are
declared with the ``Annotated`` aliases below so projection can narrow values
the way a native integer/float conversion would::

    @dataclass
    class Row:
        id: UInt32
        ratio: Float32
        name: str
"""

from __future__ import annotations

import enum
import types
import typing
from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated, Any, NamedTuple, Optional, Union


class Kind(str, enum.Enum):
    """Coarse value kinds the projector knows how to coerce into."""

    BOOL = "bool"
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    TIME = "time"
    DATE = "date"
    OTHER = "other"


@dataclass(frozen=True)
class Width:
    """Bit width (and signedness for integers) attached to an ``Annotated`` alias."""

    bits: int
    signed: bool = True


Int8 = Annotated[int, Width(8)]
Int16 = Annotated[int, Width(16)]
Int32 = Annotated[int, Width(32)]
Int64 = Annotated[int, Width(64)]
UInt8 = Annotated[int, Width(8, signed=False)]
UInt16 = Annotated[int, Width(16, signed=False)]
UInt32 = Annotated[int, Width(32, signed=False)]
UInt64 = Annotated[int, Width(64, signed=False)]
Float32 = Annotated[float, Width(32)]
Float64 = Annotated[float, Width(64)]


def kind_of_value(value: Any) -> Kind:
    """Return the kind of a runtime value (``bool`` is checked before ``int``)."""
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, str):
        return Kind.STRING
    if isinstance(value, int):
        return Kind.INT
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, datetime):
        return Kind.TIME
    if isinstance(value, date):
        return Kind.DATE
    return Kind.OTHER


def _unwrap_optional(annotation: Any) -> Any:
    origin = typing.get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


class MemberType(NamedTuple):
    """Resolved view of a member annotation."""

    kind: Kind
    width: Optional[Width]
    cls: Optional[type]


def resolve_annotation(annotation: Any) -> MemberType:
    """
    Map a member annotation to its kind, optional width and runtime class.

    ``Optional[X]`` resolves to ``X`` and ``Annotated[X, Width(...)]`` carries
    the width. Generic aliases resolve to their origin class (``list[int]`` ➜
    ``list``) and ``Any`` to ``object``. Anything without a coercion rule has
    ``Kind.OTHER``; its `cls` is ``None`` when no runtime class applies.
    """
    annotation = _unwrap_optional(annotation)
    width: Optional[Width] = None

    if typing.get_origin(annotation) is Annotated:
        base, *metadata = typing.get_args(annotation)
        width = next((m for m in metadata if isinstance(m, Width)), None)
        annotation = _unwrap_optional(base)

    if annotation is Any:
        return MemberType(Kind.OTHER, None, object)
    origin = typing.get_origin(annotation)
    if origin is not None or not isinstance(annotation, type):
        cls = origin if isinstance(origin, type) else None
        return MemberType(Kind.OTHER, None, cls)
    if issubclass(annotation, bool):
        return MemberType(Kind.BOOL, None, annotation)
    if issubclass(annotation, str):
        return MemberType(Kind.STRING, None, annotation)
    if issubclass(annotation, int):
        return MemberType(Kind.INT, width, annotation)
    if issubclass(annotation, float):
        return MemberType(Kind.FLOAT, width, annotation)
    if issubclass(annotation, datetime):
        return MemberType(Kind.TIME, None, annotation)
    if issubclass(annotation, date):
        return MemberType(Kind.DATE, None, annotation)
    return MemberType(Kind.OTHER, None, annotation)


__all__ = [
    "Float32",
    "Float64",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Kind",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "Width",
    "kind_of_value",
    "MemberType",
    "resolve_annotation",
]
