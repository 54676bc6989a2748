"""
Struct projection: copy a record's values onto an annotated Python object.

The target's class (dataclass, pydantic model or any class with annotated
attributes) is scanned once into a member registry, cached per class. Each
record field is then matched to a member by exact name, or else by a casing-
and underscore-insensitive key, and its value is coerced according to the
member's declared kind:

    bool                  <- to_bool
    str                   <- to_str
    int / IntN / UIntN    <- to_int64, wrapped to the declared width
    float / Float64       <- to_float
    Float32               <- to_float32
    datetime              <- to_time
    date                  <- to_time(...).date()

Projection is best-effort per field: ``None`` values are skipped without
touching the member, and missing/unwritable members or kinds with no coercion
rule are reported as diagnostics (and logged) while the remaining fields keep
going.
"""

from __future__ import annotations

import dataclasses
import enum
import inspect
import typing
from dataclasses import dataclass, field
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional

from recordset.casting import to_bool, to_float, to_float32, to_int64, to_str, to_time, wrap_int
from recordset.types import Kind, Width, kind_of_value, resolve_annotation
from recordset.utils.logging import get_logger
from recordset.utils.naming import member_key, title_cased_name

if TYPE_CHECKING:
    from recordset.domain.record import RecordSet

log = get_logger(__name__)


class DiagnosticCode(str, enum.Enum):
    UNASSIGNABLE_MEMBER = "unassignable_member"
    UNSUPPORTED_KIND = "unsupported_kind"


@dataclass(frozen=True)
class Diagnostic:
    """One per-field anomaly met during projection."""

    field: str
    code: DiagnosticCode
    message: str


@dataclass
class ProjectionReport:
    """
    Outcome of a projection call.

    `assigned` lists target member names that were written, `skipped` lists
    record field names that were not (``None`` values included).
    """

    assigned: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def codes(self) -> Dict[str, DiagnosticCode]:
        """Record field name ➜ diagnostic code."""
        return {d.field: d.code for d in self.diagnostics}


def _coerce_int(value: Any, width: Optional[Width]) -> int:
    result = to_int64(value)
    if width is not None:
        result = wrap_int(result, width.bits, width.signed)
    return result


def _coerce_float(value: Any, width: Optional[Width]) -> float:
    if width is not None and width.bits == 32:
        return to_float32(value)
    return to_float(value)


_COERCERS: Dict[Kind, Callable[[Any, Optional[Width]], Any]] = {
    Kind.BOOL: lambda value, _: to_bool(value),
    Kind.STRING: lambda value, _: to_str(value),
    Kind.INT: _coerce_int,
    Kind.FLOAT: _coerce_float,
    Kind.TIME: lambda value, _: to_time(value),
    Kind.DATE: lambda value, _: to_time(value).date(),
}


@dataclass(frozen=True)
class Member:
    """A settable attribute of a target class."""

    name: str
    kind: Kind
    width: Optional[Width] = None
    cls: Optional[type] = None
    writable: bool = True

    def accepts(self, value: Any) -> bool:
        """True when `value` can be assigned as-is."""
        if self.kind is Kind.OTHER:
            return self.cls is not None and isinstance(value, self.cls)
        return self.width is None and kind_of_value(value) is self.kind

    def coerce(self, value: Any) -> Any:
        return _COERCERS[self.kind](value, self.width)


@dataclass(frozen=True)
class MemberRegistry:
    by_name: Mapping[str, Member]
    by_key: Mapping[str, Member]

    def resolve(self, field_name: str) -> Optional[Member]:
        member = self.by_name.get(field_name)
        if member is None:
            member = self.by_key.get(member_key(title_cased_name(field_name)))
        return member


_HINT_ERRORS = (NameError, AttributeError, SyntaxError, TypeError)


def _resolve_hint(klass: type, name: str, annotation: Any) -> Any:
    if not isinstance(annotation, str):
        return annotation
    holder = type(
        klass.__name__,
        (),
        {"__module__": klass.__module__, "__annotations__": {name: annotation}},
    )
    try:
        return typing.get_type_hints(holder, include_extras=True)[name]
    except _HINT_ERRORS:
        return annotation


def _annotations(cls: type) -> Dict[str, Any]:
    """
    Member annotations across the MRO, module names taking priority over
    class attributes (``date: date = None`` resolves to the type).

    When the class as a whole cannot be resolved (framework base classes often
    annotate with names imported only for type checking), each annotation is
    resolved on its own and unresolvable ones stay strings.
    """
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except _HINT_ERRORS:
        pass

    hints: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        for name, annotation in inspect.get_annotations(klass).items():
            hints[name] = _resolve_hint(klass, name, annotation)
    return hints


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return typing.get_origin(annotation) is typing.ClassVar


def _frozen_members(cls: type) -> Optional[set]:
    """Names that cannot be assigned, or ``None`` when the whole class is frozen."""
    if dataclasses.is_dataclass(cls) and cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
        return None
    model_config = getattr(cls, "model_config", None)
    if isinstance(model_config, dict) and model_config.get("frozen"):
        return None
    model_fields = getattr(cls, "model_fields", None)
    if isinstance(model_fields, dict):
        return {name for name, info in model_fields.items() if getattr(info, "frozen", False)}
    return set()


@lru_cache(maxsize=256)
def member_registry(cls: type) -> MemberRegistry:
    """Scan `cls` once for annotated members; results are cached per class."""
    frozen = _frozen_members(cls)
    by_name: Dict[str, Member] = {}
    by_key: Dict[str, Member] = {}

    for name, annotation in _annotations(cls).items():
        if _is_class_var(annotation):
            continue
        if isinstance(annotation, str):
            kind, width, member_cls = Kind.OTHER, None, None
        else:
            kind, width, member_cls = resolve_annotation(annotation)
        writable = not name.startswith("_") and frozen is not None and name not in frozen
        member = Member(name=name, kind=kind, width=width, cls=member_cls, writable=writable)
        by_name[name] = member
        by_key.setdefault(member_key(name), member)

    return MemberRegistry(by_name=by_name, by_key=by_key)


def _report(report: ProjectionReport, name: str, code: DiagnosticCode, message: str) -> None:
    report.skipped.append(name)
    report.diagnostics.append(Diagnostic(field=name, code=code, message=message))
    log.warning(message, extra={"field": name, "code": code.value})


def project(record: "RecordSet", target: Any, classic: bool = False) -> ProjectionReport:
    """
    Populate `target`'s annotated members from `record`.

    Parameters
    ----------
    record : RecordSet
        Source record.
    target : Any
        Instance to populate in place.
    classic : bool
        Read the classic lane instead of the primary lane.

    Returns
    -------
    ProjectionReport
        Written members, skipped fields and per-field diagnostics. The call
        itself never raises for per-field problems.
    """
    registry = member_registry(type(target))
    report = ProjectionReport()

    for index, name in enumerate(record.fields):
        member = registry.resolve(name)
        if member is None or not member.writable:
            _report(
                report,
                name,
                DiagnosticCode.UNASSIGNABLE_MEMBER,
                f"Target's field {name!r} is not valid or cannot be set",
            )
            continue

        value = record.read_lane(index, classic)
        if value is None:
            report.skipped.append(name)
            continue

        if not member.accepts(value):
            if member.kind not in _COERCERS:
                _report(
                    report,
                    name,
                    DiagnosticCode.UNSUPPORTED_KIND,
                    f"Unsupported member type {member.cls!r} for field {name!r}",
                )
                continue
            value = member.coerce(value)

        try:
            setattr(target, member.name, value)
        except (AttributeError, TypeError, ValueError) as exc:
            _report(
                report,
                name,
                DiagnosticCode.UNASSIGNABLE_MEMBER,
                f"Target rejected field {name!r}: {exc}",
            )
            continue
        report.assigned.append(member.name)

    return report


__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "Member",
    "MemberRegistry",
    "ProjectionReport",
    "member_registry",
    "project",
]
