"""
Primitive conversion helpers.

Every function here accepts any value and returns a deterministic best-effort
result; none of them raise. They back the string export of a record and the
coercion table of struct projection.
"""

from __future__ import annotations

import math
import struct
from datetime import UTC, date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from recordset.config import get_settings

ZERO_TIME = datetime(1, 1, 1, tzinfo=UTC)

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})

_FLOAT32_MAX = 3.4028234663852886e38


def wrap_int(value: int, bits: int = 64, signed: bool = True) -> int:
    """Truncate an integer to `bits` using two's-complement wraparound."""
    mask = (1 << bits) - 1
    value &= mask
    if signed and value >> (bits - 1):
        value -= 1 << bits
    return value


def _text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace").strip()
    return None


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def to_str(value: Any) -> str:
    """Render any value as text (``None`` ➜ ``""``, ``True`` ➜ ``"true"``, ``30.0`` ➜ ``"30"``)."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    try:
        return str(value)
    except Exception:  # pragma: no cover - pathological __str__
        return repr(value)


def to_bool(value: Any) -> bool:
    """Boolean coercion; unparseable strings and unknown types are ``False``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    text = _text(value)
    if text is not None:
        return text in _TRUE_STRINGS
    return False


def to_float(value: Any) -> float:
    """64-bit float coercion; failures yield ``0.0``."""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float, Decimal)):
        try:
            return float(value)
        except (OverflowError, ValueError):
            return 0.0
    text = _text(value)
    if text:
        try:
            return float(text)
        except ValueError:
            return 0.0
    return 0.0


def to_float32(value: Any) -> float:
    """Like `to_float`, rounded to IEEE-754 single precision (overflow ➜ ±inf)."""
    result = to_float(value)
    if math.isnan(result) or math.isinf(result):
        return result
    if abs(result) > _FLOAT32_MAX:
        return math.copysign(math.inf, result)
    return struct.unpack("f", struct.pack("f", result))[0]


def to_int64(value: Any) -> int:
    """
    64-bit integer coercion.

    Floats and decimals truncate toward zero, strings parse as an integer and
    then as a float, and results wrap to 64 bits. NaN, infinities, unknown
    types and parse failures yield ``0``.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return wrap_int(value)
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return 0
        return wrap_int(int(value))
    if isinstance(value, Decimal):
        try:
            return wrap_int(int(value))
        except (ValueError, OverflowError, InvalidOperation):
            return 0
    text = _text(value)
    if text:
        try:
            return wrap_int(int(text, 10))
        except ValueError:
            return to_int64(to_float(text))
    return 0


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def to_time(value: Any) -> datetime:
    """
    Timestamp coercion.

    Accepts datetimes, dates (midnight UTC), epoch seconds, ISO-8601 text and
    any layout listed in ``Settings.time_formats``. Naive results are taken as
    UTC; anything else yields `ZERO_TIME`.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, bool):
        return ZERO_TIME
    if isinstance(value, (int, float, Decimal)):
        try:
            return datetime.fromtimestamp(float(value), tz=UTC)
        except (OverflowError, OSError, ValueError):
            return ZERO_TIME
    text = _text(value)
    if not text:
        return ZERO_TIME
    try:
        return _as_utc(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        pass
    for layout in get_settings().time_formats:
        try:
            return _as_utc(datetime.strptime(text, layout))
        except ValueError:
            continue
    return ZERO_TIME


__all__ = [
    "ZERO_TIME",
    "to_bool",
    "to_float",
    "to_float32",
    "to_int64",
    "to_str",
    "to_time",
    "wrap_int",
]
