"""
Exception types raised by recordset.

Only JSON export produces a caller-visible failure; lookups signal misses with
sentinel returns and struct projection reports per-field problems as
diagnostics instead of raising.
"""

from __future__ import annotations


class RecordSetError(Exception):
    """Base class for recordset errors."""


class EncodingError(RecordSetError, ValueError):
    """A record value could not be serialized to JSON."""


__all__ = ["EncodingError", "RecordSetError"]
