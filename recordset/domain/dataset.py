"""
Owning-collection interfaces.

A dataset (result set, table, entity collection) owns the authoritative field
metadata for the records it produces. Records only read it through `fields()`;
the single mutation they perform is flipping `FieldSet.is_valid` on entries
they populate.
"""

from __future__ import annotations

import abc
from typing import Dict, Protocol, runtime_checkable

from recordset.domain.fieldset import FieldSet


@runtime_checkable
class DataSet(Protocol):
    """
    Common interface any owning collection must implement.
    """

    def fields(self) -> Dict[str, FieldSet]:
        """
        Return field metadata keyed by field name.

        Returns
        -------
        Dict[str, FieldSet]
            One entry per field the collection knows about. Its length is
            compared against a record's length as a consistency check.
        """
        ...


class AbstractDataSet(abc.ABC):
    """
    Optional ABC helper for class-based implementations.
    """

    @abc.abstractmethod
    def fields(self) -> Dict[str, FieldSet]:  # pragma: no cover - interface only
        """Return field metadata keyed by field name."""
        raise NotImplementedError


__all__ = [
    "AbstractDataSet",
    "DataSet",
]
