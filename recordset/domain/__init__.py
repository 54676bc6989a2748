"""
Domain package for recordset.

Exports the record type and the field-metadata / owning-collection contracts
it works with. Keep this package focused on data definitions.
"""

from recordset.domain.dataset import AbstractDataSet, DataSet
from recordset.domain.fieldset import FieldSet, new_field_set
from recordset.domain.record import RecordSet

__all__ = [
    "AbstractDataSet",
    "DataSet",
    "FieldSet",
    "RecordSet",
    "new_field_set",
]
