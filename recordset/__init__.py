"""
recordset - dynamically typed records for dataset/ORM layers.

A `RecordSet` holds one row or entity as an ordered set of named fields. It supports:

- Lookup and update by name or by position, with an alternate "classic" value lane
- Field metadata resolution against an optional owning dataset
- Export to plain dicts, string dicts and JSON
- Projection onto annotated Python objects with kind-directed type coercion
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from recordset.config import Settings, get_settings
from recordset.domain import AbstractDataSet, DataSet, FieldSet, RecordSet, new_field_set
from recordset.errors import EncodingError, RecordSetError
from recordset.projection import Diagnostic, DiagnosticCode, ProjectionReport
from recordset.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "AbstractDataSet",
    "DataSet",
    "FieldSet",
    "RecordSet",
    "new_field_set",
    # Errors
    "EncodingError",
    "RecordSetError",
    # Projection
    "Diagnostic",
    "DiagnosticCode",
    "ProjectionReport",
    # Logging
    "configure_logging",
    "get_logger",
]
