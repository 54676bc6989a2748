"""
Utilities package for recordset.

Exports shared helpers for logging and name casing.
Keep this package lightweight and free of domain-specific logic.
"""

from recordset.utils.logging import configure_logging, get_logger
from recordset.utils.naming import member_key, title_cased_name

__all__ = [
    "configure_logging",
    "get_logger",
    "member_key",
    "title_cased_name",
]
