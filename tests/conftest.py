"""
Pytest configuration for recordset.

Provides fixtures for:
- Settings isolation (environment and cache)
- Sample records
- A minimal owning dataset
"""

from __future__ import annotations

from typing import Dict, Generator, Iterable

import pytest

from recordset.config import get_settings
from recordset.domain import AbstractDataSet, FieldSet, RecordSet


class StaticDataSet(AbstractDataSet):
    """Owning collection backed by a fixed list of field names."""

    def __init__(self, names: Iterable[str]) -> None:
        self._fields: Dict[str, FieldSet] = {name: FieldSet(name=name) for name in names}

    def fields(self) -> Dict[str, FieldSet]:
        return self._fields


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Drop RECORDSET_* overrides and the cached Settings around every test.
    """
    for name in ("RECORDSET_LOG_LEVEL", "RECORDSET_JSON_LOGS", "RECORDSET_TIME_FORMATS"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def sample_record() -> RecordSet:
    """
    Record with one field of each common kind, in a known order.
    """
    return RecordSet(
        {
            "id": 7,
            "name": "alice",
            "age": "30",
            "score": 9.5,
            "active": True,
        }
    )


@pytest.fixture
def empty_record() -> RecordSet:
    return RecordSet()


@pytest.fixture
def dataset_factory():
    """
    Build a `StaticDataSet` from field names.
    """
    return StaticDataSet
