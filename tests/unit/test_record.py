from __future__ import annotations

from collections import OrderedDict

import pytest

from recordset.domain import FieldSet, RecordSet

SAMPLE_LENGTH = 5


def _assert_index_consistent(record: RecordSet) -> None:
    assert record.length == len(record.fields) == len(record)
    for position, name in enumerate(record.fields):
        assert record.field_index(name) == position
        assert 0 <= record.field_index(name) < record.length


def test_empty_record_reads_neutral_values(empty_record: RecordSet):
    assert empty_record.is_empty is True
    assert empty_record.length == 0
    assert empty_record.fields == []
    assert empty_record.get(0) is None
    assert empty_record.get_by_name("anything") == ""
    assert empty_record.field_index("anything") == -1
    assert empty_record.as_map() == {}
    assert empty_record.as_json() == "{}"


def test_empty_mapping_counts_as_empty():
    record = RecordSet({})
    assert record.is_empty is True
    assert record.length == 0


def test_construction_registers_every_entry(sample_record: RecordSet):
    assert sample_record.is_empty is False
    assert sample_record.length == SAMPLE_LENGTH
    assert sample_record.fields == ["id", "name", "age", "score", "active"]
    _assert_index_consistent(sample_record)


def test_single_entry_record_is_not_empty():
    record = RecordSet({"only": 1})
    assert record.is_empty is False
    assert record.length == 1
    assert record.get(0) == 1


def test_construction_keeps_caller_order():
    source = OrderedDict([("z", 1), ("a", 2), ("m", 3)])
    record = RecordSet(source)
    assert record.fields == ["z", "a", "m"]


@pytest.mark.parametrize("size", [1, 2, 10, 50])
def test_indices_are_distinct_and_in_range(size: int):
    record = RecordSet({f"f{i}": i for i in range(size)})
    indices = {record.field_index(name) for name in record.fields}
    assert indices == set(range(size))
    assert record.length == size


def test_fields_returns_a_copy(sample_record: RecordSet):
    sample_record.fields.append("bogus")
    assert "bogus" not in sample_record.fields
    assert sample_record.length == SAMPLE_LENGTH


def test_get_by_index(sample_record: RecordSet):
    assert sample_record.get(0) == 7
    assert sample_record.get(1) == "alice"
    assert sample_record.get(4) is True


@pytest.mark.parametrize("index", [SAMPLE_LENGTH, SAMPLE_LENGTH + 10, -1])
def test_get_out_of_range_returns_none(sample_record: RecordSet, index: int):
    assert sample_record.get(index) is None


def test_set_by_index_writes_selected_lane(sample_record: RecordSet):
    assert sample_record.set(1, "bob") is True
    assert sample_record.get(1) == "bob"

    assert sample_record.set(1, "BOB", classic=True) is True
    assert sample_record.get(1) == "bob"
    assert sample_record.classic_values[1] == "BOB"


@pytest.mark.parametrize("index", [SAMPLE_LENGTH, -1])
def test_set_out_of_range_is_a_no_op(sample_record: RecordSet, index: int):
    before = sample_record.as_map()
    assert sample_record.set(index, "x") is False
    assert sample_record.set(index, "x", classic=True) is False
    assert sample_record.as_map() == before
    assert sample_record.length == SAMPLE_LENGTH


def test_positional_read_always_serves_primary_lane(sample_record: RecordSet):
    sample_record.set(0, 700, classic=True)
    assert sample_record.get(0, classic=True) == 7
    assert sample_record.get_by_name("id", classic=True) == 7


def test_get_by_name(sample_record: RecordSet):
    assert sample_record.get_by_name("name") == "alice"
    assert sample_record.get_by_name("score") == 9.5


def test_get_by_unknown_name_is_empty_string(sample_record: RecordSet):
    assert sample_record.get_by_name("missing") == ""
    assert sample_record.get_by_name("missing", classic=True) == ""


def test_set_by_name_new_field_grows_by_one(sample_record: RecordSet):
    field = FieldSet(name="email")
    assert sample_record.set_by_name(field, "email", "a@example.com") is True

    assert sample_record.length == SAMPLE_LENGTH + 1
    assert sample_record.field_index("email") == SAMPLE_LENGTH
    assert sample_record.get_by_name("email") == "a@example.com"
    assert field.is_valid is True
    _assert_index_consistent(sample_record)


def test_set_by_name_existing_field_keeps_length(sample_record: RecordSet):
    assert sample_record.set_by_name(None, "name", "carol") is True
    assert sample_record.length == SAMPLE_LENGTH
    assert sample_record.get_by_name("name") == "carol"
    assert sample_record.classic_values[1] is None


def test_set_by_name_existing_field_classic_only_touches_classic(sample_record: RecordSet):
    sample_record.set_by_name(None, "name", "ALICE", classic=True)
    assert sample_record.get_by_name("name") == "alice"
    assert sample_record.classic_values[1] == "ALICE"
    assert sample_record.length == SAMPLE_LENGTH


def test_first_classic_write_leaves_primary_lane_absent(sample_record: RecordSet):
    sample_record.set_by_name(None, "legacy", "old", classic=True)

    index = sample_record.field_index("legacy")
    assert index == SAMPLE_LENGTH
    assert sample_record.length == SAMPLE_LENGTH + 1
    assert sample_record.get(index) is None
    assert sample_record.get_by_name("legacy") is None
    assert sample_record.classic_values[index] == "old"
    assert sample_record.as_map()["legacy"] is None
    _assert_index_consistent(sample_record)


def test_positional_write_after_classic_registration(sample_record: RecordSet):
    sample_record.set_by_name(None, "legacy", "old", classic=True)
    index = sample_record.field_index("legacy")

    assert sample_record.set(index, "new") is True
    assert sample_record.get(index) == "new"
    assert sample_record.classic_values[index] == "old"


def test_set_by_name_on_empty_record_keeps_is_empty_flag(empty_record: RecordSet):
    empty_record.set_by_name(None, "late", 1)
    assert empty_record.length == 1
    assert empty_record.get_by_name("late") == 1
    assert empty_record.is_empty is True


def test_none_values_are_stored(sample_record: RecordSet):
    sample_record.set_by_name(None, "nothing", None)
    assert "nothing" in sample_record
    assert sample_record.get_by_name("nothing") is None


def test_iteration_yields_name_value_pairs(sample_record: RecordSet):
    assert list(sample_record)[:2] == [("id", 7), ("name", "alice")]


def test_dataset_can_be_attached_and_detached(sample_record: RecordSet, dataset_factory):
    dataset = dataset_factory(sample_record.fields)
    sample_record.set_dataset(dataset)
    assert sample_record.dataset is dataset
    sample_record.set_dataset(None)
    assert sample_record.dataset is None


def test_repr_shows_primary_values():
    assert repr(RecordSet({"a": 1})) == "RecordSet({'a': 1})"
