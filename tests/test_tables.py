import uuid
from dataclasses import dataclass

import pytest

from shoalkit.queries import SortedInsert, UnsortedInsert
from shoalkit.responses import Response, ResponseAction, ResponseKind
from shoalkit.tables import (
    TableResponse,
    WrongTypeError,
    retrieve,
    snake_to_pascal_case,
    sorted_insert,
    unsorted_insert,
)
from shoalkit.traits import ShoalSortedTable, ShoalUnsortedTable


@dataclass
class KeyValue(ShoalUnsortedTable):
    key: int
    value: str

    @classmethod
    def table_name(cls):
        return "KeyValue"

    def get_partition_key(self):
        return self.partition_key_from_values(self.key)

    @classmethod
    def partition_key_from_values(cls, values):
        return values * 7 + 1

    @classmethod
    def is_filtered(cls, filters, row):
        return row.value == filters

    def update(self, update):
        self.value = update.update


@dataclass
class Event(ShoalSortedTable):
    group: int
    when: int

    @classmethod
    def table_name(cls):
        return "Event"

    def get_partition_key(self):
        return self.partition_key_from_values(self.group)

    @classmethod
    def partition_key_from_values(cls, values):
        return values + 100

    def get_sort(self):
        return self.when

    @classmethod
    def is_filtered(cls, filters, row):
        return row.when >= filters

    def update(self, update):
        self.when = update.update


def _get_response(table, rows):
    return TableResponse(
        table, Response(uuid.uuid4(), 0, ResponseAction(ResponseKind.GET, rows))
    )


@pytest.mark.parametrize(
    "name, expected",
    [("key_value", "KeyValue"), ("movie", "Movie"), ("Movie", "Movie")],
)
def test_snake_to_pascal_case(name, expected):
    assert snake_to_pascal_case(name) == expected


def test_snake_to_pascal_case_drops_empty_words():
    assert snake_to_pascal_case("key__value_") == snake_to_pascal_case("key_value")
    assert snake_to_pascal_case("") == ""


def test_snake_to_pascal_case_lowercases_rest():
    result = snake_to_pascal_case("KEY_VALUE")
    assert result == "KeyValue"
    assert "_" not in result


def test_retrieve_returns_rows_by_name_and_class():
    rows = [KeyValue(1, "a"), KeyValue(2, "b")]
    kind = _get_response("KeyValue", rows)
    assert retrieve(kind, "KeyValue") == rows
    assert retrieve(kind, KeyValue) == rows


def test_retrieve_missing_rows_is_none():
    assert retrieve(_get_response("KeyValue", None), KeyValue) is None


def test_retrieve_wrong_table_raises():
    kind = _get_response("Event", [Event(1, 2)])
    with pytest.raises(WrongTypeError, match="Wrong Type!"):
        retrieve(kind, KeyValue)


def test_retrieve_non_get_raises():
    kind = TableResponse(
        "KeyValue",
        Response(uuid.uuid4(), 3, ResponseAction(ResponseKind.INSERT, True)),
    )
    with pytest.raises(WrongTypeError):
        retrieve(kind, "KeyValue")


def test_table_response_properties():
    query_id = uuid.uuid4()
    response = Response(query_id, 4, ResponseAction(ResponseKind.DELETE, False))
    response.mark_end()
    kind = TableResponse("KeyValue", response)
    assert kind.index == 4
    assert kind.is_end_of_stream is True
    assert kind.query_id == query_id


def test_unsorted_insert_uses_partition_key():
    row = KeyValue(5, "x")
    query = unsorted_insert(row)
    assert query == UnsortedInsert(key=row.get_partition_key(), row=row)


def test_sorted_insert_uses_partition_key():
    row = Event(3, 9)
    query = sorted_insert(row)
    assert query == SortedInsert(key=row.get_partition_key(), row=row)


def test_inserts_reject_wrong_row_kind():
    with pytest.raises(TypeError):
        sorted_insert(KeyValue(1, "a"))
    with pytest.raises(TypeError):
        unsorted_insert(Event(1, 2))