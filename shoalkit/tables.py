"""Helpers that tie row types to the queries and responses of their table."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Optional, Union

from .queries import SortedInsert, UnsortedInsert
from .responses import Response, ResponseKind
from .traits import ShoalSortedTable, ShoalUnsortedTable


class WrongTypeError(TypeError):
    """Raised when a response does not hold the data that was asked for."""

    def __init__(self, message: str = "Wrong Type!") -> None:
        super().__init__(message)


@dataclass
class TableResponse:
    """A response tagged with the name of the table it came from."""

    table: str
    response: Response

    @property
    def index(self) -> int:
        """The position of the answered query within its bundle."""
        return self.response.index

    @property
    def is_end_of_stream(self) -> bool:
        """Whether this is the last response for its bundle."""
        return self.response.end

    @property
    def query_id(self) -> uuid.UUID:
        """The id of the query bundle this response answers."""
        return self.response.id


def snake_to_pascal_case(snake_case: str) -> str:
    """Convert a snake_case name to PascalCase."""
    return "".join(
        word[0].upper() + word[1:].lower() for word in snake_case.split("_") if word
    )


def _table_name(table: Union[str, type]) -> str:
    if isinstance(table, str):
        return table
    if isinstance(table, type):
        return table.__name__
    raise TypeError(f"not a table: {table!r}")


def retrieve(kind: TableResponse, table: Union[str, type]) -> Optional[list[Any]]:
    """Return the rows of a get response for ``table``.

    Raises WrongTypeError if the response belongs to another table or does
    not answer a get query.
    """
    if isinstance(kind, TableResponse) and kind.table == _table_name(table):
        action = kind.response.data
        if action.kind is ResponseKind.GET:
            return action.value
    raise WrongTypeError()


def sorted_insert(row: ShoalSortedTable) -> SortedInsert:
    """Build an insert query for a row of a sorted table."""
    if not isinstance(row, ShoalSortedTable):
        raise TypeError(f"{type(row).__name__} is not a sorted table row")
    return SortedInsert(key=row.get_partition_key(), row=row)


def unsorted_insert(row: ShoalUnsortedTable) -> UnsortedInsert:
    """Build an insert query for a row of an unsorted table."""
    if not isinstance(row, ShoalUnsortedTable):
        raise TypeError(f"{type(row).__name__} is not an unsorted table row")
    return UnsortedInsert(key=row.get_partition_key(), row=row)