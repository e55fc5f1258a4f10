"""Query types for sorted and unsorted shoal tables."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .traits import ShoalSortedTable, ShoalUnsortedTable


@dataclass
class SortedInsert:
    """Insert a row into a sorted table."""

    key: int
    row: Any


@dataclass
class SortedGet:
    """Get rows from one or more partitions of a sorted table."""

    partition_keys: list[int]
    sort_keys: list[Any] = field(default_factory=list)
    filters: Optional[Any] = None
    limit: Optional[int] = None


@dataclass
class SortedDelete:
    """Delete the row with ``sort_key`` from a partition of a sorted table."""

    key: int
    sort_key: Any


@dataclass
class SortedUpdate:
    """Update the row with ``sort_key`` in a partition of a sorted table."""

    partition_key: int
    sort_key: Any
    update: Any


@dataclass
class UnsortedInsert:
    """Insert a row into an unsorted table."""

    key: int
    row: Any


@dataclass
class UnsortedGet:
    """Get the row of a partition in an unsorted table."""

    partition_key: int
    filters: Optional[Any] = None
    limit: Optional[int] = None


@dataclass
class UnsortedDelete:
    """Delete the row of a partition in an unsorted table."""

    key: int


@dataclass
class UnsortedUpdate:
    """Update the row of a partition in an unsorted table."""

    partition_key: int
    update: Any


SortedQuery = Union[SortedInsert, SortedGet, SortedDelete, SortedUpdate]
UnsortedQuery = Union[UnsortedInsert, UnsortedGet, UnsortedDelete, UnsortedUpdate]

_QUERY_TYPES = (
    SortedInsert,
    SortedGet,
    SortedDelete,
    SortedUpdate,
    UnsortedInsert,
    UnsortedGet,
    UnsortedDelete,
    UnsortedUpdate,
)


@dataclass
class TaggedSortedQuery:
    """A sorted query tagged with its bundle id and position in the bundle."""

    id: uuid.UUID
    index: int
    query: SortedQuery


@dataclass
class TaggedUnsortedQuery:
    """An unsorted query tagged with its bundle id and position in the bundle."""

    id: uuid.UUID
    index: int
    query: UnsortedQuery


def to_query(item: Any) -> Any:
    """Turn a query, a query builder or a table row into a query.

    Rows become inserts keyed by their partition key.
    """
    if isinstance(item, _QUERY_TYPES):
        return item
    converter = getattr(item, "to_query", None)
    if callable(converter):
        return converter()
    if isinstance(item, ShoalSortedTable):
        return SortedInsert(key=item.get_partition_key(), row=item)
    if isinstance(item, ShoalUnsortedTable):
        return UnsortedInsert(key=item.get_partition_key(), row=item)
    raise TypeError(f"cannot build a query from {type(item).__name__}")


def partition_keys(query: Any) -> list[int]:
    """Return the partition keys a query touches, in order."""
    match query:
        case TaggedSortedQuery() | TaggedUnsortedQuery():
            return partition_keys(query.query)
        case SortedInsert(key=key) | SortedDelete(key=key):
            return [key]
        case UnsortedInsert(key=key) | UnsortedDelete(key=key):
            return [key]
        case SortedGet():
            return list(query.partition_keys)
        case UnsortedGet(partition_key=key):
            return [key]
        case SortedUpdate(partition_key=key) | UnsortedUpdate(partition_key=key):
            return [key]
    raise TypeError(f"not a query: {type(query).__name__}")


@dataclass
class Queries:
    """A bundle of queries sent together under one id."""

    id: uuid.UUID = field(default_factory=uuid.uuid4)
    queries: list[Any] = field(default_factory=list)

    def add(self, query: Any) -> Queries:
        """Add a query to the bundle and return the bundle for chaining."""
        self.queries.append(to_query(query))
        return self

    def add_mut(self, query: Any) -> None:
        """Add a query to the bundle in place."""
        self.queries.append(to_query(query))