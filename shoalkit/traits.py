"""Interfaces that rows stored in shoal tables implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .queries import SortedUpdate, UnsortedUpdate


class PartitionKeySupport(ABC):
    """A row type that knows its table name and how to compute partition keys."""

    @classmethod
    @abstractmethod
    def table_name(cls) -> str:
        """Return the name of the table this row type lives in."""

    @abstractmethod
    def get_partition_key(self) -> int:
        """Return the partition key for this row."""

    @classmethod
    @abstractmethod
    def partition_key_from_values(cls, values: Any) -> int:
        """Compute a partition key from the values that identify a partition."""


class ShoalUnsortedTable(PartitionKeySupport):
    """A table where every partition holds exactly one row."""

    @classmethod
    @abstractmethod
    def is_filtered(cls, filters: Any, row: Any) -> bool:
        """Return True if ``row`` matches ``filters``."""

    @abstractmethod
    def update(self, update: UnsortedUpdate) -> None:
        """Apply an update to this row in place."""


class ShoalSortedTable(PartitionKeySupport):
    """A table where each partition holds several rows ordered by a sort key."""

    @abstractmethod
    def get_sort(self) -> Any:
        """Return the sort key for this row."""

    @classmethod
    @abstractmethod
    def is_filtered(cls, filters: Any, row: Any) -> bool:
        """Return True if ``row`` matches ``filters``."""

    @abstractmethod
    def update(self, update: SortedUpdate) -> None:
        """Apply an update to this row in place."""