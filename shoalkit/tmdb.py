"""A movie table for TMDB data and the queries that go with it."""

from __future__ import annotations

import csv
import hashlib
from dataclasses import InitVar, dataclass, field, fields
from pathlib import Path
from typing import Any, Callable, Iterator, Optional, Union

from .queries import UnsortedDelete, UnsortedGet, UnsortedInsert, UnsortedUpdate
from .traits import ShoalUnsortedTable

_U64_LIMIT = 1 << 64


def partition_key(value: int) -> int:
    """Hash a movie id into a 64-bit partition key."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"a movie id must be an int, not {type(value).__name__}")
    if not 0 <= value < _U64_LIMIT:
        raise ValueError(f"a movie id must fit in an unsigned 64-bit int: {value}")
    digest = hashlib.blake2b(value.to_bytes(8, "little"), digest_size=8).digest()
    return int.from_bytes(digest, "little")


def _parse_u64(text: str) -> int:
    value = int(text.strip())
    if not 0 <= value < _U64_LIMIT:
        raise ValueError(f"value out of range for an unsigned 64-bit int: {text!r}")
    return value


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"not a boolean: {text!r}")


def _parse_list(text: str) -> list[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


_PARSERS: dict[str, Callable[[str], Any]] = {
    "id": _parse_u64,
    "vote_count": _parse_u64,
    "revenue": _parse_u64,
    "runtime": _parse_u64,
    "budget": _parse_u64,
    "vote_average": float,
    "popularity": float,
    "adult": _parse_bool,
    "genres": _parse_list,
    "production_companies": _parse_list,
    "production_countries": _parse_list,
    "spoken_languages": _parse_list,
    "keywords": _parse_list,
}


@dataclass
class Movie(ShoalUnsortedTable):
    """A movie row; each partition holds a single movie keyed by its id."""

    id: int
    title: str
    vote_average: float = 0.0
    vote_count: int = 0
    status: str = ""
    release_date: str = ""
    revenue: int = 0
    runtime: int = 0
    adult: bool = False
    backdrop_path: str = ""
    budget: int = 0
    homepage: str = ""
    imdb_id: str = ""
    original_language: str = ""
    original_title: str = ""
    overview: str = ""
    popularity: float = 0.0
    poster_path: str = ""
    tagline: str = ""
    genres: list[str] = field(default_factory=list)
    production_companies: list[str] = field(default_factory=list)
    production_countries: list[str] = field(default_factory=list)
    spoken_languages: list[str] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)

    @classmethod
    def table_name(cls) -> str:
        """Return the name of the movies table."""
        return "Movies"

    def get_partition_key(self) -> int:
        """Return the partition key for this movie."""
        return self.partition_key_from_values(self.id)

    @classmethod
    def partition_key_from_values(cls, values: int) -> int:
        """Return the partition key for a movie id."""
        return partition_key(values)

    @classmethod
    def is_filtered(cls, filters: str, row: Movie) -> bool:
        """Return True if the movie's title equals the filter."""
        return row.title == filters

    def update(self, update: UnsortedUpdate) -> None:
        """Replace this movie's overview with the update's data."""
        self.overview = update.update

    def to_query(self) -> UnsortedInsert:
        """Build an insert query for this movie."""
        return UnsortedInsert(key=self.get_partition_key(), row=self)

    @classmethod
    def from_csv_row(cls, row: dict[str, str]) -> Movie:
        """Build a movie from a CSV row keyed by column name.

        List columns hold comma separated values. Raises ValueError when a
        column is missing or cannot be parsed.
        """
        values: dict[str, Any] = {}
        for movie_field in fields(cls):
            name = movie_field.name
            raw = row.get(name)
            if raw is None:
                raise ValueError(f"missing column: {name}")
            parser = _PARSERS.get(name, str)
            try:
                values[name] = parser(raw)
            except ValueError as error:
                raise ValueError(f"bad value for {name}: {raw!r}") from error
        return cls(**values)


@dataclass
class MovieGet:
    """A query for one movie by id."""

    id: int
    filters: Optional[str] = None
    limit: Optional[int] = None

    def filter(self, value: Any) -> MovieGet:
        """Only return the movie if its title equals ``value``."""
        self.filters = str(value)
        return self

    def to_query(self) -> UnsortedGet:
        """Build the get query for this movie."""
        return UnsortedGet(
            partition_key=partition_key(self.id),
            filters=self.filters,
            limit=self.limit,
        )


@dataclass
class MovieDelete:
    """A query deleting the movie with the given id."""

    key: InitVar[int]
    partition_key: int = field(init=False)

    def __post_init__(self, key: int) -> None:
        self.partition_key = partition_key(key)

    def to_query(self) -> UnsortedDelete:
        """Build the delete query for this movie."""
        return UnsortedDelete(key=self.partition_key)


@dataclass
class MovieUpdate:
    """A query replacing the overview of the movie with the given id."""

    key: InitVar[int]
    data: str
    partition_key: int = field(init=False)

    def __post_init__(self, key: int) -> None:
        self.partition_key = partition_key(key)
        self.data = str(self.data)

    def to_query(self) -> UnsortedUpdate:
        """Build the update query for this movie."""
        return UnsortedUpdate(partition_key=self.partition_key, update=self.data)


def read_movies(path: Union[str, Path]) -> Iterator[Movie]:
    """Yield the movies of a TMDB CSV file.

    Reading stops at the first row that cannot be parsed.
    """
    with open(path, newline="", encoding="utf-8") as handle:
        for row in csv.DictReader(handle):
            try:
                movie = Movie.from_csv_row(row)
            except ValueError:
                return
            yield movie