import csv
from dataclasses import fields

import pytest

from shoalkit.queries import (
    Queries,
    UnsortedDelete,
    UnsortedGet,
    UnsortedInsert,
    UnsortedUpdate,
    partition_keys,
)
from shoalkit.tmdb import (
    Movie,
    MovieDelete,
    MovieGet,
    MovieUpdate,
    partition_key,
    read_movies,
)


def _row(**overrides):
    row = {f.name: "" for f in fields(Movie)}
    row.update(
        id="550",
        title="Fight Club",
        vote_average="8.4",
        vote_count="27238",
        revenue="100853753",
        runtime="139",
        adult="False",
        budget="63000000",
        popularity="61.416",
        genres="Drama, Thriller",
        keywords="dual identity,nihilism",
    )
    row.update(overrides)
    return row


def _write_csv(path, rows):
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=[f.name for f in fields(Movie)])
        writer.writeheader()
        writer.writerows(rows)


def test_table_name():
    assert Movie.table_name() == "Movies"


def test_partition_key_is_deterministic_and_64_bit():
    assert partition_key(550) == partition_key(550)
    assert 0 <= partition_key(550) < 2**64
    assert partition_key(550) != partition_key(551)


@pytest.mark.parametrize("bad", [-1, 2**64])
def test_partition_key_rejects_out_of_range(bad):
    with pytest.raises(ValueError):
        partition_key(bad)


def test_partition_key_rejects_non_int():
    with pytest.raises(TypeError):
        partition_key("550")


def test_movie_partition_key_matches_id():
    movie = Movie(id=13, title="Forrest Gump")
    assert movie.get_partition_key() == partition_key(13)
    assert Movie.partition_key_from_values(13) == partition_key(13)


def test_movie_to_query_is_insert():
    movie = Movie(id=13, title="Forrest Gump")
    query = movie.to_query()
    assert isinstance(query, UnsortedInsert)
    assert query.key == partition_key(13)
    assert query.row is movie


def test_queries_bundle_accepts_movies_and_builders():
    movie = Movie(id=13, title="Forrest Gump")
    bundle = Queries().add(movie).add(MovieGet(13)).add(MovieDelete(13))
    assert [type(q) for q in bundle.queries] == [UnsortedInsert, UnsortedGet, UnsortedDelete]
    assert [partition_keys(q) for q in bundle.queries] == [[partition_key(13)]] * 3


def test_is_filtered_compares_title():
    movie = Movie(id=13, title="Forrest Gump")
    assert Movie.is_filtered("Forrest Gump", movie) is True
    assert Movie.is_filtered("Heat", movie) is False


def test_movie_get_filter_and_query():
    get = MovieGet(550).filter("Fight Club")
    assert get.filters == "Fight Club"
    query = get.to_query()
    assert query == UnsortedGet(partition_key=partition_key(550), filters="Fight Club", limit=None)


def test_movie_delete_query():
    delete = MovieDelete(550)
    assert delete.partition_key == partition_key(550)
    assert delete.to_query() == UnsortedDelete(key=partition_key(550))


def test_movie_update_applies_overview():
    update = MovieUpdate(550, "A new overview")
    query = update.to_query()
    assert query == UnsortedUpdate(partition_key=partition_key(550), update="A new overview")
    movie = Movie(id=550, title="Fight Club", overview="old")
    movie.update(query)
    assert movie.overview == "A new overview"


def test_from_csv_row_parses_types():
    movie = Movie.from_csv_row(_row())
    assert movie.id == 550
    assert movie.title == "Fight Club"
    assert movie.vote_average == 8.4
    assert movie.adult is False
    assert movie.genres == ["Drama", "Thriller"]
    assert movie.keywords == ["dual identity", "nihilism"]
    assert movie.production_companies == []


def test_from_csv_row_missing_column():
    row = _row()
    del row["title"]
    with pytest.raises(ValueError):
        Movie.from_csv_row(row)


@pytest.mark.parametrize("column,value", [("id", "abc"), ("adult", "maybe"), ("budget", "-5")])
def test_from_csv_row_bad_value(column, value):
    with pytest.raises(ValueError):
        Movie.from_csv_row(_row(**{column: value}))


def test_read_movies_round_trip(tmp_path):
    path = tmp_path / "movies.csv"
    _write_csv(path, [_row(), _row(id="13", title="Forrest Gump", adult="true")])
    movies = list(read_movies(path))
    assert [m.id for m in movies] == [550, 13]
    assert movies[1].title == "Forrest Gump"
    assert movies[1].adult is True
    assert movies[0] == Movie.from_csv_row(_row())


def test_read_movies_stops_at_bad_row(tmp_path):
    path = tmp_path / "movies.csv"
    _write_csv(path, [_row(), _row(id=""), _row(id="13", title="Forrest Gump")])
    movies = list(read_movies(path))
    assert [m.id for m in movies] == [550]