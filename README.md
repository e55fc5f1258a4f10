# shoalkit

Building blocks for a "batteries not included" partitioned database. It is pure Python and has no runtime dependencies.

## Modules

- **`shoalkit.traits`** defines three abstract bases: `PartitionKeySupport`, `ShoalUnsortedTable` and `ShoalSortedTable`. A row class subclasses one of them. The row class then supplies:
  - its table name (`table_name`);
  - its partition key (`get_partition_key`, `partition_key_from_values`);
  - a filter test (`is_filtered`);
  - an in-place `update`.

  Sorted rows also supply a sort key (`get_sort`).
- **`shoalkit.queries`** defines the query dataclasses for both kinds of table:
  - unsorted tables: `UnsortedInsert`, `UnsortedGet`, `UnsortedDelete`, `UnsortedUpdate`;
  - sorted tables: `SortedInsert`, `SortedGet`, `SortedDelete`, `SortedUpdate`.

  It also provides:
  - `TaggedSortedQuery` and `TaggedUnsortedQuery`, which carry a bundle id and an index;
  - `Queries`, a bundle of queries that share one UUID. `add` returns the bundle for chaining and `add_mut` adds in place;
  - `to_query`, which turns a query, an object with a `to_query()` method, or a table row into a query. Rows become inserts keyed by their partition key;
  - `partition_keys`, which lists the partition keys a query touches.
- **`shoalkit.responses`** defines `ResponseKind` (insert, get, delete, update) and `ResponseAction`. A get action holds a list of rows or `None`. Every other action holds a bool. The module also defines `Response`, which has an id, an index, an action and an `end` flag that `mark_end` sets, and `Responses`.
- **`shoalkit.tables`** provides:
  - `TableResponse`, which is a response tagged with a table name;
  - `retrieve`, which returns the rows of a get response for a given table name or row class. It raises `WrongTypeError` otherwise;
  - `sorted_insert` and `unsorted_insert`;
  - `snake_to_pascal_case`.
- **`shoalkit.bencher`** provides three classes:
  - `Bencher` times instances and a total, computes p99/p95/p90/p50, average, min and max, and prints them. When an earlier result is stored at its path, each figure is shown with its colour-coded change from that run. Slowdowns over 2% are red, smaller slowdowns and no change are blue, and speedups are green.
  - `BenchWorker` collects timings separately. Its timings are merged back with `merge_worker` or `merge_workers`.
  - `BenchResult` serializes to and from a fixed 64-byte form.

  `format_change` formats a single comparison line.
- **`shoalkit.tmdb`** is an example table for the TMDB movie data set. It provides:
  - `Movie`, an unsorted-table row whose partition key is a 64-bit hash of the movie id;
  - `MovieGet`, `MovieDelete` and `MovieUpdate`. Each has a `to_query()` method;
  - `read_movies`, which yields movies from a CSV file. List columns hold comma-separated values, and reading stops at the first row that cannot be parsed.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## A short tour

```python
from shoalkit.queries import Queries, partition_keys
from shoalkit.tmdb import Movie, MovieGet, read_movies

bundle = Queries()
for movie in read_movies("movies.csv"):
    bundle.add_mut(movie)          # an UnsortedInsert keyed by the movie's partition key
bundle = bundle.add(MovieGet(id=42).filter("Some Title"))
print([partition_keys(q) for q in bundle.queries])
```

Benchmarking a piece of work:

```python
from shoalkit.bencher import Bencher

bencher = Bencher(".benchmark", 1000)
for _ in range(1000):
    bencher.instance_start()
    do_work()
    bencher.instance_stop()
result = bencher.finish(write=True)   # prints max/p99/p95/p90/p50/average/min/total
```

Calling `instance_stop` without a running timer raises `RuntimeError`. Calling `finish` with no recorded times raises `ValueError`.

## What it does not do

shoalkit describes data and requests. It does not store or serve them. There is no server, no shard routing, no network client and no on-disk table storage. Nothing here executes a query: the queries in a `Queries` bundle are plain objects. Answering them and building `Response` objects is left to the code that uses the package. The only file the package writes is the stored `BenchResult`, and only when you call `Bencher.finish(write=True)`.