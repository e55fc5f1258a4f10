"""Table rows, queries, responses, typed retrieval and benchmarking for a partitioned database."""

__version__ = "0.1.0"

__all__ = ["traits", "queries", "responses", "tables", "bencher", "tmdb"]