"""Timing benchmarks with percentiles, stored results and coloured comparisons."""

from __future__ import annotations

import math
import struct
import time
from dataclasses import astuple, dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

_BRIGHT_RED = "\x1b[91m"
_BRIGHT_GREEN = "\x1b[92m"
_BRIGHT_BLUE = "\x1b[94m"
_RESET = "\x1b[39m"

_RESULT_FORMAT = struct.Struct("<8Q")

Clock = Callable[[], int]


def _format_duration(nanos: int, precision: Optional[int] = None) -> str:
    """Format a duration in nanoseconds with a unit of s, ms, µs or ns."""
    if nanos >= 1_000_000_000:
        divisor, unit = 1_000_000_000, "s"
    elif nanos >= 1_000_000:
        divisor, unit = 1_000_000, "ms"
    elif nanos >= 1_000:
        divisor, unit = 1_000, "µs"
    else:
        divisor, unit = 1, "ns"
    value = Decimal(nanos) / Decimal(divisor)
    if precision is None:
        text = format(value.normalize(), "f")
    else:
        text = format(value.quantize(Decimal(1).scaleb(-precision), ROUND_HALF_UP), "f")
    return f"{text}{unit}"


def _colour(text: str, code: str) -> str:
    return f"{code}{text}{_RESET}"


def format_change(name: str, prior: int, current: int) -> str:
    """Describe ``current`` against ``prior`` (both in nanoseconds) as a coloured line.

    Slowdowns over 2% are red, smaller slowdowns and no change are blue and
    speedups are green.
    """
    if prior < current:
        diff = current - prior
        change = diff / prior * 100.0 if prior else math.inf
        text = f"+{_format_duration(diff, 2)} (+{change:.2f}%)"
        code = _BRIGHT_RED if diff > prior * 0.02 else _BRIGHT_BLUE
        described = _colour(text, code)
    elif prior == current:
        described = _colour(f"{_format_duration(0, 2)} (0.00%)", _BRIGHT_BLUE)
    else:
        diff = prior - current
        change = diff / prior * 100.0
        described = _colour(f"-{_format_duration(diff, 2)} (-{change:.2f}%)", _BRIGHT_GREEN)
    return f"{name}: {_format_duration(current, 2)} ({described})"


@dataclass(frozen=True)
class BenchResult:
    """The summary of one benchmark run; every field is in nanoseconds."""

    max: int
    p99: int
    p95: int
    p90: int
    p50: int
    avg: int
    min: int
    total: int

    def to_bytes(self) -> bytes:
        """Serialize this result."""
        return _RESULT_FORMAT.pack(*astuple(self))

    @classmethod
    def from_bytes(cls, data: bytes) -> BenchResult:
        """Load a result written by :meth:`to_bytes`."""
        if len(data) != _RESULT_FORMAT.size:
            raise ValueError(
                f"benchmark result must be {_RESULT_FORMAT.size} bytes, got {len(data)}"
            )
        return cls(*_RESULT_FORMAT.unpack(data))

    def _labelled(self) -> list[tuple[str, int]]:
        return [
            ("max", self.max),
            ("p99", self.p99),
            ("p95", self.p95),
            ("p90", self.p90),
            ("p50", self.p50),
            ("average", self.avg),
            ("min", self.min),
            ("total", self.total),
        ]


@dataclass
class BenchWorker:
    """Collects instance timings in one worker, to be merged into a Bencher."""

    clock: Clock = time.perf_counter_ns
    instance: Optional[int] = None
    instance_times: list[int] = field(default_factory=list)

    def instance_start(self) -> None:
        """Start timing an instance."""
        self.instance = self.clock()

    def instance_stop(self) -> None:
        """Stop timing the current instance and record its duration."""
        if self.instance is None:
            raise RuntimeError("NO INSTANT TIMER ACTIVE?")
        self.instance_times.append(self.clock() - self.instance)
        self.instance = None


class Bencher:
    """Times instances and a total, and compares the outcome with a stored prior run."""

    def __init__(
        self,
        path: Union[str, Path],
        instances: int = 0,
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        self.path = Path(path)
        self.clock = clock
        self.prior: Optional[BenchResult] = (
            BenchResult.from_bytes(self.path.read_bytes()) if self.path.exists() else None
        )
        self.total_timer_start = clock()
        self.total_timer_end: Optional[int] = None
        self.instance: Optional[int] = None
        self.instance_times: list[int] = []
        self._sorted = False

    def worker(self, instances: int) -> BenchWorker:
        """Return a new worker sharing this bencher's clock."""
        return BenchWorker(clock=self.clock)

    def merge_worker(self, worker: BenchWorker) -> None:
        """Move a worker's timings into this bencher."""
        self.instance_times.extend(worker.instance_times)
        worker.instance_times.clear()
        self._sorted = False

    def merge_workers(self, workers: Iterable[BenchWorker]) -> None:
        """Move the timings of several workers into this bencher."""
        for worker in workers:
            self.merge_worker(worker)

    def reset_total_time_start(self) -> None:
        """Restart the total timer from now."""
        self.total_timer_start = self.clock()

    def instance_start(self) -> None:
        """Start timing an instance."""
        self.instance = self.clock()

    def instance_stop(self) -> None:
        """Stop timing the current instance and record its duration."""
        if self.instance is None:
            raise RuntimeError("NO INSTANT TIMER ACTIVE?")
        self.instance_times.append(self.clock() - self.instance)
        self.instance = None
        self._sorted = False

    def stop_total(self) -> None:
        """Stop the total timer now."""
        self.total_timer_end = self.clock()

    def percentile(self, percentile: float) -> int:
        """Return the recorded time at ``percentile`` (0.0 to 1.0)."""
        if not self.instance_times:
            raise ValueError(f"Failed to get p{percentile}: no times recorded")
        if not self._sorted:
            self.instance_times.sort()
            self._sorted = True
        index = min(math.ceil(len(self.instance_times) * percentile), len(self.instance_times) - 1)
        return self.instance_times[index]

    def report(self, result: BenchResult) -> list[str]:
        """Print a result, compared with the prior run when there is one, and return the lines."""
        if self.prior is not None:
            lines = [
                format_change(name, prior, current)
                for (name, prior), (_, current) in zip(self.prior._labelled(), result._labelled())
            ]
        else:
            lines = [f"{name}: {_format_duration(value)}" for name, value in result._labelled()]
        for line in lines:
            print(line)
        return lines

    def finish(self, write: bool) -> BenchResult:
        """Summarize the recorded times, print them and optionally store them at ``path``."""
        end = self.total_timer_end if self.total_timer_end is not None else self.clock()
        total = end - self.total_timer_start
        if not self.instance_times:
            raise ValueError("no instance times recorded")
        p99 = self.percentile(0.99)
        p95 = self.percentile(0.95)
        p90 = self.percentile(0.90)
        p50 = self.percentile(0.50)
        avg = sum(self.instance_times) // len(self.instance_times)
        result = BenchResult(
            max=max(self.instance_times),
            p99=p99,
            p95=p95,
            p90=p90,
            p50=p50,
            avg=avg,
            min=min(self.instance_times),
            total=total,
        )
        self.report(result)
        if write:
            self.path.write_bytes(result.to_bytes())
        return result