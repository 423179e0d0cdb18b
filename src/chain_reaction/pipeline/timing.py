# topmark:header:start
#
#   project      : ChainReaction
#   file         : timing.py
#   file_relpath : src/chain_reaction/pipeline/timing.py
#   license      : MIT
#   copyright    : (c) 2025 Chain Reaction contributors
#
# topmark:header:end

"""Step timing: a monotonic `Clock` and the append-only `TimingLog`.

Durations are integer nanoseconds taken from a monotonic counter
(`time.perf_counter_ns` by default). The counter is injectable so tests can
drive a deterministic clock.

One `TimingRecord` is appended per step that actually executes; steps skipped
after a failure leave no record. Records are kept in execution order and are
never reordered or deduplicated.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar, overload

from chain_reaction.config.model import DEFAULT_PRECISION, DEFAULT_TIME_UNIT, TimeUnit

if TYPE_CHECKING:
    from typing import Any

R = TypeVar("R")


class Clock:
    """Monotonic duration measurement around a unit of work.

    Args:
        now (Callable[[], int] | None): Monotonic nanosecond counter
            (default: `time.perf_counter_ns`).
    """

    def __init__(self, now: Callable[[], int] | None = None) -> None:
        self._now: Callable[[], int] = now or time.perf_counter_ns

    def now(self) -> int:
        """Current reading of the monotonic counter, in nanoseconds."""
        return self._now()

    def time(self, fn: Callable[..., R], *args: Any) -> tuple[R, int]:
        """Call ``fn(*args)`` and return its result with the elapsed nanoseconds.

        Exceptions raised by ``fn`` propagate unchanged.

        Args:
            fn (Callable[..., R]): The unit of work.
            *args (Any): Positional arguments for ``fn``.

        Returns:
            tuple[R, int]: ``(result, duration_ns)``; the duration is never negative.
        """
        start: int = self._now()
        result: R = fn(*args)
        return result, max(0, self._now() - start)


@dataclass(frozen=True, slots=True)
class TimingRecord:
    """Duration of one executed step.

    Attributes:
        index (int): 0-based position of the step in the pipeline's step sequence.
        label (str): Step label (for branches, includes the branch taken).
        duration_ns (int): Non-negative execution time in nanoseconds.
    """

    index: int
    label: str
    duration_ns: int

    def __post_init__(self) -> None:
        if self.duration_ns < 0:
            raise ValueError(f"duration_ns must be >= 0 (got {self.duration_ns})")

    @property
    def seconds(self) -> float:
        """Duration in seconds."""
        return self.duration_ns / 1_000_000_000

    def format_duration(
        self,
        unit: TimeUnit = DEFAULT_TIME_UNIT,
        precision: int = DEFAULT_PRECISION,
    ) -> str:
        """Render the duration, e.g. ``"12.345 us"``."""
        return format_duration(self.duration_ns, unit, precision)


def format_duration(
    duration_ns: int,
    unit: TimeUnit = DEFAULT_TIME_UNIT,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Render ``duration_ns`` in ``unit`` with ``precision`` decimals."""
    return f"{duration_ns / unit.nanoseconds:.{precision}f} {unit.value}"


class TimingLog(Sequence[TimingRecord]):
    """Ordered, append-only sequence of `TimingRecord`.

    Indices must strictly increase from one record to the next: the log mirrors
    execution order, and a step executes at most once per run.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Sequence[TimingRecord] = ()) -> None:
        self._records: list[TimingRecord] = []
        for record in records:
            self.append(record)

    def append(self, record: TimingRecord) -> None:
        """Append ``record``.

        Raises:
            ValueError: If ``record.index`` does not follow the last recorded index.
        """
        if self._records and record.index <= self._records[-1].index:
            raise ValueError(
                f"TimingLog is append-only in execution order: index {record.index} "
                f"after {self._records[-1].index}"
            )
        self._records.append(record)

    def record(self, index: int, label: str, duration_ns: int) -> TimingRecord:
        """Build and append a record; return it."""
        rec = TimingRecord(index=index, label=label, duration_ns=duration_ns)
        self.append(rec)
        return rec

    @overload
    def __getitem__(self, i: int) -> TimingRecord: ...
    @overload
    def __getitem__(self, i: slice) -> Sequence[TimingRecord]: ...
    def __getitem__(self, i: int | slice) -> TimingRecord | Sequence[TimingRecord]:
        if isinstance(i, slice):
            return tuple(self._records[i])
        return self._records[i]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TimingRecord]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TimingLog):
            return self._records == other._records
        return NotImplemented

    def __repr__(self) -> str:
        return f"TimingLog({self._records!r})"

    @property
    def records(self) -> tuple[TimingRecord, ...]:
        """Snapshot of the records."""
        return tuple(self._records)

    @property
    def total_ns(self) -> int:
        """Sum of all recorded durations."""
        return sum(r.duration_ns for r in self._records)

    def labels(self) -> list[str]:
        """Labels of the recorded steps, in execution order."""
        return [r.label for r in self._records]

    def render(
        self,
        unit: TimeUnit = DEFAULT_TIME_UNIT,
        precision: int = DEFAULT_PRECISION,
    ) -> str:
        """Render the log as an aligned plain-text table (one line per record)."""
        if not self._records:
            return "(no steps executed)"
        width: int = max(len("total"), *(len(r.label) for r in self._records))
        lines: list[str] = [
            f"{r.index:>3}  {r.label:<{width}}  {r.format_duration(unit, precision):>14}"
            for r in self._records
        ]
        total: str = format_duration(self.total_ns, unit, precision)
        lines.append(f"{'':>3}  {'total':<{width}}  {total:>14}")
        return "\n".join(lines)
