from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence, TextIO

if TYPE_CHECKING:
    from .metrics import AggregateMetrics, ProcessMetrics
    from .simulator import SimulationConfig


class TraceSink(ABC):
    """Observer for what the engine does each tick and how the run ended."""

    def on_start(self, config: SimulationConfig) -> None:
        """Hook invoked once before the first tick."""

    @abstractmethod
    def on_tick(self, time: int, pid: int | None) -> None:
        """Record who occupies the CPU during ``time``; ``None`` means idle."""

    @abstractmethod
    def on_summary(self, per_process: Sequence[ProcessMetrics], aggregate: AggregateMetrics) -> None:
        """Record the end-of-run statistics."""


class NullSink(TraceSink):
    """Quiet mode: observes nothing."""

    def on_tick(self, time: int, pid: int | None) -> None:
        pass

    def on_summary(self, per_process: Sequence[ProcessMetrics], aggregate: AggregateMetrics) -> None:
        pass


class TextTraceSink(TraceSink):
    """Writes the human-readable tick table and results block."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def on_start(self, config: SimulationConfig) -> None:
        mode = "preemptive" if config.preemptive else "non-preemptive"
        aging = "on" if config.aging_enabled else "off"
        self._write(f"Priority Scheduling ({mode}, aging={aging})")
        self._write("Time | Running PID")
        self._write("------------------")

    def on_tick(self, time: int, pid: int | None) -> None:
        running = "idle" if pid is None else str(pid)
        self._write(f"{time:4d} | {running}")

    def on_summary(self, per_process: Sequence[ProcessMetrics], aggregate: AggregateMetrics) -> None:
        self._write("\nResults:")
        for m in per_process:
            self._write(
                f"PID {m.pid}: start={m.start_time} finish={m.finish_time} wait={m.wait_time} "
                f"turnaround={m.turnaround_time} priority={m.priority}",
            )
        self._write(
            f"\nAvg waiting={aggregate.mean_wait_time:.2f}, Avg turnaround={aggregate.mean_turnaround_time:.2f}",
        )

    def _write(self, line: str) -> None:
        print(line, file=self._stream)


@dataclass(slots=True)
class RecordingSink(TraceSink):
    """Keeps every observation in memory."""

    ticks: list[tuple[int, int | None]] = field(default_factory=list)
    per_process: list[ProcessMetrics] = field(default_factory=list)
    aggregate: AggregateMetrics | None = None

    def on_tick(self, time: int, pid: int | None) -> None:
        self.ticks.append((time, pid))

    def on_summary(self, per_process: Sequence[ProcessMetrics], aggregate: AggregateMetrics) -> None:
        self.per_process = list(per_process)
        self.aggregate = aggregate
