from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence

from . import metrics
from .errors import ConfigurationError
from .process import ProcessSpec, ProcessState
from .ready_queue import ReadyQueue, compare
from .trace import NullSink, TraceSink

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationConfig:
    preemptive: bool = True
    aging_enabled: bool = False
    aging_interval: int = 5
    aging_increment: int = 1

    def __post_init__(self) -> None:
        if self.aging_enabled and self.aging_interval <= 0:
            msg = "aging_interval must be strictly positive when aging is enabled"
            raise ConfigurationError(msg)
        if self.aging_increment < 0:
            msg = "aging_increment cannot be negative"
            raise ConfigurationError(msg)


@dataclass(frozen=True, slots=True)
class TickRecord:
    time: int
    pid: int | None


@dataclass(slots=True)
class SimulationResult:
    processes: list[ProcessState]
    timeline: list[int | None]
    total_time: int
    cpu_busy_time: int
    context_switches: int
    preemptions: int
    per_process: list[metrics.ProcessMetrics] = field(default_factory=list)
    aggregate: metrics.AggregateMetrics | None = None

    @property
    def idle_time(self) -> int:
        return self.total_time - self.cpu_busy_time

    @property
    def utilization(self) -> float:
        if self.total_time == 0:
            return 0.0
        return self.cpu_busy_time / self.total_time


class Simulation:
    """Tick-driven single-CPU priority scheduler.

    Each tick applies, in order: admit arrivals, age the ready queue,
    dispatch (possibly preempting), report the tick, execute one unit of
    work, advance the clock.
    """

    def __init__(
        self,
        processes: Sequence[ProcessSpec],
        config: SimulationConfig | None = None,
        sink: TraceSink | None = None,
    ) -> None:
        if not processes:
            msg = "at least one process is required"
            raise ConfigurationError(msg)
        pids = [spec.pid for spec in processes]
        if len(set(pids)) != len(pids):
            msg = "process ids must be unique"
            raise ConfigurationError(msg)

        self.config = config or SimulationConfig()
        self.sink = sink if sink is not None else NullSink()
        self._table = [ProcessState.from_spec(spec) for spec in processes]
        self._queue = ReadyQueue(self._table)
        self._pending = deque(
            sorted(range(len(self._table)), key=lambda i: (self._table[i].arrival_time, self._table[i].pid)),
        )
        self._time = 0
        self._completed = 0
        self._current: int | None = None
        self._timeline: list[int | None] = []
        self._context_switches = 0
        self._preemptions = 0
        self._ran = False

    @property
    def time(self) -> int:
        return self._time

    @property
    def current(self) -> ProcessState | None:
        if self._current is None:
            return None
        return self._table[self._current]

    @property
    def processes(self) -> tuple[ProcessState, ...]:
        return tuple(self._table)

    @property
    def ready_queue(self) -> ReadyQueue:
        return self._queue

    @property
    def done(self) -> bool:
        return self._completed == len(self._table)

    def run(self) -> SimulationResult:
        if self._ran:
            msg = "simulation has already been run"
            raise RuntimeError(msg)
        self._ran = True
        self.sink.on_start(self.config)
        while not self.done:
            self.step()

        per_process = metrics.build_process_metrics(self._table)
        aggregate = metrics.summarise(per_process, self._time)
        self.sink.on_summary(per_process, aggregate)
        logger.info(
            "simulated %d processes in %d ticks: avg wait %.2f, avg turnaround %.2f",
            len(self._table),
            self._time,
            aggregate.mean_wait_time,
            aggregate.mean_turnaround_time,
        )
        return SimulationResult(
            processes=list(self._table),
            timeline=list(self._timeline),
            total_time=self._time,
            cpu_busy_time=sum(p.burst_time for p in self._table),
            context_switches=self._context_switches,
            preemptions=self._preemptions,
            per_process=per_process,
            aggregate=aggregate,
        )

    def step(self) -> TickRecord:
        if self.done:
            msg = "all processes have completed"
            raise RuntimeError(msg)

        self._admit_arrivals()
        self._apply_aging()
        self._dispatch()

        pid = self._table[self._current].pid if self._current is not None else None
        record = TickRecord(self._time, pid)
        self._timeline.append(pid)
        self.sink.on_tick(self._time, pid)

        self._execute_tick()
        self._time += 1
        return record

    def _admit_arrivals(self) -> None:
        while self._pending and self._table[self._pending[0]].arrival_time <= self._time:
            index = self._pending.popleft()
            self._table[index].admit(self._time)
            self._queue.push(index)
            logger.debug("t=%d admit pid=%d", self._time, self._table[index].pid)

    def _apply_aging(self) -> None:
        cfg = self.config
        if not cfg.aging_enabled or cfg.aging_interval <= 0:
            return
        if self._time == 0 or self._time % cfg.aging_interval != 0:
            return
        aged = 0
        for index in self._queue:
            process = self._table[index]
            # arrivals admitted on this tick are already queued but have not
            # waited yet, so they sit out this pass
            if process.last_ready_time == self._time:
                continue
            process.effective_priority += cfg.aging_increment
            aged += 1
        self._queue.reheapify()
        logger.debug("t=%d aged %d waiting processes by %d", self._time, aged, cfg.aging_increment)

    def _dispatch(self) -> None:
        if self._current is None:
            self._dispatch_top()
            return
        if not self.config.preemptive or self._queue.is_empty():
            return

        candidate = self._queue.peek()
        running = self._table[self._current]
        if compare(self._table[candidate], running) > 0:
            running.last_ready_time = self._time
            self._queue.push(self._current)
            self._preemptions += 1
            logger.debug(
                "t=%d pid=%d preempted by pid=%d",
                self._time,
                running.pid,
                self._table[candidate].pid,
            )
            self._current = None
            self._dispatch_top()

    def _dispatch_top(self) -> None:
        index = self._queue.pop()
        if index is None:
            return
        self._current = index
        process = self._table[index]
        process.mark_dispatched(self._time)
        self._context_switches += 1
        logger.debug(
            "t=%d dispatch pid=%d (priority %d, waited %d)",
            self._time,
            process.pid,
            process.effective_priority,
            process.waiting_time,
        )

    def _execute_tick(self) -> None:
        if self._current is None:
            return
        process = self._table[self._current]
        process.record_tick()
        if process.is_complete():
            process.finish_time = self._time + 1
            self._completed += 1
            self._current = None
            logger.debug("t=%d pid=%d completed", process.finish_time, process.pid)
