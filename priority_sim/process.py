from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ProcessSpec:
    """Immutable process description as read from a workload."""

    pid: int
    arrival_time: int
    burst_time: int
    base_priority: int

    def __post_init__(self) -> None:
        if self.burst_time <= 0:
            msg = f"process {self.pid}: burst_time must be strictly positive"
            raise ConfigurationError(msg)
        if self.arrival_time < 0:
            msg = f"process {self.pid}: arrival_time cannot be negative"
            raise ConfigurationError(msg)


@dataclass(slots=True)
class ProcessState:
    """Mutable accounting record owned by the engine for one process.

    ``waiting_time`` is the accumulated time spent in the ready queue; it
    does not yet include the current stay while the process is queued.
    """

    spec: ProcessSpec
    remaining_time: int
    effective_priority: int
    started: bool = False
    start_time: Optional[int] = None
    finish_time: Optional[int] = None
    last_ready_time: Optional[int] = None
    waiting_time: int = 0

    @classmethod
    def from_spec(cls, spec: ProcessSpec) -> ProcessState:
        return cls(spec=spec, remaining_time=spec.burst_time, effective_priority=spec.base_priority)

    def admit(self, now: int) -> None:
        self.effective_priority = self.spec.base_priority
        self.last_ready_time = now

    def mark_dispatched(self, now: int) -> None:
        if not self.started:
            self.started = True
            self.start_time = now
        if self.last_ready_time is not None:
            self.waiting_time += now - self.last_ready_time

    def record_tick(self) -> None:
        self.remaining_time -= 1

    def is_complete(self) -> bool:
        return self.remaining_time == 0

    def sort_key(self) -> tuple[int, int, int]:
        """Ascending key: higher priority, then earlier arrival, then smaller pid."""

        return (-self.effective_priority, self.spec.arrival_time, self.spec.pid)

    @property
    def pid(self) -> int:
        return self.spec.pid

    @property
    def arrival_time(self) -> int:
        return self.spec.arrival_time

    @property
    def burst_time(self) -> int:
        return self.spec.burst_time

    @property
    def base_priority(self) -> int:
        return self.spec.base_priority

    @property
    def executed_time(self) -> int:
        return self.spec.burst_time - self.remaining_time

    @property
    def turnaround_time(self) -> Optional[int]:
        if self.finish_time is None:
            return None
        return self.finish_time - self.spec.arrival_time
