from __future__ import annotations

from dataclasses import dataclass
from statistics import mean
from typing import Iterable, Sequence

from .process import ProcessState


@dataclass(slots=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    finish_time: int
    wait_time: int
    turnaround_time: int
    response_time: int
    slowdown: float


@dataclass(slots=True)
class AggregateMetrics:
    count: int
    mean_wait_time: float
    mean_turnaround_time: float
    mean_response_time: float
    p90_wait: float
    max_wait_time: int
    throughput: float


def build_process_metrics(processes: Iterable[ProcessState]) -> list[ProcessMetrics]:
    metrics: list[ProcessMetrics] = []
    for process in processes:
        if process.finish_time is None or process.start_time is None:
            continue
        turnaround = process.finish_time - process.arrival_time
        metrics.append(
            ProcessMetrics(
                pid=process.pid,
                arrival_time=process.arrival_time,
                burst_time=process.burst_time,
                priority=process.base_priority,
                start_time=process.start_time,
                finish_time=process.finish_time,
                wait_time=process.waiting_time,
                turnaround_time=turnaround,
                response_time=process.start_time - process.arrival_time,
                slowdown=turnaround / process.burst_time,
            ),
        )
    return metrics


def summarise(metrics: Sequence[ProcessMetrics], total_time: int) -> AggregateMetrics:
    if not metrics:
        return AggregateMetrics(
            count=0,
            mean_wait_time=0.0,
            mean_turnaround_time=0.0,
            mean_response_time=0.0,
            p90_wait=0.0,
            max_wait_time=0,
            throughput=0.0,
        )
    wait_values = [m.wait_time for m in metrics]
    return AggregateMetrics(
        count=len(metrics),
        mean_wait_time=float(mean(wait_values)),
        mean_turnaround_time=float(mean(m.turnaround_time for m in metrics)),
        mean_response_time=float(mean(m.response_time for m in metrics)),
        p90_wait=_percentile(wait_values, 90),
        max_wait_time=max(wait_values),
        throughput=len(metrics) / total_time if total_time else 0.0,
    )


def _percentile(values: Sequence[int], percentile: float) -> float:
    ordered = sorted(values)
    rank = (len(ordered) - 1) * percentile / 100
    low = int(rank)
    high = min(low + 1, len(ordered) - 1)
    return ordered[low] + (ordered[high] - ordered[low]) * (rank - low)
