from __future__ import annotations

from priority_sim import ProcessSpec, Simulation, SimulationConfig, SimulationResult


def specs(*rows: tuple[int, int, int, int]) -> list[ProcessSpec]:
    return [ProcessSpec(*row) for row in rows]


def simulate(processes: list[ProcessSpec], **config: object) -> SimulationResult:
    return Simulation(processes, config=SimulationConfig(**config)).run()


def outcome(result: SimulationResult) -> dict[int, tuple[int, int, int, int]]:
    """pid -> (start, finish, wait, turnaround)"""

    return {m.pid: (m.start_time, m.finish_time, m.wait_time, m.turnaround_time) for m in result.per_process}
