"""Tick-driven simulator for priority-based CPU scheduling."""

from .errors import ConfigurationError, WorkloadError
from .process import ProcessSpec, ProcessState
from .ready_queue import ReadyQueue, compare
from .simulator import Simulation, SimulationConfig, SimulationResult, TickRecord
from . import metrics
from . import trace
from . import workload

__all__ = [
	"ConfigurationError",
	"WorkloadError",
	"ProcessSpec",
	"ProcessState",
	"ReadyQueue",
	"compare",
	"Simulation",
	"SimulationConfig",
	"SimulationResult",
	"TickRecord",
	"metrics",
	"trace",
	"workload",
]
