from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn, Sequence

from .errors import ConfigurationError, WorkloadError
from .simulator import Simulation, SimulationConfig
from .trace import NullSink, TextTraceSink, TraceSink
from .workload import load_workload, sample_workload

logger = logging.getLogger("priority_sim")


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = _ArgumentParser(
        prog="priority-sim",
        description="Simulate priority-based CPU scheduling of a fixed batch of processes.",
        epilog="Input file format: each line => PID ARRIVAL BURST PRIORITY",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--preemptive",
        dest="preemptive",
        action="store_true",
        default=True,
        help="Let a higher-priority arrival displace the running process (default).",
    )
    mode.add_argument(
        "--non-preemptive",
        dest="preemptive",
        action="store_false",
        help="Run each dispatched process to completion.",
    )
    parser.add_argument(
        "--aging",
        nargs=2,
        type=int,
        metavar=("INTERVAL", "INCREMENT"),
        help="Every INTERVAL ticks raise the priority of waiting processes by INCREMENT.",
    )
    parser.add_argument("--input", type=str, default=None, help="Workload file; defaults to a built-in sample.")
    parser.add_argument("--quiet", action="store_true", help="Suppress the trace and results output.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Diagnostic log level written to stderr.",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    if args.aging is None:
        return SimulationConfig(preemptive=args.preemptive)
    interval, increment = args.aging
    return SimulationConfig(
        preemptive=args.preemptive,
        aging_enabled=True,
        aging_interval=interval,
        aging_increment=increment,
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s: %(message)s", stream=sys.stderr)

    try:
        processes = load_workload(args.input) if args.input else sample_workload()
        config = build_config(args)
        sink: TraceSink = NullSink() if args.quiet else TextTraceSink(sys.stdout)
        simulation = Simulation(processes, config=config, sink=sink)
    except (WorkloadError, ConfigurationError) as exc:
        logger.error("%s", exc)
        return 1

    simulation.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
