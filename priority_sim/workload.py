from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from .errors import ConfigurationError, WorkloadError
from .process import ProcessSpec

logger = logging.getLogger(__name__)

# PID, arrival, burst, priority
SAMPLE_ROWS: tuple[tuple[int, int, int, int], ...] = (
    (1, 0, 7, 2),
    (2, 2, 4, 4),
    (3, 4, 1, 6),
    (4, 5, 4, 3),
    (5, 6, 6, 1),
)


def sample_workload() -> list[ProcessSpec]:
    return [ProcessSpec(*row) for row in SAMPLE_ROWS]


def parse_workload(lines: Iterable[str], *, source: str = "<input>") -> list[ProcessSpec]:
    """Read ``PID ARRIVAL BURST PRIORITY`` rows until EOF or the first malformed line.

    Blank lines are skipped. A well-formed row that describes an invalid
    process is an error rather than an end marker.
    """

    processes: list[ProcessSpec] = []
    for lineno, line in enumerate(lines, start=1):
        fields = line.split()
        if not fields:
            continue
        try:
            if len(fields) != 4:
                raise ValueError(line.strip())
            pid, arrival, burst, priority = (int(value) for value in fields)
        except ValueError:
            logger.warning("%s:%d: stopping at malformed line %r", source, lineno, line.strip())
            break
        try:
            processes.append(ProcessSpec(pid, arrival, burst, priority))
        except ConfigurationError as exc:
            msg = f"{source}:{lineno}: {exc}"
            raise WorkloadError(msg) from exc
    return processes


def load_workload(path: str | Path) -> list[ProcessSpec]:
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"Failed to open {path}: {exc.strerror or exc}"
        raise WorkloadError(msg) from exc
    processes = parse_workload(_decoded_lines(raw, source=str(path)), source=str(path))
    if not processes:
        msg = f"No processes loaded from {path}"
        raise WorkloadError(msg)
    return processes


def _decoded_lines(raw: bytes, *, source: str) -> Iterator[str]:
    for lineno, line in enumerate(raw.splitlines(), start=1):
        try:
            text = line.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("%s:%d: stopping at undecodable line", source, lineno)
            return
        yield text
