from __future__ import annotations

import logging
from pathlib import Path

import pytest

from priority_sim.__main__ import build_config, main, parse_arguments


def test_defaults() -> None:
    args = parse_arguments([])
    config = build_config(args)
    assert config.preemptive is True
    assert config.aging_enabled is False
    assert args.input is None
    assert args.quiet is False


def test_aging_and_mode_flags() -> None:
    config = build_config(parse_arguments(["--non-preemptive", "--aging", "4", "2"]))
    assert config.preemptive is False
    assert config.aging_enabled is True
    assert config.aging_interval == 4
    assert config.aging_increment == 2


def test_runs_builtin_sample(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 0
    out = capsys.readouterr().out
    lines = out.splitlines()
    assert lines[0] == "Priority Scheduling (preemptive, aging=off)"
    assert lines[1] == "Time | Running PID"
    assert "  21 | 5" in lines
    assert "PID 1: start=0 finish=16 wait=9 turnaround=16 priority=2" in lines
    assert lines[-1] == "Avg waiting=4.40, Avg turnaround=8.80"


def test_quiet_suppresses_output(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--quiet"]) == 0
    assert capsys.readouterr().out == ""


def test_reads_input_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "jobs.txt"
    path.write_text("1 0 2 3\n2 0 2 3\n", encoding="utf-8")
    assert main(["--input", str(path), "--non-preemptive"]) == 0
    out = capsys.readouterr().out
    assert "Priority Scheduling (non-preemptive, aging=off)" in out
    assert "PID 2: start=2 finish=4 wait=2 turnaround=4 priority=3" in out


def test_missing_input_file_exits_1(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        assert main(["--input", str(tmp_path / "nope.txt")]) == 1
    assert "Failed to open" in caplog.text


def test_invalid_aging_interval_exits_1(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.ERROR):
        assert main(["--aging", "0", "1", "--quiet"]) == 1
    assert "aging_interval" in caplog.text


@pytest.mark.parametrize(
    "argv",
    [
        ["--bogus"],
        ["--aging", "3"],
        ["--input"],
        ["--preemptive", "--non-preemptive"],
    ],
)
def test_usage_errors_exit_1(argv: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 1
    assert "usage:" in capsys.readouterr().err


def test_help_exits_0(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "PID ARRIVAL BURST PRIORITY" in capsys.readouterr().out


def test_undecodable_input_file_exits_1(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "jobs.bin"
    path.write_bytes(b"\xff\xfe\x00\x01")
    with caplog.at_level(logging.ERROR):
        assert main(["--input", str(path), "--quiet"]) == 1
    assert "No processes loaded" in caplog.text


def test_partially_undecodable_input_uses_rows_read(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "jobs.txt"
    path.write_bytes(b"1 0 3 2\n\xff\xfe 1 2 3\n")
    assert main(["--input", str(path)]) == 0
    assert "PID 1: start=0 finish=3 wait=0 turnaround=3 priority=2" in capsys.readouterr().out
