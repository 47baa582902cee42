"""Tests for the scanner subprocess boundary."""

from __future__ import annotations

import subprocess

import pytest

from epenc.errors import ScanFailure
from epenc.scan import scan_disc
from epenc.scan.runner import build_scan_cmd


def _fake_run(returncode: int, stdout: str = "", stderr: str = ""):
    calls: list[list[str]] = []

    def _run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    _run.calls = calls
    return _run


def test_scan_cmd() -> None:
    cmd = build_scan_cmd("HandBrakeCLI", "/discs/A", 300, json_mode=True)
    assert cmd == [
        "HandBrakeCLI",
        "--input",
        "/discs/A",
        "--title",
        "0",
        "--min-duration",
        "300",
        "--scan",
        "--json",
    ]
    assert "--json" not in build_scan_cmd("HandBrakeCLI", "/discs/A", 300, json_mode=False)


def test_scan_disc_json(monkeypatch, json_scan_output: str) -> None:
    fake = _fake_run(0, stdout=json_scan_output)
    monkeypatch.setattr(subprocess, "run", fake)

    titles = scan_disc("/discs/MyShow-Season1-Disc1", min_duration_s=120)

    assert len(titles) == 4
    assert titles[0].series == "My Show"
    assert fake.calls[0][fake.calls[0].index("--min-duration") + 1] == "120"


def test_scan_disc_text(monkeypatch, text_scan_output: str) -> None:
    monkeypatch.setattr(subprocess, "run", _fake_run(0, stderr=text_scan_output))
    titles = scan_disc("/discs/Deadwood_S1_D2", mode="text")
    assert [t.key for t in titles] == ["02-01", "02-02", "02-03"]
    assert titles[0].season == 1


def test_nonzero_exit_is_scan_failure(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", _fake_run(1, stdout="out", stderr="libdvdread: error"))
    with pytest.raises(ScanFailure) as excinfo:
        scan_disc("/discs/Broken-D1")
    assert excinfo.value.stderr == "libdvdread: error"
    assert excinfo.value.disc_path == "/discs/Broken-D1"


def test_unparsable_output_is_scan_failure(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", _fake_run(0, stdout="no titles here"))
    with pytest.raises(ScanFailure, match="JSON Title Set"):
        scan_disc("/discs/Odd-D1")


def test_missing_scanner_is_scan_failure(monkeypatch) -> None:
    def _missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(subprocess, "run", _missing)
    with pytest.raises(ScanFailure):
        scan_disc("/discs/A-D1", handbrake="/nope/HandBrakeCLI")


def test_text_log_without_titles_is_scan_failure(monkeypatch) -> None:
    monkeypatch.setattr(subprocess, "run", _fake_run(0, stderr="hb_init: starting libhb thread\n"))
    with pytest.raises(ScanFailure, match="title"):
        scan_disc("/discs/Deadwood_S1_D2", mode="text")
