from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from epenc.errors import ScanFailure

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ScanOutput:
    stdout: str
    stderr: str

    @property
    def combined(self) -> str:
        return self.stdout + "\n" + self.stderr


def build_scan_cmd(handbrake: str, disc_path: str, min_duration_s: int, json_mode: bool) -> list[str]:
    """Build the scanner command that lists every title of at least *min_duration_s*."""
    cmd = [
        handbrake,
        "--input",
        disc_path,
        "--title",
        "0",
        "--min-duration",
        str(min_duration_s),
        "--scan",
    ]
    if json_mode:
        cmd.append("--json")
    return cmd


def run_scan(handbrake: str, disc_path: str, min_duration_s: int, json_mode: bool = True) -> ScanOutput:
    """Run the scanner to completion and return its captured output."""
    cmd = build_scan_cmd(handbrake, disc_path, min_duration_s, json_mode)
    log.debug("Scan command: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise ScanFailure(disc_path, str(exc)) from exc
    if result.returncode != 0:
        raise ScanFailure(
            disc_path,
            f"scanner exited with status {result.returncode}",
            stdout=result.stdout,
            stderr=result.stderr,
        )
    return ScanOutput(stdout=result.stdout, stderr=result.stderr)
