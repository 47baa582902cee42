"""HandBrakeCLI encoding of confirmed jobs.

Jobs run one at a time.  The encoder's stdout is inherited by our terminal;
its stderr goes to ``<log_dir>/<output filename>.log``.
"""

from __future__ import annotations

import logging
import os
import subprocess
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from epenc.errors import EncodeFailure
from epenc.model import EncodeJob
from epenc.utils import humanize_duration

log = logging.getLogger(__name__)

_CONTAINER_FORMATS = {"mkv": "av_mkv", "mp4": "av_mp4", "m4v": "av_mp4"}


@dataclass(slots=True)
class EncoderOptions:
    handbrake: str = "HandBrakeCLI"
    extension: str = "mkv"
    video_bitrate: int = 1600
    audio_bitrate: int = 192
    encoder_preset: str = "medium"


def build_encode_cmd(job: EncodeJob, options: EncoderOptions) -> list[str]:
    """Build the HandBrakeCLI command for one job."""
    subtitles = ",".join(str(i) for i in job.subtitles)
    return [
        options.handbrake,
        "--input",
        job.input_path,
        "--title",
        str(job.title_index),
        "--output",
        job.output_path,
        "--format",
        _CONTAINER_FORMATS.get(options.extension, "av_mkv"),
        "--markers",
        "--no-optimize",
        "--encoder",
        "x264",
        "--encoder-preset",
        options.encoder_preset,
        "--encoder-profile",
        "main",
        "--encoder-level",
        "4.0",
        "--vb",
        str(options.video_bitrate),
        "--two-pass",
        "--turbo",
        "--cfr",
        "--audio-lang-list",
        job.language,
        "--all-audio",
        "--aencoder",
        "copy",
        "--audio-fallback",
        "av_aac",
        "--ab",
        str(options.audio_bitrate),
        "--mixdown",
        "dpl2",
        "--crop",
        "0:0:0:0",
        "--comb-detect",
        "--decomb",
        "--detelecine",
        "--no-deblock",
        "--no-hqdn3d",
        "--no-nlmeans",
        # Foreign-audio scan first, so a forced-only track becomes the default.
        # --subtitle-forced is not used: one track can mix forced and unforced frames.
        "--subtitle",
        f"scan,{subtitles}" if subtitles else "scan",
        "--subtitle-default",
        "1",
        "--native-language",
        job.language,
    ]


def get_dry_run_commands(jobs: list[EncodeJob], options: EncoderOptions) -> list[dict]:
    """Return the commands that would be run, without running the encoder."""
    return [
        {
            "index": i,
            "output": job.output_path,
            "exists": os.path.exists(job.output_path),
            "command": build_encode_cmd(job, options),
        }
        for i, job in enumerate(jobs, start=1)
    ]


def run_encode_jobs(
    jobs: list[EncodeJob],
    options: EncoderOptions,
    log_dir: str | Path,
    on_progress: Callable[[int, int, EncodeJob], None] | None = None,
) -> list[Path]:
    """Encode every job in order and return the files produced.

    A job whose output already exists is skipped with a warning.  A non-zero
    encoder exit raises :class:`EncodeFailure`; files from earlier jobs stay.
    """
    logs = Path(log_dir)
    logs.mkdir(parents=True, exist_ok=True)

    created: list[Path] = []
    total = len(jobs)
    for current, job in enumerate(jobs, start=1):
        if os.path.exists(job.output_path):
            log.warning("Output file already exists, skipping: %s", job.output_path)
            continue

        if on_progress is not None:
            on_progress(current, total, job)
        log.info("%3d/%d - Encoding %s...", current, total, job.output_filename)

        cmd = build_encode_cmd(job, options)
        log.debug("Encode command: %s", " ".join(cmd))

        started = time.monotonic()
        with open(logs / f"{job.output_filename}.log", "w", encoding="utf-8") as stderr_log:
            try:
                result = subprocess.run(cmd, stderr=stderr_log)
            except OSError as exc:
                raise EncodeFailure(job.output_filename, None, str(exc)) from exc
        if result.returncode != 0:
            raise EncodeFailure(job.output_filename, result.returncode)

        log.info("Completed in %s", humanize_duration(time.monotonic() - started))
        created.append(Path(job.output_path))

    return created
