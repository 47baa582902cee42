"""Disc scanning: run the scanner, parse its output, tag titles with disc metadata."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from epenc.analyze.metadata import infer_metadata
from epenc.errors import ScanFailure
from epenc.model import DiscTitle, RawTitle
from epenc.scan.json_scan import parse_json_scan
from epenc.scan.runner import ScanOutput, run_scan
from epenc.scan.text_scan import parse_text_scan

log = logging.getLogger(__name__)

ScanParser = Callable[[str, str], list[RawTitle]]

PARSERS: dict[str, ScanParser] = {
    "json": parse_json_scan,
    "text": parse_text_scan,
}

__all__ = [
    "PARSERS",
    "get_parser",
    "parse_scan_output",
    "scan_disc",
    "to_disc_titles",
]


def get_parser(mode: str) -> ScanParser:
    try:
        return PARSERS[mode]
    except KeyError:
        raise ValueError(f"Unknown scan mode: {mode!r}") from None


def parse_scan_output(output: ScanOutput, mode: str, language: str) -> list[RawTitle]:
    """Parse captured scanner output with the parser for *mode*.

    JSON mode reads stdout only; text mode reads the log HandBrake writes to
    both streams.
    """
    parser = get_parser(mode)
    text = output.stdout if mode == "json" else output.combined
    return parser(text, language)


def to_disc_titles(disc_path: str, raw_titles: list[RawTitle]) -> list[DiscTitle]:
    """Attach filename-derived series/season/disc metadata to parsed titles."""
    disc_name = Path(disc_path).name
    meta = infer_metadata(disc_name)
    return [
        DiscTitle(
            disc_path=disc_path,
            disc_name=disc_name,
            series=meta.series,
            season=meta.season,
            disc_number=meta.disc_number,
            title_index=raw.index,
            duration_seconds=raw.duration_seconds,
            fingerprint=raw.fingerprint,
            subtitles=list(raw.subtitles),
            ticks=raw.ticks,
        )
        for raw in raw_titles
    ]


def scan_disc(
    disc_path: str,
    handbrake: str = "HandBrakeCLI",
    mode: str = "json",
    language: str = "eng",
    min_duration_s: int = 300,
) -> list[DiscTitle]:
    """Scan one disc and return its titles in scanner order.

    Raises :class:`ScanFailure` when the scanner fails or its output cannot be parsed.
    """
    output = run_scan(handbrake, disc_path, min_duration_s, json_mode=(mode == "json"))
    try:
        raw_titles = parse_scan_output(output, mode, language)
    except ValueError as exc:
        raise ScanFailure(disc_path, str(exc), stdout=output.stdout, stderr=output.stderr) from exc

    titles = to_disc_titles(disc_path, raw_titles)
    log.debug("Scanned %d title(s) from %s", len(titles), disc_path)
    return titles
