"""Parser for HandBrake ``--scan --json`` output."""

from __future__ import annotations

import json
import re

from epenc.analyze.signatures import fingerprint_from_ticks
from epenc.model import RawTitle
from epenc.scan.tracks import select_subtitle_tracks

# HandBrake prints progress JSON blocks first; the title set is the last block.
_TITLE_SET_RE = re.compile(r"JSON Title Set: (\{.*)\Z", re.DOTALL)


def extract_title_set(output: str) -> dict:
    """Pull the ``JSON Title Set`` document out of raw scanner stdout."""
    m = _TITLE_SET_RE.search(output.rstrip())
    if m is None:
        raise ValueError("no 'JSON Title Set' found in scanner output")
    try:
        data = json.loads(m.group(1))
    except json.JSONDecodeError as exc:
        raise ValueError(f"malformed JSON title set: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("JSON title set is not an object")
    return data


def _parse_title(entry: dict, language: str) -> RawTitle:
    duration = entry["Duration"]
    seconds = duration["Hours"] * 3600 + duration["Minutes"] * 60 + duration["Seconds"]
    ticks = duration["Ticks"]
    chapter_ticks = [chapter["Duration"]["Ticks"] for chapter in entry["ChapterList"]]
    languages = [sub["LanguageCode"] for sub in entry["SubtitleList"]]
    return RawTitle(
        index=int(entry["Index"]),
        duration_seconds=int(seconds),
        fingerprint=fingerprint_from_ticks(ticks, chapter_ticks),
        subtitles=select_subtitle_tracks(languages, language),
        ticks=int(ticks),
        chapter_ticks=chapter_ticks,
    )


def parse_json_scan(output: str, language: str = "eng") -> list[RawTitle]:
    """Parse every entry of ``TitleList`` in scanner order."""
    data = extract_title_set(output)
    try:
        entries = data["TitleList"]
        return [_parse_title(entry, language) for entry in entries]
    except (KeyError, TypeError) as exc:
        raise ValueError(f"unexpected title set structure: missing {exc}") from exc
