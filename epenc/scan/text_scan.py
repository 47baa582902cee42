"""Parser for HandBrake's line-oriented scan log.

Each title is a block introduced by ``+ title N:``; the lines we need are::

    + title 1:
      + vts 1, ttn 1, cells 0->12 (2364934 blocks)
      + duration: 00:42:13
      + chapters:
        + 1: cells 0->0, 194040 blocks, duration 00:03:28
      + subtitle tracks:
        + 1, English (iso639-2: eng) (Bitmap)(VOBSUB)

Blu-ray sources have no block counts; their fingerprint falls back to a
digest of the title and chapter durations.
"""

from __future__ import annotations

import re

from epenc.analyze.signatures import fingerprint_from_blocks, fingerprint_from_ticks
from epenc.model import TICKS_PER_SECOND, RawTitle
from epenc.scan.tracks import select_subtitle_tracks

_TITLE_RE = re.compile(r"^\+ title (\d+):")
_BLOCKS_RE = re.compile(r"^\+ vts .*\((\d+) blocks\)")
_DURATION_RE = re.compile(r"^\+ duration: (\d+):(\d{2}):(\d{2})")
_CHAPTER_RE = re.compile(r"^\+ \d+: .*duration (\d+):(\d{2}):(\d{2})")
_SUBTITLE_RE = re.compile(r"^\+ (\d+), .*\(iso639-2: ([a-z]{3})\)")
_SECTION_RE = re.compile(r"^\+ ([a-z ]+):$")
# HandBrake's own report when nothing passed --min-duration
_NO_TITLES_RE = re.compile(r"scan thread found 0 valid title")


def _clock_seconds(m: re.Match) -> int:
    h, mins, s = (int(g) for g in m.groups()[-3:])
    return h * 3600 + mins * 60 + s


class _TitleBlock:
    def __init__(self, index: int) -> None:
        self.index = index
        self.duration: int | None = None
        self.blocks: int | None = None
        self.chapters: list[int] = []
        self.languages: list[str] = []

    def build(self, language: str) -> RawTitle:
        if self.duration is None:
            raise ValueError(f"title {self.index} has no duration line")
        if self.blocks is not None:
            fingerprint = fingerprint_from_blocks(self.blocks)
        else:
            fingerprint = fingerprint_from_ticks(
                self.duration * TICKS_PER_SECOND,
                [c * TICKS_PER_SECOND for c in self.chapters],
            )
        return RawTitle(
            index=self.index,
            duration_seconds=self.duration,
            fingerprint=fingerprint,
            subtitles=select_subtitle_tracks(self.languages, language),
            ticks=self.duration * TICKS_PER_SECOND,
            blocks=self.blocks or 0,
        )


def parse_text_scan(output: str, language: str = "eng") -> list[RawTitle]:
    """Parse every ``+ title`` block in the scan log, in order of appearance."""
    blocks: list[_TitleBlock] = []
    current: _TitleBlock | None = None
    section: str | None = None

    for raw in output.splitlines():
        line = raw.strip()
        if not line.startswith("+"):
            continue

        m = _TITLE_RE.match(line)
        if m:
            current = _TitleBlock(int(m.group(1)))
            blocks.append(current)
            section = None
            continue
        if current is None:
            continue

        m = _SECTION_RE.match(line)
        if m:
            section = m.group(1)
            continue

        if section is None:
            if m := _BLOCKS_RE.match(line):
                current.blocks = int(m.group(1))
            elif m := _DURATION_RE.match(line):
                current.duration = _clock_seconds(m)
        elif section == "chapters":
            if m := _CHAPTER_RE.match(line):
                current.chapters.append(_clock_seconds(m))
        elif section == "subtitle tracks":
            if m := _SUBTITLE_RE.match(line):
                current.languages.append(m.group(2))

    if not blocks and not _NO_TITLES_RE.search(output):
        raise ValueError("no '+ title' blocks found in scan log")
    return [block.build(language) for block in blocks]
