"""Series, season and disc-number inference from disc image filenames.

Best effort only: the operator confirms the series and season later.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_SEASON_TAIL_RE = re.compile(r"[-_ ](s|season)[-_ ]?\d+.*", re.IGNORECASE | re.DOTALL)
_DISC_TAIL_RE = re.compile(r"[-_ ](d|disc)[-_ ]?\d+.*", re.IGNORECASE | re.DOTALL)
_SEASON_RE = re.compile(r"[-_ ](?:s|season)[-_ ]?(\d+)", re.IGNORECASE)
_DISC_RE = re.compile(r"[-_ \d](?:d|disc)[-_ ]?(\d+)", re.IGNORECASE)

_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z\d]+)([A-Z][a-z])")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z\d])([A-Z])")
_ID_SUFFIX_RE = re.compile(r"_id$")
_SEPARATORS_RE = re.compile(r"[-_\s]+")
_WORD_RE = re.compile(r"(?<!['\w])([a-z])")

DEFAULT_DISC_NUMBER = "1"


@dataclass(frozen=True, slots=True)
class DiscMetadata:
    series: str
    season: int | None
    disc_number: str


def humanize_series(name: str) -> str:
    """``"my_show-extras"`` → ``"My Show Extras"``, ``"MyShow"`` → ``"My Show"``."""
    name = _ACRONYM_BOUNDARY_RE.sub(r"\1_\2", name)
    name = _CAMEL_BOUNDARY_RE.sub(r"\1_\2", name)
    name = _ID_SUFFIX_RE.sub("", name.lower())
    name = _SEPARATORS_RE.sub(" ", name).strip()
    return _WORD_RE.sub(lambda m: m.group(1).upper(), name.lower())


def strip_markers(name: str) -> str:
    """Drop everything from the first season marker, then from the first disc marker."""
    name = _SEASON_TAIL_RE.sub("", name)
    return _DISC_TAIL_RE.sub("", name)


def infer_metadata(disc_name: str) -> DiscMetadata:
    """Infer series, season and disc number from a disc's base filename."""
    series = humanize_series(strip_markers(disc_name))

    m = _SEASON_RE.search(disc_name)
    season = int(m.group(1)) if m else None

    m = _DISC_RE.search(disc_name)
    disc_number = m.group(1) if m else DEFAULT_DISC_NUMBER

    return DiscMetadata(series=series, season=season, disc_number=disc_number)
