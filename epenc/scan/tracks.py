from __future__ import annotations

from collections.abc import Sequence

UNDETERMINED_LANGUAGE = "und"


def select_subtitle_tracks(languages: Sequence[str], language: str) -> list[int]:
    """Return 1-based indices of subtitle tracks in *language*.

    Falls back to tracks tagged ``und`` when none match; empty when neither exists.
    """
    matched = [i for i, lang in enumerate(languages, start=1) if lang == language]
    if not matched:
        matched = [i for i, lang in enumerate(languages, start=1) if lang == UNDETERMINED_LANGUAGE]
    return matched
