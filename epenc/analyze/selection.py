"""Episode selection for one season.

:func:`select_episodes` is a pure function of the season's titles and the
operator's criteria (plus a filesystem existence check): it never mutates the
group, so the confirm/edit loop can rerun it from scratch on every iteration.

Each title is decided by the first rule that applies:

1. key in ``force_add``      → include
2. key in ``force_remove``   → exclude
3. duration outside window   → exclude
4. no subtitle tracks        → exclude with ``EMPTY_SUBTITLES`` warning
5. same ``(disc_path, fingerprint)`` as an earlier included title
                             → exclude with ``DUPLICATE_FINGERPRINT`` warning
6. otherwise                 → include

Included titles are numbered from ``starting_episode`` in group order; a title
whose output file already exists is then dropped with an ``OUTPUT_COLLISION``
warning, leaving a gap in the numbering.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from pathlib import Path

from epenc.model import (
    DiscTitle,
    SeasonGroup,
    SelectedTitle,
    SelectionCriteria,
    SelectionResult,
    Warning,
)

log = logging.getLogger(__name__)

# Exclusion reasons recorded in SelectionResult.excluded
FORCE_REMOVED = "force_removed"
OUT_OF_RANGE = "duration"
EMPTY_SUBTITLES = "EMPTY_SUBTITLES"
DUPLICATE_FINGERPRINT = "DUPLICATE_FINGERPRINT"
OUTPUT_COLLISION = "OUTPUT_COLLISION"


def output_filename(title: DiscTitle, series: str, season: int, episode: int, extension: str = "mkv") -> str:
    return f"{series} S{season:02d}E{episode:02d} - {title.disc_name}-{title.key}.{extension}"


def _describe(title: DiscTitle) -> str:
    return f"{title.disc_name} title {title.key} ({title.duration_seconds}s, fingerprint {title.fingerprint})"


def _warn(warnings: list[Warning], code: str, message: str, **context) -> None:
    log.warning(message)
    warnings.append(Warning(code=code, message=message, context=context))


def _match_titles(
    titles: list[DiscTitle],
    criteria: SelectionCriteria,
    excluded: dict[tuple[str, int], str],
    warnings: list[Warning],
) -> list[tuple[DiscTitle, bool]]:
    seen: dict[tuple[str, str], DiscTitle] = {}
    matched: list[tuple[DiscTitle, bool]] = []

    for title in titles:
        key = title.key
        if key in criteria.force_add:
            matched.append((title, True))
        elif key in criteria.force_remove:
            excluded[title.ident] = FORCE_REMOVED
        elif not criteria.min_duration_seconds <= title.duration_seconds <= criteria.max_duration_seconds:
            excluded[title.ident] = OUT_OF_RANGE
        elif not title.subtitles and not criteria.allow_no_subtitles:
            excluded[title.ident] = EMPTY_SUBTITLES
            _warn(
                warnings,
                EMPTY_SUBTITLES,
                f"Subtitles empty, skipping: {_describe(title)}",
                title=key,
            )
        elif title.dedup_key in seen:
            previous = seen[title.dedup_key]
            excluded[title.ident] = DUPLICATE_FINGERPRINT
            _warn(
                warnings,
                DUPLICATE_FINGERPRINT,
                f"Apparent duplicate title, skipping: {_describe(title)}, "
                f"previously seen: {_describe(previous)}",
                title=key,
                previous=previous.key,
                fingerprint=title.fingerprint,
            )
        else:
            seen[title.dedup_key] = title
            matched.append((title, False))

    return matched


def select_episodes(
    group: SeasonGroup,
    criteria: SelectionCriteria,
    output_dir: str | Path,
    extension: str = "mkv",
    exists: Callable[[str], bool] = os.path.exists,
) -> SelectionResult:
    """Reduce a season's titles to numbered episodes with output paths."""
    excluded: dict[tuple[str, int], str] = {}
    warnings: list[Warning] = []
    matched = _match_titles(group.titles, criteria, excluded, warnings)

    selected: list[SelectedTitle] = []
    for episode, (title, forced) in enumerate(matched, start=criteria.starting_episode):
        filename = output_filename(title, criteria.series, criteria.season, episode, extension)
        output_path = os.path.join(str(output_dir), filename)
        if exists(output_path):
            excluded[title.ident] = OUTPUT_COLLISION
            _warn(
                warnings,
                OUTPUT_COLLISION,
                f"Output file already exists, skipping: {output_path}",
                title=title.key,
                path=output_path,
            )
            continue
        selected.append(
            SelectedTitle(
                title=title,
                episode=episode,
                output_filename=filename,
                output_path=output_path,
                forced=forced,
            )
        )

    return SelectionResult(
        key=group.key,
        criteria=criteria,
        selected=selected,
        excluded=excluded,
        warnings=warnings,
    )
