"""JSON export of scanned seasons and encode job plans."""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone

from epenc.analyze.signatures import find_duplicates
from epenc.model import EncodeJob, SeasonGroup


def groups_to_dict(groups: Iterable[SeasonGroup]) -> dict:
    """Convert scanned season groups to a JSON-serializable dict."""
    seasons = []
    for group in groups:
        duplicates = find_duplicates(group.titles)
        titles = []
        for t in group.titles:
            titles.append(
                {
                    "key": t.key,
                    "disc_path": t.disc_path,
                    "disc_name": t.disc_name,
                    "disc_number": t.disc_number,
                    "title": t.title_index,
                    "duration_seconds": t.duration_seconds,
                    "ticks": t.ticks,
                    "fingerprint": t.fingerprint,
                    "subtitles": t.subtitles,
                    "duplicate_of": duplicates[t.ident].key if t.ident in duplicates else None,
                }
            )
        seasons.append(
            {
                "series": group.key.series,
                "season": group.key.season,
                "titles": titles,
            }
        )
    return {
        "schema_version": "epenc.scan.v1",
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "seasons": seasons,
    }


def jobs_to_dict(jobs: Iterable[EncodeJob]) -> dict:
    return {
        "schema_version": "epenc.jobs.v1",
        "jobs": [
            {
                "input": job.input_path,
                "title": job.title_index,
                "output": job.output_path,
                "subtitles": list(job.subtitles),
                "language": job.language,
            }
            for job in jobs
        ],
    }


def export_json(data: dict, pretty: bool = True) -> str:
    return json.dumps(data, indent=2 if pretty else None, default=str)
