from __future__ import annotations

from collections.abc import Iterable

from epenc.model import EncodeJob, SelectionResult


def build_encode_jobs(results: Iterable[SelectionResult], language: str = "eng") -> list[EncodeJob]:
    """Flatten confirmed seasons, in confirmation order, into one job list."""
    jobs: list[EncodeJob] = []
    for result in results:
        for selected in result.selected:
            title = selected.title
            jobs.append(
                EncodeJob(
                    input_path=title.disc_path,
                    title_index=title.title_index,
                    output_path=selected.output_path,
                    output_filename=selected.output_filename,
                    subtitles=tuple(title.subtitles),
                    language=language,
                )
            )
    return jobs
