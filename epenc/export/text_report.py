"""Plain-text tables for terminal display."""

from __future__ import annotations

from epenc.analyze.signatures import find_duplicates
from epenc.model import EncodeJob, SeasonGroup, SelectionResult
from epenc.utils import describe_duration


def titles_report(group: SeasonGroup) -> str:
    """List every title of a season with duration, ticks and fingerprint."""
    duplicates = find_duplicates(group.titles)
    lines = [f"{group.key.label()} all titles:"]
    for t in group.titles:
        dup = f"  [duplicate of {duplicates[t.ident].key}]" if t.ident in duplicates else ""
        subs = ",".join(str(i) for i in t.subtitles) or "-"
        lines.append(
            f"  {t.disc_name} Title {t.key}: {describe_duration(t.duration_seconds)}"
            f" ({t.ticks} ticks, checksum: {t.fingerprint}, subtitles: {subs}){dup}"
        )
    return "\n".join(lines)


def selection_report(result: SelectionResult) -> str:
    """Numbered list of the titles picked for encoding."""
    lines = ["Selected titles:"]
    for i, s in enumerate(result.selected, start=1):
        forced = "  (forced)" if s.forced else ""
        lines.append(f"  {i:>2}: {s.output_filename} ({describe_duration(s.title.duration_seconds)}){forced}")
    if not result.selected:
        lines.append("  (none)")
    return "\n".join(lines)


def jobs_report(jobs: list[EncodeJob]) -> str:
    lines = [f"{len(jobs)} encode job(s):"]
    for i, job in enumerate(jobs, start=1):
        lines.append(f"  {i:>3}. {job.output_filename}  <- {job.input_path} title {job.title_index}")
    return "\n".join(lines)
