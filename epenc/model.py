from __future__ import annotations

from dataclasses import dataclass, field

# HandBrake reports durations in 90 kHz ticks
TICKS_PER_SECOND = 90_000


def ticks_to_seconds(ticks: int) -> float:
    """Convert 90 kHz ticks to seconds."""
    return ticks / TICKS_PER_SECOND


def title_key(disc_number: str, title_index: int | str) -> str:
    """Composite disc-title key, e.g. ``01-03``."""
    return f"{str(disc_number).rjust(2, '0')}-{str(title_index).rjust(2, '0')}"


@dataclass(slots=True)
class RawTitle:
    """One title exactly as a scanner parser reports it, before disc metadata is attached."""

    index: int
    duration_seconds: int
    fingerprint: str
    subtitles: list[int]
    ticks: int = 0
    chapter_ticks: list[int] = field(default_factory=list)
    blocks: int = 0


@dataclass(slots=True)
class DiscTitle:
    disc_path: str
    disc_name: str
    series: str
    season: int | None
    disc_number: str
    title_index: int
    duration_seconds: int
    fingerprint: str
    subtitles: list[int] = field(default_factory=list)
    ticks: int = 0

    @property
    def key(self) -> str:
        return title_key(self.disc_number, self.title_index)

    @property
    def ident(self) -> tuple[str, int]:
        """Unique within a run, unlike ``key``: two discs can share a disc number."""
        return (self.disc_path, self.title_index)

    @property
    def season_key(self) -> SeasonKey:
        return SeasonKey(series=self.series, season=self.season)

    @property
    def dedup_key(self) -> tuple[str, str]:
        return (self.disc_path, self.fingerprint)


@dataclass(frozen=True, slots=True)
class SeasonKey:
    series: str
    season: int | None = None

    def label(self) -> str:
        season = "" if self.season is None else str(self.season)
        return f"{self.series} S{season}"


@dataclass(slots=True)
class SeasonGroup:
    key: SeasonKey
    titles: list[DiscTitle] = field(default_factory=list)

    def add(self, title: DiscTitle) -> None:
        self.titles.append(title)

    def __len__(self) -> int:
        return len(self.titles)


@dataclass(slots=True)
class SelectionCriteria:
    min_duration_seconds: int
    max_duration_seconds: int
    series: str
    season: int
    starting_episode: int = 1
    force_add: frozenset[str] = frozenset()
    force_remove: frozenset[str] = frozenset()
    allow_no_subtitles: bool = False


@dataclass(slots=True)
class Warning:
    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass(slots=True)
class SelectedTitle:
    title: DiscTitle
    episode: int
    output_filename: str
    output_path: str
    forced: bool = False


@dataclass(slots=True)
class SelectionResult:
    key: SeasonKey
    criteria: SelectionCriteria
    selected: list[SelectedTitle]
    excluded: dict[tuple[str, int], str] = field(default_factory=dict)
    warnings: list[Warning] = field(default_factory=list)

    @property
    def episodes(self) -> list[int]:
        return [s.episode for s in self.selected]


@dataclass(frozen=True, slots=True)
class EncodeJob:
    input_path: str
    title_index: int
    output_path: str
    output_filename: str
    subtitles: tuple[int, ...]
    language: str
