"""Interactive operator backed by rich prompts."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.prompt import IntPrompt, Prompt

from epenc.analyze.aggregate import parse_key_list
from epenc.export.text_report import selection_report, titles_report
from epenc.model import SeasonGroup, SelectionCriteria, SelectionResult


@dataclass(frozen=True, slots=True)
class DurationPreset:
    label: str
    min_minutes: int
    max_minutes: int


DURATION_PRESETS = (
    DurationPreset("Hour long (36-80 mins)", 36, 80),
    DurationPreset("Half-hour long (17-40 mins)", 17, 40),
)
CUSTOM_DURATION = "Custom duration"


class ConsoleOperator:
    """Asks the operator for selection criteria and confirmations on a terminal."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def show_titles(self, group: SeasonGroup) -> None:
        self.console.print()
        self.console.print(titles_report(group), markup=False, highlight=False)

    def _ask_duration_window(self) -> tuple[int, int]:
        labels = [p.label for p in DURATION_PRESETS] + [CUSTOM_DURATION]
        for i, label in enumerate(labels, start=1):
            self.console.print(f"  {i}. {label}")
        choice = IntPrompt.ask(
            "Length of show?",
            console=self.console,
            choices=[str(i) for i in range(1, len(labels) + 1)],
        )
        if choice <= len(DURATION_PRESETS):
            preset = DURATION_PRESETS[choice - 1]
            return preset.min_minutes * 60, preset.max_minutes * 60
        min_minutes = IntPrompt.ask("Minimum duration (mins)", console=self.console)
        max_minutes = IntPrompt.ask("Maximum duration (mins)", console=self.console)
        return min_minutes * 60, max_minutes * 60

    def ask_criteria(self, group: SeasonGroup, previous: SelectionCriteria | None) -> SelectionCriteria:
        self.console.print()
        min_s, max_s = self._ask_duration_window()
        if previous is not None:
            series_default, season_default, episode_default = (
                previous.series,
                previous.season,
                previous.starting_episode,
            )
        else:
            series_default = group.key.series
            season_default = group.key.season if group.key.season is not None else 1
            episode_default = 1

        series = Prompt.ask("Series Name", console=self.console, default=series_default)
        season = IntPrompt.ask("Season", console=self.console, default=season_default)
        starting_episode = IntPrompt.ask("Starting Episode", console=self.console, default=episode_default)
        return SelectionCriteria(
            min_duration_seconds=min_s,
            max_duration_seconds=max_s,
            series=series.strip(),
            season=season,
            starting_episode=starting_episode,
        )

    def show_selection(self, result: SelectionResult) -> None:
        self.console.print()
        self.console.print(selection_report(result), markup=False, highlight=False)

    def ask_decision(self) -> str:
        self.console.print()
        return Prompt.ask("Do the selected episodes look correct? (y/n/e/q)", console=self.console)

    def ask_overrides(self) -> tuple[list[str], list[str]]:
        add = Prompt.ask(
            "Enter disc-title numbers to force add (comma delimited)",
            console=self.console,
            default="",
            show_default=False,
        )
        remove = Prompt.ask(
            "Enter disc-title numbers to force remove (comma delimited)",
            console=self.console,
            default="",
            show_default=False,
        )
        return parse_key_list(add), parse_key_list(remove)
