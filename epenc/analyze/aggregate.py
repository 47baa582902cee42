"""Season grouping and the per-season confirm/edit loop."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Iterator
from enum import Enum
from typing import Protocol

from epenc.errors import SelectionAborted
from epenc.model import DiscTitle, SeasonGroup, SeasonKey, SelectionCriteria, SelectionResult
from epenc.utils import natural_sort_key

log = logging.getLogger(__name__)

SelectFn = Callable[[SeasonGroup, SelectionCriteria], SelectionResult]


class ConfirmState(str, Enum):
    PRESENTING = "presenting"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    EDITING = "editing"
    CONFIRMED = "confirmed"
    ABORTED = "aborted"


class Operator(Protocol):
    """Source of operator decisions for the confirm loop."""

    def show_titles(self, group: SeasonGroup) -> None: ...

    def ask_criteria(self, group: SeasonGroup, previous: SelectionCriteria | None) -> SelectionCriteria: ...

    def show_selection(self, result: SelectionResult) -> None: ...

    def ask_decision(self) -> str: ...

    def ask_overrides(self) -> tuple[list[str], list[str]]: ...


def _title_order(title: DiscTitle) -> tuple[str, int]:
    return (natural_sort_key(title.disc_path), title.title_index)


def parse_key_list(text: str) -> list[str]:
    """Split a comma-delimited list of disc-title keys, dropping blanks."""
    return [part.strip() for part in text.split(",") if part.strip()]


class SeasonAggregator:
    """Owns the SeasonKey → SeasonGroup map built during the scan phase."""

    def __init__(self, allow_no_subtitles: bool = False) -> None:
        self.groups: dict[SeasonKey, SeasonGroup] = {}
        self.allow_no_subtitles = allow_no_subtitles

    def add_titles(self, titles: Iterable[DiscTitle]) -> None:
        """Append titles to their season group, keeping disc then title order."""
        touched: set[SeasonKey] = set()
        for title in titles:
            key = title.season_key
            group = self.groups.get(key)
            if group is None:
                group = self.groups[key] = SeasonGroup(key=key)
            group.add(title)
            touched.add(key)
        for key in touched:
            self.groups[key].titles.sort(key=_title_order)

    def __iter__(self) -> Iterator[SeasonGroup]:
        return iter(self.groups.values())

    def __len__(self) -> int:
        return len(self.groups)

    def confirm_season(self, group: SeasonGroup, operator: Operator, select: SelectFn) -> SelectionResult:
        """Run the confirm/edit loop for one season until the operator accepts it.

        Raises :class:`SelectionAborted` when the operator quits.
        """
        state = ConfirmState.PRESENTING
        base: SelectionCriteria | None = None
        force_add: frozenset[str] = frozenset()
        force_remove: frozenset[str] = frozenset()
        result: SelectionResult

        while state is not ConfirmState.CONFIRMED:
            if state is ConfirmState.PRESENTING:
                operator.show_titles(group)
                base = operator.ask_criteria(group, base)
                criteria = dataclasses.replace(
                    base,
                    force_add=force_add,
                    force_remove=force_remove,
                    allow_no_subtitles=base.allow_no_subtitles or self.allow_no_subtitles,
                )
                result = select(group, criteria)
                operator.show_selection(result)
                # Overrides apply to one pass only
                force_add = frozenset()
                force_remove = frozenset()
                state = ConfirmState.AWAITING_CONFIRMATION

            elif state is ConfirmState.AWAITING_CONFIRMATION:
                answer = operator.ask_decision().strip().lower()
                if answer == "y":
                    state = ConfirmState.CONFIRMED
                elif answer == "e":
                    state = ConfirmState.EDITING
                elif answer == "q":
                    state = ConfirmState.ABORTED
                else:
                    state = ConfirmState.PRESENTING

            elif state is ConfirmState.EDITING:
                add, remove = operator.ask_overrides()
                force_add = frozenset(add)
                force_remove = frozenset(remove)
                state = ConfirmState.PRESENTING

            else:
                raise SelectionAborted()

        log.info("Confirmed %d episode(s) for %s", len(result.selected), group.key.label())
        return result

    def confirm_all(self, operator: Operator, select: SelectFn) -> list[SelectionResult]:
        """Confirm every season in the order it was first seen."""
        return [self.confirm_season(group, operator, select) for group in self]
