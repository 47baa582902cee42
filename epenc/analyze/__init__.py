"""Metadata inference, duplicate detection and episode selection."""

from __future__ import annotations

from epenc.analyze.aggregate import ConfirmState, Operator, SeasonAggregator, parse_key_list
from epenc.analyze.metadata import DiscMetadata, humanize_series, infer_metadata
from epenc.analyze.selection import output_filename, select_episodes
from epenc.analyze.signatures import find_duplicates, fingerprint_from_blocks, fingerprint_from_ticks

__all__ = [
    "ConfirmState",
    "DiscMetadata",
    "Operator",
    "SeasonAggregator",
    "find_duplicates",
    "fingerprint_from_blocks",
    "fingerprint_from_ticks",
    "humanize_series",
    "infer_metadata",
    "output_filename",
    "parse_key_list",
    "select_episodes",
]
