"""Tests for the JSON and text scanner-output parsers."""

from __future__ import annotations

import pytest

from epenc.analyze.signatures import fingerprint_from_ticks
from epenc.scan import get_parser, parse_scan_output, to_disc_titles
from epenc.scan.json_scan import extract_title_set, parse_json_scan
from epenc.scan.runner import ScanOutput
from epenc.scan.text_scan import parse_text_scan
from epenc.scan.tracks import select_subtitle_tracks


class TestJsonScan:
    def test_titles_in_scanner_order(self, json_scan_output: str) -> None:
        titles = parse_json_scan(json_scan_output)
        assert [t.index for t in titles] == [1, 2, 3, 4]
        assert [t.duration_seconds for t in titles] == [2530, 180, 2530, 2640]

    def test_fingerprint_from_ticks_and_chapters(self, json_scan_output: str) -> None:
        titles = parse_json_scan(json_scan_output)
        assert titles[0].fingerprint == "65c785c3"
        assert titles[1].fingerprint == "bac81a39"
        assert titles[0].fingerprint == titles[2].fingerprint
        assert titles[0].ticks == 227700000
        assert titles[0].chapter_ticks == [113850000, 113850000]

    def test_subtitle_language_selection(self, json_scan_output: str) -> None:
        titles = parse_json_scan(json_scan_output)
        assert titles[0].subtitles == [1]
        assert titles[1].subtitles == []
        assert titles[2].subtitles == [1]
        # no English track: fall back to undetermined tracks
        assert titles[3].subtitles == [1, 3]

    def test_other_target_language(self, json_scan_output: str) -> None:
        titles = parse_json_scan(json_scan_output, language="fra")
        assert titles[0].subtitles == [2]
        assert titles[3].subtitles == [2]

    def test_missing_title_set_rejected(self) -> None:
        with pytest.raises(ValueError, match="JSON Title Set"):
            extract_title_set("Progress: {}\n")

    def test_malformed_json_rejected(self) -> None:
        with pytest.raises(ValueError, match="malformed"):
            parse_json_scan('JSON Title Set: {"TitleList": [')

    def test_missing_keys_rejected(self) -> None:
        with pytest.raises(ValueError, match="structure"):
            parse_json_scan('JSON Title Set: {"TitleList": [{"Index": 1}]}')


class TestTextScan:
    def test_titles_and_durations(self, text_scan_output: str) -> None:
        titles = parse_text_scan(text_scan_output)
        assert [t.index for t in titles] == [1, 2, 3]
        assert [t.duration_seconds for t in titles] == [2533, 161, 2533]

    def test_block_count_fingerprint(self, text_scan_output: str) -> None:
        titles = parse_text_scan(text_scan_output)
        assert titles[0].fingerprint == "2364934"
        assert titles[1].fingerprint == "90120"
        assert titles[0].fingerprint == titles[2].fingerprint
        assert titles[0].blocks == 2364934

    def test_subtitle_sections(self, text_scan_output: str) -> None:
        titles = parse_text_scan(text_scan_output)
        assert titles[0].subtitles == [1, 3]
        assert titles[1].subtitles == []
        assert titles[2].subtitles == [1]

    def test_bluray_titles_without_blocks_use_duration_digest(self) -> None:
        log = "\n".join(
            [
                "+ title 5:",
                "  + playlist: 00800.mpls",
                "  + duration: 00:42:10",
                "  + chapters:",
                "    + 1: duration 00:21:05",
                "    + 2: duration 00:21:05",
                "  + subtitle tracks:",
                "    + 1, English (iso639-2: eng) (Bitmap)(PGS)",
            ]
        )
        (title,) = parse_text_scan(log)
        assert title.fingerprint == fingerprint_from_ticks(227700000, [113850000, 113850000])
        assert title.subtitles == [1]

    def test_title_without_duration_rejected(self) -> None:
        with pytest.raises(ValueError, match="duration"):
            parse_text_scan("+ title 1:\n  + chapters:\n")

    def test_log_without_titles_rejected(self) -> None:
        with pytest.raises(ValueError, match="title"):
            parse_text_scan("[12:00:01] hb_init: starting libhb thread\n")

    def test_scan_that_found_nothing_is_empty(self) -> None:
        log = "[12:00:03] libhb: scan thread found 0 valid title(s)\nNo title found.\n"
        assert parse_text_scan(log) == []


def test_subtitle_fallback_empty_when_nothing_matches() -> None:
    assert select_subtitle_tracks(["fra", "spa"], "eng") == []
    assert select_subtitle_tracks(["und", "eng", "und"], "eng") == [2]


def test_parser_selected_by_mode(json_scan_output: str, text_scan_output: str) -> None:
    assert get_parser("json") is parse_json_scan
    assert get_parser("text") is parse_text_scan
    with pytest.raises(ValueError):
        get_parser("xml")

    # text mode reads the log from either stream
    titles = parse_scan_output(ScanOutput(stdout="", stderr=text_scan_output), "text", "eng")
    assert len(titles) == 3
    titles = parse_scan_output(ScanOutput(stdout=json_scan_output, stderr="noise"), "json", "eng")
    assert len(titles) == 4


def test_disc_titles_carry_filename_metadata(json_scan_output: str) -> None:
    raw = parse_json_scan(json_scan_output)
    titles = to_disc_titles("/discs/MyShow-Season1-Disc1", raw)
    assert {t.series for t in titles} == {"My Show"}
    assert {t.season for t in titles} == {1}
    assert [t.key for t in titles] == ["01-01", "01-02", "01-03", "01-04"]
    assert titles[0].disc_name == "MyShow-Season1-Disc1"
