"""Tests for SRT parsing, retiming and manual captions."""

from pathlib import Path

from conftest import SAMPLE_SRT
from yt2gif.models import ClipWindow, SubtitleEntry
from yt2gif.subtitles import (
    adjust_subtitle_file,
    manual_caption,
    parse_srt,
    read_srt,
    shift_entries,
    write_manual_subtitle,
)


def _entry(start_ms: int, end_ms: int, text: str = "hi", index: int = 1) -> SubtitleEntry:
    return SubtitleEntry(index=index, start_ms=start_ms, end_ms=end_ms, lines=[text])


# ---------------------------------------------------------------------------
# parse_srt
# ---------------------------------------------------------------------------

class TestParseSrt:
    def test_basic(self):
        entries = parse_srt(SAMPLE_SRT)
        assert [(e.index, e.start_ms, e.end_ms) for e in entries] == [
            (1, 10_000, 12_000),
            (2, 15_000, 18_000),
            (3, 20_000, 22_000),
        ]
        assert entries[0].text == "This appears at 10 seconds"

    def test_empty(self):
        assert parse_srt("") == []
        assert parse_srt("\n\n  \n") == []

    def test_multiline_text(self):
        entries = parse_srt("1\n00:00:01,000 --> 00:00:02,500\nfirst line\nsecond line\n")
        assert entries[0].lines == ["first line", "second line"]
        assert entries[0].end_ms == 2500

    def test_crlf_and_bom(self):
        text = "\ufeff1\r\n00:00:01,000 --> 00:00:02,000\r\nhello\r\n\r\n"
        entries = parse_srt(text)
        assert len(entries) == 1
        assert entries[0].text == "hello"

    def test_dot_separator_and_cue_settings(self):
        entries = parse_srt("00:01:02.5 --> 00:01:03.250 align:start position:0%\nhi\n")
        assert entries[0].start_ms == 62_500
        assert entries[0].end_ms == 63_250

    def test_missing_index_uses_position(self):
        text = "1\n00:00:01,000 --> 00:00:02,000\na\n\n00:00:03,000 --> 00:00:04,000\nb\n"
        entries = parse_srt(text)
        assert [e.index for e in entries] == [1, 2]

    def test_whitespace_only_line_stays_in_cue(self):
        text = "1\n00:00:01,000 --> 00:00:02,000\nfirst\n \nsecond\n\n2\n00:00:03,000 --> 00:00:04,000\nb\n"
        entries = parse_srt(text)
        assert entries[0].lines == ["first", " ", "second"]
        assert [(e.index, e.text) for e in entries[1:]] == [(2, "b")]

    def test_cues_separated_by_whitespace_line(self):
        text = "1\n00:00:01,000 --> 00:00:02,000\na\n  \n2\n00:00:03,000 --> 00:00:04,000\nb\n"
        entries = parse_srt(text)
        assert [(e.index, e.start_ms, e.lines) for e in entries] == [
            (1, 1000, ["a"]),
            (2, 3000, ["b"]),
        ]

    def test_block_without_timing_skipped(self):
        text = "WEBVTT\n\n1\n00:00:01,000 --> 00:00:02,000\nhello\n"
        assert len(parse_srt(text)) == 1

    def test_read_srt(self, sample_srt: Path):
        assert len(read_srt(sample_srt)) == 3


# ---------------------------------------------------------------------------
# shift_entries (pure)
# ---------------------------------------------------------------------------

class TestShiftEntries:
    def test_empty_track(self):
        assert shift_entries([], 10) == []

    def test_entry_before_clip_dropped(self):
        assert shift_entries([_entry(5000, 8000)], 10) == []

    def test_entry_ending_exactly_at_clip_start_dropped(self):
        assert shift_entries([_entry(5000, 10_000)], 10) == []

    def test_entry_inside_clip_shifted(self):
        [shifted] = shift_entries([_entry(12_000, 18_000)], 10)
        assert (shifted.start_ms, shifted.end_ms) == (2000, 8000)

    def test_straddling_entry_clamped(self):
        [shifted] = shift_entries([_entry(9000, 15_000)], 10)
        assert (shifted.start_ms, shifted.end_ms) == (0, 5000)

    def test_zero_offset_is_identity(self):
        entries = parse_srt(SAMPLE_SRT)
        shifted = shift_entries(entries, 0)
        assert [(e.start_ms, e.end_ms, e.lines) for e in shifted] == [
            (e.start_ms, e.end_ms, e.lines) for e in entries
        ]

    def test_order_and_text_preserved(self):
        entries = [_entry(5000, 8000, "gone", 1), _entry(9000, 11_000, "a", 2), _entry(12_000, 13_000, "b", 3)]
        shifted = shift_entries(entries, 10)
        assert [e.text for e in shifted] == ["a", "b"]
        assert [e.index for e in shifted] == [2, 3]

    def test_input_not_mutated(self):
        entry = _entry(9000, 15_000)
        shift_entries([entry], 10)
        assert (entry.start_ms, entry.end_ms) == (9000, 15_000)

    def test_all_entries_valid(self):
        entries = [_entry(s, s + d) for s in range(0, 30_000, 700) for d in (1, 999, 4000)]
        for offset in (0, 1, 7, 15, 40):
            for e in shift_entries(entries, offset):
                assert 0 <= e.start_ms <= e.end_ms
                assert e.end_ms > 0


# ---------------------------------------------------------------------------
# manual captions
# ---------------------------------------------------------------------------

class TestManualCaption:
    def test_spans_clip_duration(self):
        [entry] = manual_caption("Hello", ClipWindow(start=10, end=15))
        assert (entry.start_ms, entry.end_ms) == (0, 5000)
        assert entry.text == "Hello"

    def test_writes_srt(self, tmp_path: Path):
        path = tmp_path / "manual.srt"
        count = write_manual_subtitle("Hello World!", ClipWindow(start=5, end=15), path)
        assert count == 1
        assert path.read_text(encoding="utf-8") == (
            "1\n00:00:00,000 --> 00:00:10,000\nHello World!\n\n"
        )

    def test_long_clip(self, tmp_path: Path):
        path = tmp_path / "manual.srt"
        write_manual_subtitle("x", ClipWindow(start=0, end=3725), path)
        assert "00:00:00,000 --> 01:02:05,000" in path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# adjust_subtitle_file
# ---------------------------------------------------------------------------

class TestAdjustSubtitleFile:
    def test_offset_15(self, sample_srt: Path, tmp_path: Path):
        out = tmp_path / "adjusted.srt"
        kept = adjust_subtitle_file(sample_srt, out, 15)
        assert kept == 2
        assert out.read_text(encoding="utf-8") == (
            "1\n00:00:00,000 --> 00:00:03,000\nThis appears at 15 seconds\n\n"
            "2\n00:00:05,000 --> 00:00:07,000\nThis appears at 20 seconds\n\n"
        )

    def test_offset_11_clamps_first(self, sample_srt: Path, tmp_path: Path):
        out = tmp_path / "adjusted.srt"
        adjust_subtitle_file(sample_srt, out, 11)
        first = read_srt(out)[0]
        assert (first.start_ms, first.end_ms) == (0, 1000)

    def test_offset_past_all_entries(self, sample_srt: Path, tmp_path: Path):
        out = tmp_path / "adjusted.srt"
        assert adjust_subtitle_file(sample_srt, out, 30) == 0
        assert out.read_text(encoding="utf-8") == ""
