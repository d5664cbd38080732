"""SubRip parsing, clip-relative retiming and manual caption synthesis."""

import logging
import re
from pathlib import Path
from typing import Iterable

from yt2gif.models import ClipWindow, SubtitleEntry
from yt2gif.writers.srt_writer import write_srt

logger = logging.getLogger(__name__)

# Accepts "," or "." before the milliseconds and ignores trailing cue settings
TIMING_PATTERN = re.compile(
    r"(\d+):(\d{2}):(\d{2})[,.](\d{1,3})\s*-->\s*(\d+):(\d{2}):(\d{2})[,.](\d{1,3})"
)


def _to_ms(hours: str, minutes: str, seconds: str, millis: str) -> int:
    # "5" after the separator means 500 ms, not 5 ms
    return (int(hours) * 3600 + int(minutes) * 60 + int(seconds)) * 1000 + int(millis.ljust(3, "0"))


def parse_srt(text: str) -> list[SubtitleEntry]:
    """
    Parse SRT content into entries, keeping source order.

    Blocks are separated by empty lines; a whitespace-only line is caption
    text. Lines before the first timing line of a block are skipped. The index
    line is optional; when missing or not numeric the entry's position in the
    file is used.
    """
    normalized = text.replace("\ufeff", "").replace("\r\n", "\n").replace("\r", "\n")
    entries: list[SubtitleEntry] = []

    for block in re.split(r"\n\n+", normalized.strip()):
        lines = block.split("\n")
        timing_rows = [i for i, line in enumerate(lines) if TIMING_PATTERN.search(line)]

        for n, timing_at in enumerate(timing_rows):
            is_last = n + 1 == len(timing_rows)
            stop = len(lines) if is_last else timing_rows[n + 1]
            text_lines = lines[timing_at + 1:stop]
            # A following cue's index line sits right above its timing line
            if not is_last and text_lines and text_lines[-1].strip().isdigit():
                text_lines = text_lines[:-1]
            while text_lines and not text_lines[-1].strip():
                text_lines.pop()

            groups = TIMING_PATTERN.search(lines[timing_at]).groups()
            index_line = lines[timing_at - 1].strip() if timing_at > 0 else ""
            entries.append(
                SubtitleEntry(
                    index=int(index_line) if index_line.isdigit() else len(entries) + 1,
                    start_ms=_to_ms(*groups[:4]),
                    end_ms=_to_ms(*groups[4:]),
                    lines=text_lines,
                )
            )
    return entries


def read_srt(path: Path) -> list[SubtitleEntry]:
    """Read and parse an SRT file."""
    return parse_srt(path.read_text(encoding="utf-8", errors="replace"))


def shift_entries(entries: Iterable[SubtitleEntry], offset_seconds: int) -> list[SubtitleEntry]:
    """
    Retime entries so the clip starting at ``offset_seconds`` begins at zero.

    Entries ending at or before the clip start are dropped; entries that
    begin before it are clamped to start at zero.
    """
    offset_ms = offset_seconds * 1000
    shifted: list[SubtitleEntry] = []

    for entry in entries:
        start_ms = entry.start_ms - offset_ms
        end_ms = entry.end_ms - offset_ms
        if end_ms <= 0:
            continue
        if start_ms < 0:
            start_ms = 0
        shifted.append(
            SubtitleEntry(index=entry.index, start_ms=start_ms, end_ms=end_ms, lines=list(entry.lines))
        )
    return shifted


def manual_caption(text: str, window: ClipWindow) -> list[SubtitleEntry]:
    """Single entry showing ``text`` for the whole clip."""
    return [SubtitleEntry(index=1, start_ms=0, end_ms=window.duration * 1000, lines=[text])]


def adjust_subtitle_file(input_path: Path, output_path: Path, offset_seconds: int) -> int:
    """
    Shift a downloaded SRT file onto the clip timeline.

    Returns:
        Number of entries kept
    """
    logger.info(f"Adjusting subtitle timing (offset: -{offset_seconds}s)...")
    entries = read_srt(input_path)
    kept = write_srt(shift_entries(entries, offset_seconds), output_path)
    logger.info(f"Adjusted subtitle file created: {output_path.name} ({kept} of {len(entries)} entries)")
    return kept


def write_manual_subtitle(text: str, window: ClipWindow, output_path: Path) -> int:
    """Write the manual caption track for ``window`` to ``output_path``."""
    count = write_srt(manual_caption(text, window), output_path)
    logger.info(f'Created manual subtitle: "{text}" (duration: {window.duration}s)')
    return count
