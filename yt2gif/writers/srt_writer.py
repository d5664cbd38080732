"""Writer for SRT subtitle format."""

from pathlib import Path
from typing import Iterable

from yt2gif.models import SubtitleEntry


def format_timestamp(milliseconds: int) -> str:
    """Format milliseconds as SRT timestamp: HH:MM:SS,mmm."""
    milliseconds = max(milliseconds, 0)
    hours, remainder = divmod(milliseconds, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def write_srt(entries: Iterable[SubtitleEntry], output_path: Path) -> int:
    """
    Write subtitle entries to an SRT file, renumbering them from 1.

    Returns:
        Number of entries written
    """
    count = 0
    with open(output_path, 'w', encoding='utf-8') as f:
        for index, entry in enumerate(entries, start=1):
            start_time = format_timestamp(entry.start_ms)
            end_time = format_timestamp(entry.end_ms)

            # SRT format: index, timestamps, text (with line breaks)
            f.write(f"{index}\n")
            f.write(f"{start_time} --> {end_time}\n")
            f.write(f"{entry.text}\n")
            f.write("\n")  # Blank line between entries
            count = index
    return count
