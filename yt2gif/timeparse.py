"""Parsing of user-supplied clip times (SS, MM:SS or HH:MM:SS)."""

import re

from yt2gif.errors import ValidationError

TIME_PATTERN = re.compile(r"[0-9]+|(?:[0-9]+:)?[0-9]+:[0-9]+")


def parse_time(value: str) -> int:
    """
    Convert a time expression into whole seconds.

    Accepts plain seconds (``90``), ``MM:SS`` (``1:30``) and ``HH:MM:SS``
    (``00:01:30``). Fields are always decimal, so ``08`` is eight. Field
    ranges are not checked: ``1:75`` is 135 seconds.

    Raises:
        ValidationError: if the string has any other shape
    """
    if not TIME_PATTERN.fullmatch(value):
        raise ValidationError(
            f"Invalid time format: {value} (use HH:MM:SS, MM:SS, or seconds)"
        )

    parts = [int(part, 10) for part in value.split(":")]
    if len(parts) == 3:
        hours, minutes, seconds = parts
    elif len(parts) == 2:
        hours = 0
        minutes, seconds = parts
    else:
        hours = minutes = 0
        seconds = parts[0]
    return hours * 3600 + minutes * 60 + seconds


def format_time(seconds: int) -> str:
    """Format seconds as HH:MM:SS."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
