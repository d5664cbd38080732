"""Data models for clip jobs and subtitle tracks."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from yt2gif.errors import ValidationError


class Quality(str, Enum):
    """Source format preference passed to yt-dlp."""
    STANDARD = "standard"  # capped at 720p
    BEST = "best"


class Stage(str, Enum):
    """Pipeline stages of a single clip run."""
    VALIDATING = "validating"
    DOWNLOADING = "downloading"
    RESOLVING_SUBTITLES = "resolving_subtitles"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class ClipWindow:
    """Start/end offsets into the source video, in whole seconds."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise ValidationError(f"Start time must not be negative: {self.start}")
        if self.start >= self.end:
            raise ValidationError(
                f"Start time ({self.start}s) must be before end time ({self.end}s)"
            )

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass
class SubtitleEntry:
    """A single SubRip cue, timed in milliseconds."""
    index: int
    start_ms: int
    end_ms: int
    lines: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@dataclass(frozen=True)
class ManualSubtitles:
    """User-supplied caption text shown for the whole clip."""
    text: str


@dataclass(frozen=True)
class DownloadedSubtitles:
    """Fetch the video's own captions and shift them onto the clip."""


@dataclass(frozen=True)
class NoSubtitles:
    """Render without any subtitle track."""


SubtitleSource = Union[ManualSubtitles, DownloadedSubtitles, NoSubtitles]


@dataclass(frozen=True)
class JobConfig:
    """Validated, immutable description of one GIF to render."""
    url: str
    window: ClipWindow
    output_path: Path
    fps: int
    width: int
    subtitle_size: int
    subtitles: SubtitleSource = DownloadedSubtitles()
    quality: Quality = Quality.STANDARD


@dataclass
class ClipResult:
    """Outcome of a successful run."""
    output_path: Path
    size_bytes: int
    subtitle_kind: str = "none"  # "manual", "downloaded" or "none"
    subtitle_entries: int = 0
