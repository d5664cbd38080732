"""Shared test fixtures."""

from pathlib import Path

import pytest

from yt2gif.models import ClipWindow, DownloadedSubtitles, JobConfig

SAMPLE_SRT = """\
1
00:00:10,000 --> 00:00:12,000
This appears at 10 seconds

2
00:00:15,000 --> 00:00:18,000
This appears at 15 seconds

3
00:00:20,000 --> 00:00:22,000
This appears at 20 seconds

"""

VIDEO_URL = "https://www.youtube.com/watch?v=ih7DZk-9US8"


@pytest.fixture
def sample_srt(tmp_path: Path) -> Path:
    path = tmp_path / "captions.en.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def make_job(tmp_path: Path):
    def _make(subtitles=DownloadedSubtitles(), start=10, end=15, **overrides) -> JobConfig:
        values = dict(
            url=VIDEO_URL,
            window=ClipWindow(start=start, end=end),
            output_path=tmp_path / "out.gif",
            fps=15,
            width=800,
            subtitle_size=24,
            subtitles=subtitles,
        )
        values.update(overrides)
        return JobConfig(**values)
    return _make


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Pin settings that a developer's .env could otherwise change."""
    from yt2gif.config import Config

    monkeypatch.setattr(Config, "DEFAULT_FPS", 15)
    monkeypatch.setattr(Config, "DEFAULT_WIDTH", 800)
    monkeypatch.setattr(Config, "DEFAULT_SUBTITLE_SIZE", 24)
    monkeypatch.setattr(Config, "MAX_RECOMMENDED_DURATION", 60)
    monkeypatch.setattr(Config, "SUBTITLE_LANGS", [])
    monkeypatch.setattr(Config, "YOUTUBE_COOKIES_TXT", "")
    monkeypatch.setattr(Config, "FFMPEG_BINARY", "ffmpeg")
    monkeypatch.setattr(Config, "LOG_LEVEL", "INFO")
