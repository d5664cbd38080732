"""Closed-caption download using yt-dlp."""

import logging
from pathlib import Path
from typing import Optional

from yt2gif.config import Config
from yt2gif.downloader import base_options

logger = logging.getLogger(__name__)

CAPTIONS_STEM = "captions"


def _find_subtitle_file(work_dir: Path) -> Optional[Path]:
    """First non-empty .srt file written by yt-dlp, if any."""
    for srt_file in sorted(work_dir.glob(f"{CAPTIONS_STEM}*.srt")):
        if srt_file.is_file() and srt_file.stat().st_size > 0:
            return srt_file
    return None


def _fetch(url: str, work_dir: Path, automatic: bool) -> Optional[Path]:
    import yt_dlp

    ydl_opts = base_options()
    ydl_opts.update({
        'skip_download': True,
        'writesubtitles': not automatic,
        'writeautomaticsub': automatic,
        'subtitlesformat': 'srt/best',
        'outtmpl': str(work_dir / CAPTIONS_STEM),
        # Same as --convert-subs srt; must run before the (skipped) download
        'postprocessors': [
            {'key': 'FFmpegSubtitlesConvertor', 'format': 'srt', 'when': 'before_dl'},
        ],
    })
    if Config.SUBTITLE_LANGS:
        ydl_opts['subtitleslangs'] = Config.SUBTITLE_LANGS

    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            ydl.extract_info(url, download=True)
    except yt_dlp.utils.YoutubeDLError as e:
        # Missing captions are an expected outcome, not a failure of the run
        kind = "auto-generated" if automatic else "manual"
        logger.debug(f"yt-dlp could not fetch {kind} subtitles: {e}")
        return None

    return _find_subtitle_file(work_dir)


def download_subtitles(url: str, work_dir: Path) -> Optional[Path]:
    """
    Fetch the video's captions as SRT, preferring manual over auto-generated.

    Returns:
        Path to the subtitle file, or None when the video has no captions
    """
    logger.info("Downloading subtitles...")

    # Try manual CC first (higher quality)
    srt_file = _fetch(url, work_dir, automatic=False)
    if srt_file:
        logger.info(f"Found manual CC subtitles: {srt_file.name}")
        return srt_file

    logger.info("Manual CC not found, trying auto-generated...")
    srt_file = _fetch(url, work_dir, automatic=True)
    if srt_file:
        logger.info(f"Found auto-generated subtitles: {srt_file.name}")
        return srt_file

    logger.info("No subtitles available for this video")
    return None
