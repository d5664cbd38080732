"""YouTube video downloader using yt-dlp."""

import logging
import re
from pathlib import Path
from typing import Optional

from tqdm import tqdm

from yt2gif.config import Config
from yt2gif.errors import DownloadError, ValidationError
from yt2gif.models import Quality

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r'^https?://(www\.)?(youtube\.com|youtu\.be)')

FORMATS = {
    Quality.BEST: 'bestvideo[ext=mp4]+bestaudio[ext=m4a]/best[ext=mp4]',
    Quality.STANDARD: 'bestvideo[height<=720][ext=mp4]+bestaudio[ext=m4a]/best[height<=720][ext=mp4]',
}


def validate_url(url: str) -> str:
    """Reject anything that does not look like a YouTube URL."""
    if not URL_PATTERN.match(url):
        raise ValidationError(f"Invalid YouTube URL: {url}")
    return url


def extract_video_id(url: str) -> Optional[str]:
    """Extract video ID from various YouTube URL formats, if present."""
    patterns = [
        r'(?:youtube\.com\/watch\?v=|youtu\.be\/|youtube\.com\/embed\/|youtube\.com\/shorts\/)([^&\n?#/]+)',
        r'youtube\.com\/watch\?.*v=([^&\n?#]+)',
    ]

    for pattern in patterns:
        match = re.search(pattern, url)
        if match:
            return match.group(1)
    return None


def base_options() -> dict:
    """yt-dlp options shared by video and subtitle downloads."""
    ydl_opts = {
        'quiet': True,  # Suppress yt-dlp output
        'no_warnings': True,
        'noprogress': True,  # Progress is drawn by our own hook
        'noplaylist': True,
    }

    # Add cookies if provided (for bypassing YouTube bot detection)
    cookies_path = Config.YOUTUBE_COOKIES_TXT
    if cookies_path:
        if Path(cookies_path).exists():
            ydl_opts['cookiefile'] = cookies_path
            logger.debug(f"Using YouTube cookies from: {cookies_path}")
        else:
            logger.warning(f"YOUTUBE_COOKIES_TXT points to a missing file: {cookies_path}")

    return ydl_opts


class DownloadProgress:
    """yt-dlp progress hook drawing one tqdm bar per downloaded stream."""

    def __init__(self):
        self.bar: Optional[tqdm] = None
        self.filename: Optional[str] = None

    def __call__(self, d: dict) -> None:
        status = d.get('status')
        if status == 'downloading':
            if self.bar is None or d.get('filename') != self.filename:
                self.close()
                self.filename = d.get('filename')
                total = d.get('total_bytes') or d.get('total_bytes_estimate')
                self.bar = tqdm(
                    total=total,
                    unit='B',
                    unit_scale=True,
                    desc=Path(self.filename).name if self.filename else 'video',
                    disable=None,  # Off when stderr is not a terminal
                )
            downloaded = d.get('downloaded_bytes') or 0
            self.bar.update(max(downloaded - self.bar.n, 0))
        elif status in ('finished', 'error'):
            self.close()

    def close(self) -> None:
        if self.bar is not None:
            self.bar.close()
            self.bar = None


def _find_downloaded(info: Optional[dict], work_dir: Path) -> Optional[Path]:
    """Locate the merged/downloaded file yt-dlp produced."""
    for download in (info or {}).get('requested_downloads') or []:
        filepath = download.get('filepath')
        if filepath and Path(filepath).exists():
            return Path(filepath)

    # Fall back to scanning the directory
    candidates = sorted(
        f for f in work_dir.glob("video.*")
        if f.is_file() and f.suffix not in ('.part', '.ytdl', '.srt', '.vtt')
    )
    return candidates[0] if candidates else None


def download_video(url: str, work_dir: Path, quality: Quality = Quality.STANDARD) -> Path:
    """
    Download a YouTube video into ``work_dir``.

    Args:
        url: YouTube video URL
        work_dir: Directory owned by the current run
        quality: STANDARD caps the source at 720p, BEST does not

    Returns:
        Path to the downloaded video file

    Raises:
        DownloadError: if yt-dlp fails or produces no file
    """
    import yt_dlp

    video_id = extract_video_id(url)
    logger.info(f"Downloading video{f' {video_id}' if video_id else ''}...")
    logger.warning("Downloading copyrighted content may violate YouTube's Terms of Service and copyright law.")
    logger.warning("Use this tool responsibly and only for lawful purposes.")

    progress = DownloadProgress()
    ydl_opts = base_options()
    ydl_opts.update({
        'format': FORMATS[quality],
        'outtmpl': str(work_dir / 'video.%(ext)s'),
        'merge_output_format': 'mp4',
        'progress_hooks': [progress],
    })

    try:
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            info = ydl.extract_info(url, download=True)
    except yt_dlp.utils.YoutubeDLError as e:
        raise DownloadError(f"Failed to download video: {e}") from e
    finally:
        progress.close()

    video_path = _find_downloaded(info, work_dir)
    if video_path is None:
        raise DownloadError("Failed to download video: no file was produced")

    size_mb = video_path.stat().st_size / (1024 * 1024)
    logger.info(f"✓ Video downloaded: {video_path.name} ({size_mb:.1f} MB)")
    return video_path
