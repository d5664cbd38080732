"""Clip pipeline: validate, download, resolve subtitles, encode."""

import importlib.util
import logging
from pathlib import Path
from typing import Callable, Optional

from yt2gif import downloader, ffutil, subtitle_downloader
from yt2gif.config import Config
from yt2gif.errors import DependencyError, Yt2GifError
from yt2gif.models import (
    ClipResult,
    DownloadedSubtitles,
    JobConfig,
    ManualSubtitles,
    Stage,
)
from yt2gif.subtitles import adjust_subtitle_file, write_manual_subtitle
from yt2gif.timeparse import format_time
from yt2gif.workspace import WorkingDirectory

logger = logging.getLogger(__name__)


def check_dependencies() -> None:
    """Raise DependencyError naming every external tool that is missing."""
    missing = []
    if importlib.util.find_spec("yt_dlp") is None:
        missing.append("yt-dlp")
    if not ffutil.ffmpeg_available():
        missing.append(Config.FFMPEG_BINARY)
    if missing:
        raise DependencyError(missing)


def format_size(size_bytes: int) -> str:
    """Human readable file size."""
    size = float(size_bytes)
    for unit in ("B", "KB", "MB"):
        if size < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} GB"


def resolve_subtitles(job: JobConfig, workspace: WorkingDirectory) -> tuple[Optional[Path], str, int]:
    """
    Produce the clip-relative subtitle file for ``job``.

    Returns:
        Tuple of (subtitle_path or None, kind, entry_count)
    """
    source = job.subtitles

    if isinstance(source, ManualSubtitles):
        # Already clip-relative, so no offset is applied
        manual_path = workspace.file("manual.srt")
        count = write_manual_subtitle(source.text, job.window, manual_path)
        return manual_path, "manual", count

    if isinstance(source, DownloadedSubtitles):
        srt_file = subtitle_downloader.download_subtitles(job.url, workspace.path)
        if srt_file is None:
            logger.info("No subtitle file found, continuing without subtitles")
            return None, "none", 0

        adjusted_path = workspace.file("adjusted.srt")
        count = adjust_subtitle_file(srt_file, adjusted_path, job.window.start)
        if count == 0:
            logger.info("No subtitles fall inside the clip, continuing without subtitles")
            return None, "none", 0
        logger.info(f"Subtitle timing adjusted for clip starting at {format_time(job.window.start)}")
        return adjusted_path, "downloaded", count

    return None, "none", 0


def process_clip(
    job: JobConfig,
    on_stage: Optional[Callable[[Stage], None]] = None,
) -> ClipResult:
    """
    Run the full pipeline for one clip.

    The working directory lives only for the duration of this call and is
    removed on success, on any Yt2GifError and on KeyboardInterrupt.

    Args:
        job: Validated job configuration
        on_stage: Optional callback invoked on every stage transition

    Raises:
        Yt2GifError: the first failure, after the working directory is gone
    """
    stage = Stage.VALIDATING

    def _enter(next_stage: Stage) -> None:
        nonlocal stage
        stage = next_stage
        logger.debug(f"Stage: {stage.value}")
        if on_stage:
            on_stage(stage)

    _enter(Stage.VALIDATING)
    try:
        check_dependencies()

        with WorkingDirectory() as workspace:
            _enter(Stage.DOWNLOADING)
            video_path = downloader.download_video(job.url, workspace.path, job.quality)

            _enter(Stage.RESOLVING_SUBTITLES)
            subtitle_path, subtitle_kind, entries = resolve_subtitles(job, workspace)

            _enter(Stage.ENCODING)
            logger.info("Creating GIF...")
            ffutil.render_gif(
                video_path,
                job.window,
                job.output_path,
                fps=job.fps,
                width=job.width,
                subtitle_size=job.subtitle_size,
                subtitle_path=subtitle_path,
            )
    except Yt2GifError:
        _enter(Stage.FAILED)
        raise

    _enter(Stage.DONE)
    return ClipResult(
        output_path=job.output_path,
        size_bytes=job.output_path.stat().st_size,
        subtitle_kind=subtitle_kind,
        subtitle_entries=entries,
    )
