"""FFmpeg subprocess helpers for rendering GIFs."""

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from yt2gif.config import Config
from yt2gif.errors import EncodeError
from yt2gif.models import ClipWindow

logger = logging.getLogger(__name__)

PALETTE_CHAIN = (
    "[scaled]split[s0][s1];[s0]palettegen=stats_mode=diff[p];"
    "[s1][p]paletteuse=dither=bayer:bayer_scale=5"
)


def ffmpeg_available() -> bool:
    return shutil.which(Config.FFMPEG_BINARY) is not None


def escape_filter_path(path: Path) -> str:
    """Escape a file path for use inside an ffmpeg filter argument."""
    escaped = str(path).replace("\\", "\\\\")
    escaped = escaped.replace(":", "\\:")
    return escaped.replace("'", "\\'")


def subtitle_style(subtitle_size: int) -> str:
    """ASS force_style: white text, black outline, translucent box, bottom margin."""
    return (
        f"Fontsize={subtitle_size},PrimaryColour=&HFFFFFF&,OutlineColour=&H000000&,"
        "Outline=2,BackColour=&H80000000&,BorderStyle=4,MarginV=20"
    )


def build_filter_graph(
    fps: int,
    width: int,
    subtitle_size: int,
    subtitle_path: Optional[Path] = None,
) -> str:
    """
    Build the filter_complex for a palette-optimized GIF.

    Frames are resampled to ``fps``, scaled to ``width`` (height follows the
    aspect ratio), optionally get subtitles burned in, then go through a
    palettegen/paletteuse pass.
    """
    chain = f"[0:v]fps={fps},scale={width}:-1:flags=lanczos"
    if subtitle_path is not None:
        chain += (
            f",subtitles='{escape_filter_path(subtitle_path)}'"
            f":force_style='{subtitle_style(subtitle_size)}'"
        )
    return f"{chain}[scaled];{PALETTE_CHAIN}"


def render_gif(
    video_path: Path,
    window: ClipWindow,
    output_path: Path,
    fps: int,
    width: int,
    subtitle_size: int,
    subtitle_path: Optional[Path] = None,
) -> Path:
    """
    Cut ``window`` out of ``video_path`` and encode it as a looping GIF.

    ffmpeg writes to a hidden sibling file that is renamed over
    ``output_path`` only on success, so a failed encode leaves no output.

    Raises:
        EncodeError: if ffmpeg cannot be run or exits non-zero
    """
    if subtitle_path is not None:
        logger.info(f"Embedding subtitles from: {subtitle_path.name}")
    else:
        logger.info("Creating GIF without subtitles...")

    partial_path = output_path.with_name(f".{output_path.stem}.partial.gif")
    cmd = [
        Config.FFMPEG_BINARY,
        "-hide_banner",
        "-loglevel", "error",
        "-y",
        "-ss", str(window.start),
        "-to", str(window.end),
        "-i", str(video_path),
        "-filter_complex", build_filter_graph(fps, width, subtitle_size, subtitle_path),
        "-loop", "0",
        str(partial_path),
    ]
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise EncodeError(f"Failed to run {Config.FFMPEG_BINARY}: {e}") from e
    except BaseException:
        # Interrupted mid-encode
        partial_path.unlink(missing_ok=True)
        raise

    if result.returncode != 0 or not partial_path.exists():
        partial_path.unlink(missing_ok=True)
        stderr = (result.stderr or "").strip()
        detail = f": {stderr[-500:]}" if stderr else f" (rc={result.returncode})"
        raise EncodeError(f"Failed to create GIF{detail}")

    os.replace(partial_path, output_path)
    return output_path
