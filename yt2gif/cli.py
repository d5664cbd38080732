"""Command-line entry point for yt2gif."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from yt2gif.config import Config
from yt2gif.downloader import validate_url
from yt2gif.errors import UsageError, ValidationError, Yt2GifError
from yt2gif.main import format_size, process_clip
from yt2gif.models import (
    ClipWindow,
    DownloadedSubtitles,
    JobConfig,
    ManualSubtitles,
    NoSubtitles,
    Quality,
)
from yt2gif.timeparse import parse_time
from yt2gif.workspace import install_signal_handlers

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

EXAMPLES = """\
Examples:
    %(prog)s https://youtu.be/example 10 15 output.gif
    %(prog)s -f 20 -w 640 https://youtu.be/example 00:00:10 00:00:15 output.gif
    %(prog)s --no-subs https://youtu.be/example 1:30 1:45 output.gif
    %(prog)s -t "Hello World!" https://youtu.be/example 5 10 output.gif
"""


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message):
        raise UsageError(message)


def positive_int(value: str) -> int:
    try:
        number = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="yt2gif",
        usage="%(prog)s [OPTIONS] <youtube_url> <start_time> <end_time> <output_gif>",
        description=(
            "Create an animated GIF from a YouTube video segment with optional subtitles.\n\n"
            "Arguments:\n"
            "    youtube_url     YouTube video URL\n"
            "    start_time      Start time (HH:MM:SS or MM:SS or seconds)\n"
            "    end_time        End time (HH:MM:SS or MM:SS or seconds)\n"
            "    output_gif      Output GIF filename"
        ),
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("positionals", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument("-f", "--fps", type=positive_int, default=Config.DEFAULT_FPS,
                        metavar="N", help=f"Frame rate (default: {Config.DEFAULT_FPS})")
    parser.add_argument("-w", "--width", type=positive_int, default=Config.DEFAULT_WIDTH,
                        metavar="N", help=f"Width in pixels (default: {Config.DEFAULT_WIDTH}, height auto)")
    parser.add_argument("-s", "--subtitle-size", type=positive_int, default=Config.DEFAULT_SUBTITLE_SIZE,
                        metavar="N", help=f"Size of subtitles (default: {Config.DEFAULT_SUBTITLE_SIZE})")
    parser.add_argument("-t", "--text", metavar="TEXT",
                        help="Add custom subtitle text (overrides downloaded subs)")
    parser.add_argument("-n", "--no-subs", action="store_true",
                        help="Skip subtitle download/embedding")
    parser.add_argument("-q", "--quality", action="store_true",
                        help="Use best quality (slower, larger file)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show debug output")
    return parser


def join_text_values(argv: Sequence[str]) -> list[str]:
    """Bind the value after -t/--text even when it starts with a dash."""
    joined = []
    args = iter(argv)
    for arg in args:
        if arg in ("-t", "--text"):
            value = next(args, None)
            joined.append(arg if value is None else f"--text={value}")
        else:
            joined.append(arg)
    return joined


def parse_args(argv: Optional[Sequence[str]] = None, parser: Optional[ArgumentParser] = None) -> argparse.Namespace:
    """
    Parse flags and positionals without validating their values.

    Help wins over every other error, and unknown flags are reported before
    a wrong positional count.
    """
    parser = parser or build_parser()
    argv = join_text_values(sys.argv[1:] if argv is None else argv)

    if any(arg in ("-h", "--help") for arg in argv):
        parser.print_help()
        parser.exit(0)

    args, extras = parser.parse_known_intermixed_args(argv)

    unknown = [arg for arg in extras if arg.startswith("-")]
    if unknown:
        raise UsageError(f"Unknown option: {unknown[0]}")
    if extras or len(args.positionals) != 4:
        raise UsageError("expected exactly 4 arguments: <youtube_url> <start_time> <end_time> <output_gif>")
    return args


def resolve_job(args: argparse.Namespace) -> JobConfig:
    """Validate parsed arguments and build the immutable job description."""
    url, start_text, end_text, output = args.positionals

    validate_url(url)
    start = parse_time(start_text)
    end = parse_time(end_text)
    if start >= end:
        raise ValidationError(f"Start time ({start_text}) must be before end time ({end_text})")

    window = ClipWindow(start=start, end=end)
    if window.duration > Config.MAX_RECOMMENDED_DURATION:
        logger.warning(f"GIF duration is {window.duration}s. Large GIFs may have poor quality.")

    if not output.endswith(".gif"):
        raise ValidationError("Output file must end with .gif")

    # Manual text always wins; --no-subs only matters without it
    if args.text:
        subtitles = ManualSubtitles(args.text)
    elif args.no_subs:
        subtitles = NoSubtitles()
    else:
        subtitles = DownloadedSubtitles()

    return JobConfig(
        url=url,
        window=window,
        output_path=Path(output),
        fps=args.fps,
        width=args.width,
        subtitle_size=args.subtitle_size,
        subtitles=subtitles,
        quality=Quality.BEST if args.quality else Quality.STANDARD,
    )


def configure_logging(verbose: bool = False) -> None:
    """Configure timestamped logging on stderr."""
    level = logging.DEBUG if verbose else getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
        force=True,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    configure_logging()
    parser = build_parser()

    try:
        args = parse_args(argv, parser)
        if args.verbose:
            configure_logging(verbose=True)
        job = resolve_job(args)
        install_signal_handlers()
        result = process_clip(job)
    except UsageError as e:
        logger.error(str(e))
        parser.print_usage(sys.stderr)
        return e.exit_code
    except Yt2GifError as e:
        logger.error(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    logger.info(f"Success! GIF created: {result.output_path}")
    logger.info(f"File size: {format_size(result.size_bytes)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
