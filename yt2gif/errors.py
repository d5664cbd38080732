"""Exception hierarchy for yt2gif.

Every failure the tool reports is one of these. The CLI catches the base
class, logs the message and exits with ``exit_code``.
"""


class Yt2GifError(Exception):
    """Base class for all fatal yt2gif errors."""

    exit_code = 1


class UsageError(Yt2GifError):
    """Bad or missing command-line arguments."""

    exit_code = 2


class ValidationError(Yt2GifError, ValueError):
    """Malformed time, bad URL, wrong output extension or inverted range."""


class DependencyError(Yt2GifError):
    """A required external tool is not available."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required dependencies: {' '.join(missing)}")
        self.missing = missing


class DownloadError(Yt2GifError):
    """The video could not be fetched."""


class EncodeError(Yt2GifError):
    """ffmpeg failed to render the GIF."""
