"""Scoped temporary directory for a single clip run."""

import logging
import shutil
import signal
import tempfile
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# Signals that should unwind the run (and release its files) instead of killing it
TERMINATING_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig is not None
)


class WorkingDirectory:
    """
    Temporary directory owned by exactly one run.

    Use as a context manager; the directory and everything in it is removed
    on exit whether the run succeeded, failed or was interrupted.
    """

    def __init__(self, prefix: str = "yt2gif_", parent: Optional[Path] = None):
        self.prefix = prefix
        self.parent = parent
        self.path: Optional[Path] = None

    def __enter__(self) -> "WorkingDirectory":
        self.path = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.parent))
        logger.debug(f"Created working directory {self.path}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        if self.path is None:
            return
        shutil.rmtree(self.path, ignore_errors=True)
        logger.debug(f"Removed working directory {self.path}")
        self.path = None

    def file(self, name: str) -> Path:
        """Path for ``name`` inside the directory."""
        if self.path is None:
            raise RuntimeError("Working directory is not active")
        return self.path / name


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt(f"Received signal {signum}")


def install_signal_handlers() -> None:
    """Turn SIGTERM/SIGHUP into KeyboardInterrupt so cleanup handlers run."""
    for sig in TERMINATING_SIGNALS:
        signal.signal(sig, _raise_interrupt)
