"""Logging utility for replay diagnostics."""
from __future__ import annotations
import sys


class Logger:
    """Simple diagnostic logger with verbosity control.

    Replay never aborts on bad input, so degraded output is reported here.
    - debug/info: Only shown when verbose=True
    - warning/error: Always shown regardless of verbose setting

    Messages go to stderr so they never interleave with the rendered trace,
    which is normally written to stdout.
    """

    _verbose = False

    @classmethod
    def set_verbose(cls, verbose: bool) -> None:
        """Enable or disable verbose logging."""
        cls._verbose = verbose

    @classmethod
    def _emit(cls, tag: str, msg: str) -> None:
        # Resolve stderr per call so redirected streams are honoured
        print(f"[{tag}] {msg}", file=sys.stderr)

    @classmethod
    def debug(cls, msg: str) -> None:
        """Print debug message if verbose mode is enabled."""
        if cls._verbose:
            cls._emit("DEBUG", msg)

    @classmethod
    def info(cls, msg: str) -> None:
        """Print info message if verbose mode is enabled."""
        if cls._verbose:
            cls._emit("INFO", msg)

    @classmethod
    def warning(cls, msg: str) -> None:
        """Print warning message."""
        cls._emit("WARN", msg)

    @classmethod
    def error(cls, msg: str) -> None:
        """Print error message."""
        cls._emit("ERROR", msg)


# Global logger instance
log = Logger()
