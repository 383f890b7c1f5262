"""
Logging configuration for Rollcall.

Console logs go to stderr so the operator-facing rich output on stdout
stays readable; levels are colored when stderr is a terminal. An optional
log file records everything at DEBUG, which is what to read after an
event when a check-in is disputed.

Usage:
    setup_logging(logging.DEBUG if verbose else logging.WARNING, "logs/event.log")
"""

import logging
import sys
from pathlib import Path

CONSOLE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"
FILE_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

_RESET = "\033[0m"
_DIM = "\033[2m"

# ANSI prefix per level
LEVEL_STYLES = {
    logging.DEBUG: "\033[2;37m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[91m",
    logging.CRITICAL: "\033[1;37;41m",
}

# Third-party loggers that are chatty at INFO
QUIET_LOGGERS = ("openpyxl",)


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level name and dims the logger name.

    The record is restored after formatting so a file handler sharing it
    still writes plain text.
    """

    def __init__(self, fmt: str, datefmt: str | None = None, use_colors: bool = True):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        levelname, name = record.levelname, record.name
        style = LEVEL_STYLES.get(record.levelno, "")
        record.levelname = f"{style}{levelname:<8}{_RESET}"
        record.name = f"{_DIM}{name}{_RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname, record.name = levelname, name


def _enable_windows_ansi() -> None:
    """Turn on VT processing for the Windows console (no-op elsewhere)."""
    if sys.platform != "win32":
        return
    try:
        import ctypes

        kernel32 = ctypes.windll.kernel32
        kernel32.SetConsoleMode(kernel32.GetStdHandle(-12), 7)  # stderr
    except (AttributeError, OSError):
        pass  # older consoles print uncolored


def setup_logging(level: int = logging.INFO, log_file: str | Path | None = None) -> None:
    """
    Configure application-wide logging.

    Args:
        level: Console logging level
        log_file: Optional log file, always written at DEBUG
    """
    use_colors = sys.stderr.isatty()
    if use_colors:
        _enable_windows_ansi()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        ColoredFormatter(CONSOLE_FORMAT, CONSOLE_DATEFMT, use_colors=use_colors)
    )
    handlers: list[logging.Handler] = [console_handler]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, FILE_DATEFMT))
        handlers.append(file_handler)

    # Root passes everything; each handler applies its own level
    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        "Logging ready (console=%s, file=%s)", logging.getLevelName(level), log_file or "-"
    )
