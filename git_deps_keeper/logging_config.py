"""Logging configuration for git-deps-keeper"""
import logging
import sys
from pathlib import Path
from typing import Optional

# Every git invocation is traced here; "git.*" already belongs to GitPython
GIT_LOGGER_NAME = "git-commands"

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Formatter that colours the level name when writing to a terminal.

    The record is restored after formatting so other handlers (the log
    file) never receive escape codes.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_color: Optional[bool] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record):
        use_color = sys.stderr.isatty() if self.use_color is None else self.use_color
        color = self.COLORS.get(record.levelname) if use_color else None
        if not color:
            return super().format(record)

        levelname = record.levelname
        record.levelname = f"{color}{levelname}{self.RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def get_log_file() -> Path:
    """Location of the log file written in TUI and debug mode."""
    return Path.home() / '.git-deps-keeper' / 'git-deps-keeper.log'


def _console_level(verbose: bool, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if verbose:
        return logging.INFO
    return logging.WARNING


def _reset_handlers(logger: logging.Logger) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()


def setup_logging(verbose: bool = False, debug: bool = False, tui_mode: bool = False) -> None:
    """
    Configure logging for the application.

    Module loggers go through the root logger. Git command traces go to
    their own logger, printed with a ``[Git]`` prefix: failed commands
    show with ``verbose``, every command with ``debug``.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and detailed formatting
        tui_mode: If True, always log to file (since TUI hides console output)
    """
    level = _console_level(verbose, debug)

    root_logger = logging.getLogger()
    git_logger = get_git_logger()
    _reset_handlers(root_logger)
    _reset_handlers(git_logger)

    # With a log file every record is kept; handlers do the filtering
    keep_everything = tui_mode or debug
    root_logger.setLevel(logging.DEBUG if keep_everything else level)
    git_logger.setLevel(logging.DEBUG if keep_everything else level)
    git_logger.propagate = False

    if keep_everything:
        log_file = get_log_file()
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)
        git_logger.addHandler(file_handler)

    if tui_mode:
        return

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        console_handler.setFormatter(ColoredFormatter(fmt=DETAILED_FORMAT, datefmt=DATE_FORMAT))
    else:
        console_handler.setFormatter(ColoredFormatter(fmt='[%(name)s] %(message)s'))
    root_logger.addHandler(console_handler)

    git_handler = logging.StreamHandler(sys.stderr)
    git_handler.setLevel(level)
    git_handler.setFormatter(ColoredFormatter(fmt='[Git] %(message)s'))
    git_logger.addHandler(git_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith('git_deps_keeper.'):
        name = name.replace('git_deps_keeper.', '')
    if name.startswith('services.'):
        name = name.replace('services.', '')

    return logging.getLogger(name)


def get_git_logger() -> logging.Logger:
    """Logger receiving one record per git invocation."""
    return logging.getLogger(GIT_LOGGER_NAME)
