"""Rich-based logging helpers for the txn-parse CLI.

Library modules log through the standard :mod:`logging` package; the CLI
routes those records to stderr with :func:`configure_library_logging` and
prints its own progress through the :class:`Logger` facade.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme
from rich.traceback import install

install(show_locals=False)

LIBRARY_LOGGER_NAME = "txn_cli"

_THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "debug": "dim",
    }
)

# Log chatter goes to stderr so stdout stays a clean payload stream. Highlighting
# is off so numbers inside messages are not wrapped in ANSI sequences.
_stderr_console = Console(stderr=True, theme=_THEME, highlight=False)


@dataclass(slots=True)
class Logger:
    """Lightweight logger facade backed by Rich consoles."""

    verbose: bool = False

    def info(self, message: str) -> None:
        _stderr_console.print(message, style="info", markup=False)

    def success(self, message: str) -> None:
        _stderr_console.print(message, style="success", markup=False)

    def warning(self, message: str) -> None:
        _stderr_console.print(message, style="warning", markup=False)

    def error(self, message: str) -> None:
        _stderr_console.print(message, style="error", markup=False)

    def debug(self, message: str) -> None:
        if self.verbose:
            _stderr_console.print(message, style="debug", markup=False)


def get_logger(verbose: bool = False) -> Logger:
    """Return a configured Logger instance."""
    return Logger(verbose=verbose)


def configure_library_logging(verbose: bool = False) -> logging.Logger:
    """Attach a single Rich handler to the package logger.

    Calling this repeatedly replaces the previous handler, so CLI commands can
    invoke it on every run without duplicating output.
    """

    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    for handler in list(library_logger.handlers):
        if isinstance(handler, RichHandler):
            library_logger.removeHandler(handler)
    handler = RichHandler(
        console=_stderr_console,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )
    library_logger.addHandler(handler)
    library_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return library_logger
