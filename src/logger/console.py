from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from env import get_logging_env


class ConsoleGateFilter(logging.Filter):
    """
    Drop console output entirely when quiet mode is enabled mid-run.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not get_logging_env().quiet


def build_console_handler(level: int = logging.INFO) -> logging.Handler:
    # Bound to whatever sys.stdout is right now, so redirected runs keep the summary.
    console = Console(file=sys.stdout, soft_wrap=True)

    handler = RichHandler(
        console=console,
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setLevel(level)

    # RichHandler renders the level column itself.
    handler.setFormatter(logging.Formatter("%(message)s"))

    handler.addFilter(ConsoleGateFilter())
    return handler
