"""Console and log file output for nginx-deploy."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LEVELS = {
    "INFO": logging.INFO,
    "SUCCESS": SUCCESS,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


class LevelFormatter(logging.Formatter):
    """Formatter printing WARNING as WARN."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.WARNING:
            record.levelname = "WARN"
        return super().format(record)


class DeployLog:
    """Mirrors every message to the console and an append-only log file.

    Lines look like ``[2025-01-31 12:00:00] [INFO] message``.
    """

    def __init__(self, path: str | Path, console: Console | None = None):
        self.path = Path(path)
        self.console = console or Console()
        formatter = LevelFormatter(LOG_FORMAT, DATE_FORMAT)

        self.logger = logging.getLogger("nginx_deploy")
        self.logger.setLevel(logging.INFO)
        self.logger.propagate = False
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()

        console_handler = RichHandler(
            console=self.console,
            show_time=False,
            show_level=False,
            show_path=False,
            markup=False,
        )
        console_handler.setFormatter(formatter)
        self.logger.addHandler(console_handler)

        try:
            file_handler = logging.FileHandler(self.path)
        except OSError as e:
            self.console.print(
                f"[yellow]⚠ Cannot write log file {self.path} ({e.strerror}), logging to console only[/yellow]"
            )
        else:
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def log(self, level: str, message: str) -> None:
        """Write one line at the given level (INFO, SUCCESS, WARN or ERROR)."""
        self.logger.log(LEVELS[level], message)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def success(self, message: str) -> None:
        self.logger.log(SUCCESS, message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def phase(self, title: str) -> None:
        """Print a phase header (console only)."""
        self.console.print(f"\n[bold blue]{title}[/bold blue]\n")

    def close(self) -> None:
        for handler in self.logger.handlers[:]:
            self.logger.removeHandler(handler)
            handler.close()
