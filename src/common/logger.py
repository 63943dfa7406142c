"""Logging utilities with rich output.

Log records and status lines go to stderr so that a report rendered to
stdout stays clean and can be piped into a file.

Usage:
    from common.logger import get_logger

    logger = get_logger(__name__)
    logger.info("Fetching resources...")
    logger.warning("Notebook not found")
    logger.error("Request failed", exc_info=True)
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Shared stderr console for log records and status helpers
console = Console(stderr=True)


def _rich_handler(show_time: bool = False, show_path: bool = False) -> RichHandler:
    handler = RichHandler(
        console=console,
        show_time=show_time,
        show_path=show_path,
        rich_tracebacks=True,
        markup=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    return handler


def get_logger(
    name: str,
    level: str | None = None,
    show_time: bool = False,
    show_path: bool = False,
) -> logging.Logger:
    """Get a configured logger with rich output.

    Args:
        name: Logger name (typically __name__ of the module)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses environment variable LOG_LEVEL or defaults to INFO.
        show_time: Show timestamp in log output
        show_path: Show file path in log output

    Returns:
        Configured logger instance

    Example:
        >>> logger = get_logger(__name__, level="DEBUG")
        >>> logger.debug("GET /resources page=1")
        DEBUG    GET /resources page=1
    """
    logger = logging.getLogger(name)

    # Avoid adding multiple handlers if logger already configured
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")

    logger.setLevel(level.upper())
    logger.addHandler(_rich_handler(show_time=show_time, show_path=show_path))

    # Propagate so pytest's caplog sees the records
    logger.propagate = True

    return logger


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure the root logger once at the CLI entry point.

    Args:
        level: Default logging level, overridden by LOG_LEVEL
        log_file: Optional file path to also log to a file
    """
    level = os.getenv("LOG_LEVEL", level).upper()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_rich_handler())

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

    # Module loggers defer to the root handlers from here on
    for name, existing in logging.Logger.manager.loggerDict.items():
        if isinstance(existing, logging.Logger) and name.startswith(("disk_usage", "common")):
            existing.setLevel(level)
            existing.handlers.clear()


def progress(message: str) -> None:
    """Print a progress line without the logger prefix."""
    console.print(message)


def success(message: str) -> None:
    """Print a success line with a green checkmark.

    Example:
        >>> success("Report published")
        ✓ Report published
    """
    console.print(f"[green]✓[/green] {message}")


def warning(message: str) -> None:
    """Print a warning line with a yellow warning icon."""
    console.print(f"[yellow]⚠[/yellow] {message}")


def error(message: str) -> None:
    """Print an error line with a red X icon."""
    console.print(f"[red]✗[/red] {message}")
