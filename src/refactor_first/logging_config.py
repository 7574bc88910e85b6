"""
Logging configuration for Refactor First.

All loggers live under the ``refactor_first`` namespace and print through a
single rich handler on stderr, so warnings about dropped candidates never mix
with a JSON or CSV report on stdout. Individual subsystems can be turned up
or down on their own, e.g. ``ranking=DEBUG`` to see which symptoms put each
class on the candidate list while git extraction stays at WARNING.
"""

import logging
from typing import Iterable, Mapping, Optional

from rich.console import Console
from rich.logging import RichHandler

from .exceptions import InvalidConfigError

ROOT_LOGGER = "refactor_first"

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    module_levels: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """
    Configure logging with rich handler for colored output.

    Args:
        verbose: Enable DEBUG level logging
        quiet: Suppress all but ERROR level logging
        log_file: Optional file path to write logs to
        module_levels: Optional per-subsystem levels, e.g. {"ranking": "DEBUG"}

    Returns:
        Configured logger instance for refactor_first
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            # Class names such as Map[String] are not markup
            markup=False,
            show_time=True,
            show_path=verbose,
        )
    ]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
        )
        handlers.append(file_handler)

    # force: the CLI and rank() may both configure logging in one process
    logging.basicConfig(
        level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    if module_levels:
        set_module_levels(module_levels)

    return logger


def set_module_levels(levels: Mapping[str, str]) -> None:
    """
    Set the level of individual subsystems below the package logger.

    Args:
        levels: Subsystem name (``ranking``, ``temporal.git_extractor``) ->
            level name

    Raises:
        InvalidConfigError: If a level name is not a standard logging level
    """
    for module, level_name in levels.items():
        name = level_name.upper()
        if name not in _LEVEL_NAMES:
            raise InvalidConfigError(
                f"log level for {module}", level_name, f"choose from: {', '.join(_LEVEL_NAMES)}"
            )
        get_logger(module).setLevel(name)


def parse_module_levels(entries: Iterable[str]) -> dict[str, str]:
    """
    Parse ``module=LEVEL`` strings as given on the command line.

    Raises:
        InvalidConfigError: If an entry is not of the form module=LEVEL
    """
    levels: dict[str, str] = {}
    for entry in entries:
        module, sep, level_name = entry.partition("=")
        if not sep or not module.strip() or not level_name.strip():
            raise InvalidConfigError("--log-level", entry, "expected module=LEVEL")
        levels[module.strip()] = level_name.strip()
    return levels


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance for a specific module.

    Args:
        name: Module name (e.g., 'refactor_first.ranking' or 'ranking')
              If None, returns the root refactor_first logger

    Returns:
        Logger instance
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER)

    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"

    return logging.getLogger(name)
