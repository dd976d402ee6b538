"""Logging setup shared by the command-line entry points."""

from __future__ import annotations

import logging
import sys

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}

# requests/urllib3 log every connection at DEBUG; keep them out of -v output
NOISY_LOGGERS = ("urllib3", "requests")


def add_logging_args(parser) -> None:
    """Add --log-level, -v and -q options to an argparse parser."""
    group = parser.add_argument_group("logging")
    group.add_argument(
        "--log-level",
        choices=tuple(LOG_LEVELS),
        help="Set log verbosity explicitly (overrides -v/-q)",
    )
    group.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show debug output, including each download",
    )
    group.add_argument(
        "-q", "--quiet",
        action="count",
        default=0,
        help="Only show warnings (-qq for errors only)",
    )


def resolve_log_level(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Turn --log-level or the -v/-q counts into a numeric level."""
    if log_level:
        return LOG_LEVELS[log_level.lower()]

    # each -v steps one rung towards DEBUG, each -q one rung towards ERROR
    ladder = (logging.ERROR, logging.WARNING, logging.INFO, logging.DEBUG)
    rung = ladder.index(logging.INFO) + verbose - quiet
    return ladder[min(max(rung, 0), len(ladder) - 1)]


def configure_logging(
    log_level: str | None = None,
    verbose: int = 0,
    quiet: int = 0,
) -> int:
    """Configure root logging and return the active level.

    If the root logger already has handlers (an embedding application or
    pytest set them up), only their levels are adjusted.
    """
    level = resolve_log_level(log_level=log_level, verbose=verbose, quiet=quiet)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        for handler in root_logger.handlers:
            handler.setLevel(level)
        return level

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
    return level
