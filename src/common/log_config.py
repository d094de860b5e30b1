"""
Logging Configuration

Sets up logging for the sync scripts, the scheduler and the export server.
Everything is written to stderr so that CSV written to stdout stays clean.
"""

import logging
import sys

# Libraries whose INFO chatter is noise for sync runs
NOISY_LOGGERS = ('urllib3', 'apscheduler.executors', 'httpx')

PLAIN_FORMAT = "%(levelname)-8s %(name)s: %(message)s"
TIMESTAMP_FORMAT = "%(asctime)s " + PLAIN_FORMAT


def setup_logging(verbose: bool = False, quiet: bool = False, timestamps: bool = False) -> None:
    """
    Configure the ``src`` logger.

    Args:
        verbose: DEBUG level, including third-party loggers
        quiet: WARNING level
        timestamps: Prefix lines with the time (long-running scheduler/server)
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(TIMESTAMP_FORMAT if timestamps else PLAIN_FORMAT))

    logger = logging.getLogger("src")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)
