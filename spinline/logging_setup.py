"""Logging configuration for programs using spinline."""

import logging
import sys
from typing import Optional, TextIO


def setup_logging(verbose: bool = False, log_file: Optional[str] = None,
                  stream: Optional[TextIO] = None) -> None:
    """Set up logging configuration.

    Log records are written to ``stream`` (stderr by default). A running
    spinner on the same stream steps aside for them automatically.

    Args:
        verbose: Log at DEBUG instead of WARNING
        log_file: Optional file receiving a copy of every record
        stream: Stream for the console handler
    """
    log_level = logging.DEBUG if verbose else logging.WARNING
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = [logging.StreamHandler(stream if stream is not None else sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=handlers,
        force=True
    )

    # Reduce noise from external libraries
    logging.getLogger('yaml').setLevel(logging.WARNING)

    if not verbose:
        logging.getLogger('spinline').setLevel(logging.WARNING)
    else:
        logging.getLogger('spinline').setLevel(logging.DEBUG)
