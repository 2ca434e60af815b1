"""Attach handlers to the engine's loggers for a CLI run."""

import logging
from pathlib import Path
from typing import Iterable, Optional

from sudoku_engine.tracing import TRACE_CATEGORIES, TRACE_ROOT

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"
ENGINE_LOGGER = "sudoku_engine"


def configure_logging(
    verbose: bool = False,
    categories: Iterable[str] = (),
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """Send engine records to stderr, and to ``log_file`` when given.

    ``verbose`` lowers the engine threshold to INFO; every name in
    ``categories`` turns on DEBUG tracing for that solving step.
    """
    categories = set(categories)
    unknown = sorted(categories - set(TRACE_CATEGORIES))
    if unknown:
        raise ValueError(f"unknown debug categories: {', '.join(unknown)}")

    root = logging.getLogger(ENGINE_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.INFO if verbose else logging.WARNING)
    root.propagate = False

    formatter = logging.Formatter(LOG_FORMAT)
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root.addHandler(stream)
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    for category in TRACE_CATEGORIES:
        trace = logging.getLogger(f"{TRACE_ROOT}.{category}")
        trace.setLevel(logging.DEBUG if category in categories else logging.NOTSET)
    return root
