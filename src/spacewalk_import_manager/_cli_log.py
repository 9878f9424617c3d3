"""Logging setup for the swiman command line."""

import datetime
import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_handlers: list[logging.Handler] = []


def initialize(log_directory: Path, stderr_level: int, file_level: int) -> Path:
    """Sends logs to stderr and to a new file in log_directory.

    Calling it again replaces the handlers from the previous call.

    :returns the path of the log file for this run
    """
    log_directory.mkdir(parents=True, exist_ok=True)
    stamp = datetime.datetime.now(datetime.UTC).strftime("%Y%m%dT%H%M%SZ")
    log_file = log_directory / f"swiman-{stamp}.log"

    stderr = logging.StreamHandler(sys.stderr)
    stderr.setLevel(stderr_level)
    stderr.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    file = logging.FileHandler(log_file, encoding="utf-8")
    file.setLevel(file_level)
    file.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger()
    while _handlers:
        old = _handlers.pop()
        root.removeHandler(old)
        old.close()

    root.setLevel(min(stderr_level, file_level))
    for h in (stderr, file):
        root.addHandler(h)
        _handlers.append(h)

    return log_file
