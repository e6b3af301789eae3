# === FILE: pagewalk/logger.py ===
"""The ``PageWalk`` logger shared by the walker, the fetcher and the engine.

What gets logged where:

* walker: each page fetch at DEBUG (``Fetching page 2: <locator>``);
* fetcher: retries and parsed pages at DEBUG, give-ups and malformed pages
  at WARNING;
* engine: walk start and finish at INFO.

Records go to *stderr*, so ``pagewalk walk`` can print JSON on stdout, and
optionally to a rotating log file::

      from pagewalk.logger import logger
      logger.debug("Fetching page %d: %s", n, locator)
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_LOGGER_NAME: Final[str] = "PageWalk"


def configure(
    level: Union[int, str] = "INFO",
    log_file: str | Path | None = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Replace the handlers of the ``PageWalk`` logger.

    *log_file*, when given, gets a rotating handler (5 MB, 3 backups) next to
    the stderr one. Both use *log_format*.
    """
    lg = logging.getLogger(_LOGGER_NAME)
    lg.setLevel(level)
    for handler in list(lg.handlers):
        lg.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(str(log_file), maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8")
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        lg.addHandler(handler)

    lg.propagate = False
    return lg


logger: logging.Logger = configure()

__all__ = ["logger", "configure", "DEFAULT_FORMAT"]
