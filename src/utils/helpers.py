"""
helpers.py
----------
Simulator logging, run timing, and the eager parameter checks applied at
every public entry point (T, step counts, path counts, bins, workers).
"""

import os
import math
import logging
import time
import functools
import numbers
from datetime import datetime
from pathlib import Path
from typing import Optional

from src.exceptions import InvalidParameterError

LOG_FORMAT = logging.Formatter(
    "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def get_logger(name: str, level: str = "INFO",
               log_dir: Optional[str] = None) -> logging.Logger:
    """
    Logger for a simulator module.

    Simulation modules log run parameters and timings at DEBUG and
    degenerate ensembles at WARNING, so at the default INFO level only
    warnings reach the console. Pass log_dir to also keep a daily
    brownian_motion_YYYYMMDD.log of those records.

    Parameters
    ----------
    name    : Module __name__, e.g. "src.models.monte_carlo".
    level   : "DEBUG" to see per-run parameters and @timeit timings.
    log_dir : Directory for the daily log file. Console only when None.
    """
    logger = logging.getLogger(name)

    if logger.handlers:          # module re-imported: keep existing handlers
        return logger

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    console = logging.StreamHandler()
    console.setFormatter(LOG_FORMAT)
    logger.addHandler(console)

    if log_dir is not None:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_file = os.path.join(
            log_dir, f"brownian_motion_{datetime.now():%Y%m%d}.log")
        daily = logging.FileHandler(log_file)
        daily.setFormatter(LOG_FORMAT)
        logger.addHandler(daily)

    return logger


def timeit(func):
    """Log wall time of a simulation run at DEBUG on the caller's module logger."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        t0 = time.perf_counter()
        result = func(*args, **kwargs)
        logging.getLogger(func.__module__).debug(
            "%s took %.3f s", func.__qualname__, time.perf_counter() - t0)
        return result
    return wrapper


def validate_horizon(T) -> float:
    """Time horizon must be a finite real number > 0."""
    if isinstance(T, bool) or not isinstance(T, numbers.Real):
        raise InvalidParameterError(f"T must be a real number, got {T!r}")
    if not math.isfinite(T) or T <= 0:
        raise InvalidParameterError(f"T must be positive and finite, got {T}")
    return float(T)


def validate_positive_int(value, name: str) -> int:
    """Step and path counts must be integers >= 1 (bools rejected)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise InvalidParameterError(f"{name} must be >= 1, got {value}")
    return int(value)
