"""
Utility decorators and context managers.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Dict, Iterator

logger = logging.getLogger(__name__)


@contextmanager
def timer() -> Iterator[Dict[str, int]]:
    """
    Measure elapsed wall time of a block in milliseconds.

    The yielded dict is filled in when the block exits, so read it after
    the ``with`` statement.

    Example:
        >>> with timer() as t:
        ...     compose()
        >>> elapsed = t["ms"]
    """
    result = {"ms": 0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = int((time.perf_counter() - start) * 1000)


def timed(func):
    """Log the execution time of a function at debug level."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with timer() as t:
            value = func(*args, **kwargs)
        logger.debug(f"{func.__qualname__} took {t['ms']} ms")
        return value

    return wrapper
