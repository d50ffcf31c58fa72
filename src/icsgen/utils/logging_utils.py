"""
Logging helpers shared by the calendar components.
"""

import logging
import time
from collections.abc import Callable
from functools import wraps
from typing import Any
from typing import TypeVar

from typing_extensions import ParamSpec


T = TypeVar('T')
P = ParamSpec('P')

def log_execution(level: str = 'DEBUG') -> Callable[
    [Callable[P, T]], Callable[P, T]
]:
    """Log entry, duration and failure of the decorated function."""
    log_level = getattr(logging, level)

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        logger = logging.getLogger(func.__module__)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            logger.log(log_level, f"Calling {func.__name__}")
            started = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(
                    f"{func.__name__} failed after {time.perf_counter() - started:.3f}s: {e!s}",
                    exc_info=True
                )
                raise
            logger.log(log_level, f"{func.__name__} completed in {time.perf_counter() - started:.3f}s")
            return result

        return wrapper
    return decorator

class LogContextMixin:
    """Module logger whose records carry per-instance context fields.

    Context set with `set_log_context` and keyword arguments given to `log`
    are attached to the record as `extra_fields`, which the formatters in
    `icsgen.config.logging` render.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger(self.__class__.__module__)
        self._log_context: dict[str, Any] = {}

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_log_context(self, **fields: Any) -> None:
        """Add fields to every subsequent record from this instance."""
        self._log_context.update(fields)

    def log(self, level: int, msg: str, **fields: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, msg, extra={'extra_fields': {**self._log_context, **fields}})

    def debug(self, msg: str, **fields: Any) -> None:
        self.log(logging.DEBUG, msg, **fields)
