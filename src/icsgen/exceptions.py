"""Centralized error definitions for the ICS generator."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from icsgen.error_codes import ErrorCode


logger = logging.getLogger(__name__)

@dataclass
class IcsGenError(Exception):
    """Base exception for all ICS generator errors."""
    message: str
    code: ErrorCode
    details: dict[str, Any] | None = None
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

class ParseError(IcsGenError):
    """Input could not be parsed."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.PARSE_FAILED, details)

class DateParseError(ParseError):
    """A date/time expression could not be interpreted."""
    def __init__(self, message: str, value: Any, key: str | None = None):
        super().__init__(message, {"value": value, "key": key})
        self.value = value
        self.key = key

class ConfigError(IcsGenError):
    """Configuration error."""
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message, ErrorCode.CONFIG_INVALID, details)

class CalendarError(IcsGenError):
    """Calendar builder error."""
    def __init__(self, message: str, code: ErrorCode = ErrorCode.SERVICE_ERROR, details: dict[str, Any] | None = None):
        super().__init__(message, code, details)

@contextmanager
def handle_errors(
    error_type: type[IcsGenError],
    service: str,
    operation: str
) -> Iterator[None]:
    """Log errors raised inside the block and re-raise them.
    
    Args:
        error_type: The expected error type, logged as a warning
        service: The service name
        operation: The operation name
    """
    try:
        yield
    except error_type as e:
        logger.warning(f"{service}.{operation} failed: {e}")
        raise
    except Exception as e:
        # Log unexpected error with traceback
        logger.error(
            f"Unexpected error in {service}.{operation}: {e}",
            exc_info=True
        )
        raise
