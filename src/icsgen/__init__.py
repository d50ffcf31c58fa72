"""
iCalendar document generator.
"""

__version__ = '0.1.0'

from .exceptions import (
    CalendarError,
    ConfigError,
    DateParseError,
    IcsGenError,
    ParseError,
)
from .services.calendar_service import CalendarService
from .utils.timezone_utils import TimezoneManager

__all__ = [
    'CalendarError',
    'CalendarService',
    'ConfigError',
    'DateParseError',
    'IcsGenError',
    'ParseError',
    'TimezoneManager'
]
