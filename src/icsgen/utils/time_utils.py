"""Date expression parsing and iCalendar timestamp formatting.

A date expression is one of:

* a ``datetime`` (naive values are taken as local time),
* a ``date`` (local midnight of that day),
* an ``int``/``float`` Unix timestamp,
* a string, tried in order as

  1. a relative expression ``[BASE] (+|-) N UNIT ...`` where BASE is one of
     ``now``, ``today``, ``tomorrow``, ``yesterday`` (the last three at local
     midnight) and UNIT is second, minute, hour, day, week, month or year,
     optionally plural. Examples: ``now``, ``now + 1 hour``,
     ``tomorrow + 9 hours - 30 minutes``, ``+2 days``.
  2. an absolute date/time understood by ``dateutil``, e.g.
     ``2024-01-01 09:00:00``.
  3. a natural language phrase understood by ``dateparser``, e.g.
     ``in 2 days``.
"""

import re
from datetime import date, datetime, timedelta
from typing import Any

import dateparser
from dateutil import parser as duparser
from dateutil.relativedelta import relativedelta
from icalendar import vDate, vDatetime

from icsgen.exceptions import DateParseError
from icsgen.utils.timezone_utils import TimezoneManager

DT_FORMAT = 'datetime'
DT_FORMAT_DATE = 'date'

_BASES = {
    'now': None,
    'today': timedelta(0),
    'tomorrow': timedelta(days=1),
    'yesterday': timedelta(days=-1),
}
_UNITS = r'(second|minute|hour|day|week|month|year)s?'
_OFFSET = re.compile(rf'([+-])\s*(\d+)\s*{_UNITS}\b', re.IGNORECASE)
_RELATIVE = re.compile(
    rf'^\s*(?P<base>now|today|tomorrow|yesterday)?(?P<offsets>(?:\s*[+-]\s*\d+\s*{_UNITS}\b)*)\s*$',
    re.IGNORECASE
)
_LOOKS_RELATIVE = re.compile(r'^\s*(?:(?:now|today|tomorrow|yesterday)\s*)?[+-]', re.IGNORECASE)
# Units measured in elapsed time; the rest move the local wall clock
_ELAPSED_UNITS = frozenset({'second', 'minute', 'hour'})

def _parse_relative(text: str, tz_manager: TimezoneManager) -> datetime | None:
    match = _RELATIVE.match(text)
    if match is None or not (match.group('base') or match.group('offsets').strip()):
        return None
    
    result = tz_manager.now()
    base = (match.group('base') or 'now').lower()
    if _BASES[base] is not None:
        result = result.replace(hour=0, minute=0, second=0, microsecond=0) + _BASES[base]
    
    for sign, amount, unit in _OFFSET.findall(match.group('offsets')):
        unit = unit.lower()
        count = int(amount) if sign == '+' else -int(amount)
        if unit in _ELAPSED_UNITS:
            utc = tz_manager.to_utc(result) + timedelta(**{f'{unit}s': count})
            result = utc.astimezone(tz_manager.local_tz)
        else:
            result = result + relativedelta(**{f'{unit}s': count})
    return result

def _parse_absolute(text: str, tz_manager: TimezoneManager) -> datetime | None:
    today = tz_manager.now().replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    try:
        return duparser.parse(text, default=today)
    except (duparser.ParserError, ValueError, OverflowError):
        return None

def _parse_natural(text: str, tz_manager: TimezoneManager) -> datetime | None:
    return dateparser.parse(text, settings={
        'TIMEZONE': tz_manager.timezone_name,
        'RETURN_AS_TIMEZONE_AWARE': True,
        'RELATIVE_BASE': tz_manager.now().replace(tzinfo=None),
    })

def parse_date_expression(value: Any, tz_manager: TimezoneManager, key: str | None = None) -> datetime:
    """Interpret value as an aware point in time anchored to the local zone.
    
    Raises:
        DateParseError: If value cannot be interpreted as a date/time
    """
    if isinstance(value, datetime):
        return tz_manager.localize_datetime(value) if value.tzinfo is None else value
    if isinstance(value, date):
        return tz_manager.localize_datetime(datetime(value.year, value.month, value.day))
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz_manager.local_tz)
        except (OverflowError, OSError, ValueError) as e:
            raise DateParseError(f"Timestamp out of range: {value}", value, key) from e
    if not isinstance(value, str):
        raise DateParseError(f"Cannot interpret {type(value).__name__} as a date/time", value, key)
    
    if _LOOKS_RELATIVE.match(value):
        result = _parse_relative(value, tz_manager)
        if result is None:
            raise DateParseError(f"Invalid relative date expression: {value!r}", value, key)
        return result
    
    result = (
        _parse_relative(value, tz_manager)
        or _parse_absolute(value, tz_manager)
        or _parse_natural(value, tz_manager)
    )
    if result is None:
        raise DateParseError(f"Unable to parse date/time expression: {value!r}", value, key)
    if result.tzinfo is None:
        result = tz_manager.localize_datetime(result)
    return result

def format_timestamp(
    value: Any,
    tz_manager: TimezoneManager,
    fmt: str = DT_FORMAT,
    key: str | None = None
) -> str:
    """Format a date expression as YYYYMMDDTHHMMSSZ (UTC) or YYYYMMDD."""
    dt = parse_date_expression(value, tz_manager, key)
    if fmt == DT_FORMAT_DATE:
        return vDate(dt.date()).to_ical().decode('ascii')
    return vDatetime(tz_manager.to_utc(dt).replace(microsecond=0)).to_ical().decode('ascii')
