"""Value sanitizer for calendar and event properties."""

from typing import Any

from icsgen.utils.text_utils import escape_text
from icsgen.utils.text_utils import to_utf8
from icsgen.utils.time_utils import DT_FORMAT
from icsgen.utils.time_utils import DT_FORMAT_DATE
from icsgen.utils.time_utils import format_timestamp
from icsgen.utils.timezone_utils import TimezoneManager

AVAILABLE_PROPERTIES = (
    'description',
    'dtend',
    'dtstart',
    'dtend_date',
    'dtstart_date',
    'location',
    'summary',
    'url',
)

TIMESTAMP_KEYS = frozenset({'dtend', 'dtstamp', 'dtstart'})
DATE_KEYS = frozenset({'dtend_date', 'dtstart_date'})

class ValueSanitizer:
    """Normalizes raw property values into iCalendar text."""
    
    def __init__(self, tz_manager: TimezoneManager):
        self.tz_manager = tz_manager
    
    def sanitize(self, value: Any, key: str | None = None) -> str | bytes:
        """Format or escape value according to the property it belongs to.
        
        Timestamp keys are rendered as UTC timestamps, date keys as
        YYYYMMDD, and everything else is escaped and decoded to text.
        
        Raises:
            DateParseError: If a timestamp or date value cannot be parsed
        """
        if key in TIMESTAMP_KEYS:
            return format_timestamp(value, self.tz_manager, DT_FORMAT, key)
        if key in DATE_KEYS:
            return format_timestamp(value, self.tz_manager, DT_FORMAT_DATE, key)
        
        if value is None:
            value = ''
        elif not isinstance(value, (str, bytes)):
            value = str(value)
        return to_utf8(escape_text(value))
