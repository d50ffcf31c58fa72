"""Event builder for VEVENT blocks."""

import uuid
from collections.abc import Callable, Mapping
from typing import Any

from icsgen.error_codes import ErrorCode
from icsgen.exceptions import CalendarError
from icsgen.services.calendar.sanitizer import AVAILABLE_PROPERTIES
from icsgen.services.calendar.sanitizer import ValueSanitizer
from icsgen.utils.logging_utils import LogContextMixin
from icsgen.utils.text_utils import fold_line
from icsgen.utils.time_utils import format_timestamp

EventProps = dict[str, str | bytes]

# Output keys for properties that carry a value type parameter
KEY_RENAMES = {
    'url': 'url;VALUE=URI',
    'dtstart_date': 'DTSTART;VALUE=DATE',
    'dtend_date': 'DTEND;VALUE=DATE',
}

def generate_uid() -> str:
    """Generate a unique event identifier."""
    return uuid.uuid4().hex

class EventBuilder(LogContextMixin):
    """Builds the ordered property mapping of a single VEVENT."""
    
    def __init__(self, sanitizer: ValueSanitizer, uid_factory: Callable[[], str] | None = None) -> None:
        """Initialize builder."""
        super().__init__()
        self.sanitizer = sanitizer
        self.uid_factory = uid_factory or generate_uid
        self.set_log_context(service="event_builder")
    
    def build(self, data: Mapping[str, Any]) -> EventProps:
        """Build an event from a mapping of field names to raw values.
        
        Recognized fields are sanitized, the description is folded and a few
        keys are renamed. Unrecognized fields pass through under their
        upper-cased name. Default fields are appended after the user fields.
        
        Raises:
            DateParseError: If a date field cannot be parsed
            CalendarError: If data is not a mapping
        """
        if not isinstance(data, Mapping):
            raise CalendarError(
                "Event data must be a mapping",
                ErrorCode.VALIDATION_FAILED,
                {"type": type(data).__name__}
            )
        
        props: EventProps = {'BEGIN': 'VEVENT'}
        
        for key, value in data.items():
            if key in AVAILABLE_PROPERTIES:
                value = self.sanitizer.sanitize(value, key)
            if key == 'description':
                value = fold_line(value)
            props[str(KEY_RENAMES.get(key, key)).upper()] = value
        
        timestamp = format_timestamp('now', self.sanitizer.tz_manager)
        props['LAST-MODIFIED'] = timestamp
        props['DTSTAMP'] = timestamp
        props['UID'] = self.uid_factory()
        props['STATUS'] = 'CONFIRMED'
        
        props['END'] = 'VEVENT'
        
        self.debug("Built event", uid=props['UID'], fields=len(data))
        return props
