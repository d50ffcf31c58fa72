"""
Calendar builder that renders the complete iCalendar document.
"""

from collections.abc import Iterable

from icsgen.config.types import DEFAULT_CALENDAR_NAME
from icsgen.config.types import DEFAULT_PRODID
from icsgen.services.calendar.builders.event_builder import EventProps
from icsgen.utils.logging_utils import LogContextMixin
from icsgen.utils.timezone_utils import TimezoneManager

CRLF = '\r\n'

# Central European DST rule, emitted regardless of the local zone
DAYLIGHT_LINES = (
    'BEGIN:DAYLIGHT',
    'TZOFFSETFROM:+0100',
    'TZOFFSETTO:+0200',
    'TZNAME:CEST',
    'DTSTART:19700329T020000',
    'RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU',
    'END:DAYLIGHT',
)
STANDARD_LINES = (
    'BEGIN:STANDARD',
    'TZOFFSETFROM:+0200',
    'TZOFFSETTO:+0100',
    'TZNAME:CET',
    'DTSTART:19701025T030000',
    'RRULE:FREQ=YEARLY;BYMONTH=10;BYDAY=-1SU',
    'END:STANDARD',
)


class CalendarBuilder(LogContextMixin):
    """Builder for the calendar document text."""
    
    def __init__(
        self,
        tz_manager: TimezoneManager,
        prodid: str = DEFAULT_PRODID,
        calendar_name: str = DEFAULT_CALENDAR_NAME
    ):
        """Initialize calendar builder."""
        super().__init__()
        self.tz_manager = tz_manager
        self.prodid = prodid
        self.calendar_name = calendar_name
    
    def build_header(self) -> list[str]:
        """Create the VCALENDAR header lines."""
        return [
            'BEGIN:VCALENDAR',
            'VERSION:2.0',
            f'PRODID:{self.prodid}',
            f'X-WR-CALNAME:{self.calendar_name}',
            'CALSCALE:GREGORIAN',
            'METHOD:PUBLISH',
        ]
    
    def build_timezone(self) -> list[str]:
        """Create the timezone name line and the VTIMEZONE block."""
        tz_name = self.tz_manager.timezone_name
        return [
            f'X-WR-TIMEZONE:{tz_name}',
            'BEGIN:VTIMEZONE',
            f'TZID:{tz_name}',
            f'X-LIC-LOCATION:{tz_name}',
            *DAYLIGHT_LINES,
            *STANDARD_LINES,
            'END:VTIMEZONE',
        ]
    
    @staticmethod
    def build_event_lines(event: EventProps) -> list[str]:
        """Create one KEY:VALUE line per event property."""
        lines = []
        for key, value in event.items():
            if isinstance(value, bytes):
                value = value.decode('utf-8', errors='replace')
            lines.append(f'{key}:{value}')
        return lines
    
    def build_lines(self, events: Iterable[EventProps]) -> list[str]:
        """Create all document lines in order."""
        lines = self.build_header() + self.build_timezone()
        for event in events:
            lines.extend(self.build_event_lines(event))
        lines.append('END:VCALENDAR')
        return lines
    
    def render(self, events: Iterable[EventProps]) -> str:
        """Render the document, joining lines with CRLF."""
        lines = self.build_lines(events)
        self.debug(f"Rendered calendar with {len(lines)} lines")
        return CRLF.join(lines)
