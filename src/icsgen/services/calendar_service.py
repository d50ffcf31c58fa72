"""
Calendar service: the ICS document builder.
"""

from collections.abc import Callable
from collections.abc import Mapping
from typing import Any

from icsgen.config.settings import load_config
from icsgen.config.types import AppConfig
from icsgen.exceptions import IcsGenError
from icsgen.exceptions import handle_errors
from icsgen.services.calendar.builders import CalendarBuilder
from icsgen.services.calendar.builders import EventBuilder
from icsgen.services.calendar.builders.event_builder import EventProps
from icsgen.services.calendar.sanitizer import AVAILABLE_PROPERTIES
from icsgen.services.calendar.sanitizer import ValueSanitizer
from icsgen.utils.logging_utils import LogContextMixin
from icsgen.utils.logging_utils import log_execution
from icsgen.utils.timezone_utils import TimezoneManager


class CalendarService(LogContextMixin):
    """Collects calendar properties and events and renders them as iCalendar text.
    
    Usage::
    
        ics = CalendarService({'summary': 'Standup'})
        ics.add_event({
            'summary': 'Standup',
            'dtstart': 'now + 30 minutes',
            'dtend': 'now + 1 hour',
        })
        contents = ics.to_string()
    
    Instances are not thread safe.
    """
    
    def __init__(
        self,
        props: Mapping[str, Any] | None = None,
        *,
        config: AppConfig | None = None,
        timezone_manager: TimezoneManager | None = None,
        uid_factory: Callable[[], str] | None = None
    ):
        """Initialize service.
        
        Args:
            props: Initial calendar-level properties
            config: Application configuration, loaded from the environment if omitted
            timezone_manager: Clock and local timezone provider
            uid_factory: Callable generating event UIDs
        """
        super().__init__()
        self.config = config or load_config()
        self.tz_manager = timezone_manager or TimezoneManager(self.config.timezone)
        self.sanitizer = ValueSanitizer(self.tz_manager)
        self.event_builder = EventBuilder(self.sanitizer, uid_factory)
        self.calendar_builder = CalendarBuilder(
            self.tz_manager,
            prodid=self.config.prodid,
            calendar_name=self.config.calendar_name
        )
        self._properties: dict[str, str | bytes] = {}
        self._events: list[EventProps] = []
        self.set_log_context(service="calendar")
        
        if props:
            self.set(props)
    
    def set(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        """Set one calendar property, or several from a mapping.
        
        Unknown keys are ignored.
        
        Raises:
            DateParseError: If a date property cannot be parsed
        """
        if isinstance(key, Mapping):
            for k, v in key.items():
                self.set(k, v)
            return
        
        if key not in AVAILABLE_PROPERTIES:
            self.debug(f"Ignoring unknown calendar property {key!r}")
            return
        
        with handle_errors(IcsGenError, "calendar", "set"):
            self._properties[key] = self.sanitizer.sanitize(value, key)
    
    def add_event(self, data: Mapping[str, Any]) -> None:
        """Append an event built from a mapping of field names to values.
        
        Raises:
            DateParseError: If a date field cannot be parsed
        """
        with handle_errors(IcsGenError, "calendar", "add_event"):
            event = self.event_builder.build(data)
        self._events.append(event)
        self.debug(f"Added event {event['UID']}", event_count=len(self._events))
    
    @log_execution(level='DEBUG')
    def to_string(self) -> str:
        """Render the iCalendar document."""
        return self.calendar_builder.render(self._events)
    
    def __str__(self) -> str:
        return self.to_string()
    
    def __len__(self) -> int:
        return len(self._events)
    
    def __bool__(self) -> bool:
        return True
    
    @property
    def event_count(self) -> int:
        """Number of events added so far."""
        return len(self._events)
    
    @property
    def events(self) -> tuple[EventProps, ...]:
        """Copies of the stored event property mappings."""
        return tuple(dict(event) for event in self._events)
    
    @property
    def properties(self) -> dict[str, str | bytes]:
        """Copy of the calendar-level properties."""
        return dict(self._properties)
