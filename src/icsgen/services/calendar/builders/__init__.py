"""
Calendar builders package.
"""

from icsgen.services.calendar.builders.calendar_builder import CalendarBuilder
from icsgen.services.calendar.builders.event_builder import EventBuilder

__all__ = [
    'CalendarBuilder',
    'EventBuilder'
]
