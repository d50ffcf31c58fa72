"""Timezone utilities for the application."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

from icsgen.exceptions import ConfigError

Clock = Callable[[], datetime]

def system_clock() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(ZoneInfo("UTC"))

class TimezoneManager:
    """Provides the local timezone and the current time.
    
    Both are injected so that output depending on "now" or on the local
    zone can be made deterministic.
    """
    
    def __init__(self, local_timezone: str = "UTC", clock: Clock | None = None):
        """Initialize timezone manager.
        
        Args:
            local_timezone: IANA name of the local timezone
            clock: Callable returning the current time. Naive results are
                taken to be UTC. Defaults to the system clock.
            
        Raises:
            ConfigError: If the timezone is invalid
        """
        self.clock = clock or system_clock
        self.set_timezone(local_timezone)
    
    def set_timezone(self, timezone: str) -> None:
        """Set the local timezone.
        
        Raises:
            ConfigError: If the timezone is invalid
        """
        try:
            self.local_tz = ZoneInfo(timezone)
            self.utc_tz = ZoneInfo("UTC")
        except Exception as e:
            raise ConfigError(f"Invalid timezone {timezone}: {e!s}", {"timezone": timezone}) from e
    
    def localize_datetime(self, dt: datetime) -> datetime:
        """Attach the local timezone to a naive datetime, or convert an aware one."""
        if dt.tzinfo is None:
            return dt.replace(tzinfo=self.local_tz)
        return dt.astimezone(self.local_tz)
    
    def to_utc(self, dt: datetime) -> datetime:
        """Convert datetime to UTC. Naive input is taken as local time."""
        if dt.tzinfo is None:
            dt = self.localize_datetime(dt)
        return dt.astimezone(self.utc_tz)
    
    def now(self) -> datetime:
        """Get current time in local timezone."""
        current = self.clock()
        if current.tzinfo is None:
            current = current.replace(tzinfo=self.utc_tz)
        return current.astimezone(self.local_tz)
    
    @property
    def timezone_name(self) -> str:
        """Get the name of the local timezone."""
        return str(self.local_tz)
