"""Configuration type definitions."""

from dataclasses import dataclass
from typing import Optional, TypedDict

DEFAULT_PRODID = '-//Calendar//icsgen//NONSGML v1.0//EN'
DEFAULT_CALENDAR_NAME = 'Calendar'

class LoggingConfig(TypedDict):
    """Logging configuration."""
    level: str
    file: Optional[str]

class CalendarConfig(TypedDict):
    """Calendar header configuration."""
    prodid: str
    name: str

class GlobalConfig(TypedDict):
    """Global configuration structure."""
    timezone: str
    calendar: CalendarConfig
    logging: LoggingConfig

@dataclass
class AppConfig:
    """Application configuration."""
    timezone: str = 'UTC'
    prodid: str = DEFAULT_PRODID
    calendar_name: str = DEFAULT_CALENDAR_NAME
    log_level: str = 'WARNING'
    log_file: Optional[str] = None
    config_dir: Optional[str] = None
