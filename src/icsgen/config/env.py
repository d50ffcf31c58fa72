"""Environment variable handling for configuration."""

import logging
import os
from typing import Any
from zoneinfo import ZoneInfo

from icsgen.config.types import DEFAULT_CALENDAR_NAME
from icsgen.config.types import DEFAULT_PRODID
from icsgen.config.types import GlobalConfig
from icsgen.config.types import LoggingConfig


logger = logging.getLogger(__name__)


class EnvConfig:
    """Environment variable configuration."""

    @staticmethod
    def get_env_value(env_var: str, default: Any | None = None) -> Any | None:
        """Get value from environment variable with default."""
        return os.getenv(env_var, default)

    @classmethod
    def get_timezone(cls) -> str:
        """Get the local timezone name.
        
        ICSGEN_TIMEZONE is used as given. Otherwise TZ is used when it names
        a zone (a leading colon is ignored), and UTC when it does not.
        """
        explicit = cls.get_env_value('ICSGEN_TIMEZONE')
        if explicit:
            return explicit
        
        tz = (cls.get_env_value('TZ') or '').lstrip(':')
        if not tz:
            return 'UTC'
        try:
            ZoneInfo(tz)
        except (KeyError, ValueError, OSError):
            logger.warning(f"TZ={tz!r} is not an IANA zone name, using UTC")
            return 'UTC'
        return tz

    @classmethod
    def get_logging_config(cls) -> LoggingConfig:
        """Get logging configuration from environment."""
        return {
            'level': cls.get_env_value('ICSGEN_LOG_LEVEL', 'WARNING'),
            'file': cls.get_env_value('ICSGEN_LOG_FILE')
        }

    @classmethod
    def get_global_config(cls) -> GlobalConfig:
        """Get global configuration from environment."""
        return {
            'timezone': cls.get_timezone(),
            'calendar': {
                'prodid': cls.get_env_value('ICSGEN_PRODID', DEFAULT_PRODID),
                'name': cls.get_env_value('ICSGEN_CALNAME', DEFAULT_CALENDAR_NAME)
            },
            'logging': cls.get_logging_config()
        }
