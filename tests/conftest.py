"""Pytest configuration and shared fixtures."""

import itertools
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from icsgen.config.settings import ConfigurationManager
from icsgen.config.types import AppConfig
from icsgen.services.calendar_service import CalendarService
from icsgen.utils.timezone_utils import TimezoneManager

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=ZoneInfo("UTC"))
LOCAL_TZ = "Europe/Amsterdam"

ENV_VARS = (
    "ICSGEN_TIMEZONE",
    "ICSGEN_PRODID",
    "ICSGEN_CALNAME",
    "ICSGEN_LOG_LEVEL",
    "ICSGEN_LOG_FILE",
    "ICSGEN_CONFIG_DIR",
    "TZ",
)

@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Clear configuration environment and the cached configuration."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    ConfigurationManager._instance = None
    
    yield
    
    ConfigurationManager._instance = None

@pytest.fixture
def tz_manager():
    """Timezone manager pinned to Amsterdam with a frozen clock."""
    return TimezoneManager(LOCAL_TZ, clock=lambda: FIXED_NOW)

@pytest.fixture
def uid_factory():
    """Deterministic UID generator."""
    counter = itertools.count(1)
    return lambda: f"uid-{next(counter)}"

@pytest.fixture
def app_config():
    """Test configuration data."""
    return AppConfig(timezone=LOCAL_TZ)

@pytest.fixture
def service(app_config, tz_manager, uid_factory):
    """Calendar service with injected clock, zone and UIDs."""
    return CalendarService(
        config=app_config,
        timezone_manager=tz_manager,
        uid_factory=uid_factory
    )
