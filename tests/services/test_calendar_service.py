"""Tests for the calendar service."""

import logging

import pytest
from icalendar import Calendar

from icsgen import CalendarService
from icsgen.config.types import AppConfig
from icsgen.exceptions import DateParseError


def test_standup_scenario(service, uid_factory):
    """A single event renders inside the calendar envelope."""
    service.set({"summary": "Standup"})
    service.add_event({
        "summary": "Standup",
        "dtstart": "2024-01-01 09:00:00",
        "dtend": "2024-01-01 09:15:00",
    })
    
    lines = service.to_string().split("\r\n")
    
    assert lines[0] == "BEGIN:VCALENDAR"
    assert lines[-1] == "END:VCALENDAR"
    assert lines.count("BEGIN:VEVENT") == 1
    assert lines.count("END:VEVENT") == 1
    event = lines[lines.index("BEGIN:VEVENT"):lines.index("END:VEVENT") + 1]
    assert event == [
        "BEGIN:VEVENT",
        "SUMMARY:Standup",
        "DTSTART:20240101T080000Z",
        "DTEND:20240101T081500Z",
        "LAST-MODIFIED:20240101T120000Z",
        "DTSTAMP:20240101T120000Z",
        "UID:uid-1",
        "STATUS:CONFIRMED",
        "END:VEVENT",
    ]

def test_url_scenario(service):
    """URLs carry VALUE=URI."""
    service.add_event({"url": "http://example.com"})
    assert "\r\nURL;VALUE=URI:http://example.com\r\n" in service.to_string()

def test_date_only_scenario(service):
    """Date-only starts render as VALUE=DATE."""
    service.add_event({"dtstart_date": "2024-06-01"})
    assert "\r\nDTSTART;VALUE=DATE:20240601\r\n" in service.to_string()

def test_long_description_scenario(service):
    """A 121 character description folds into three chunks."""
    service.add_event({"description": "z" * 121})
    text = service.to_string()
    
    assert "DESCRIPTION:" + "z" * 60 + "\r\n " + "z" * 60 + "\r\n z\r\n" in text

def test_render_is_idempotent(service):
    """Rendering twice without changes gives identical output."""
    service.add_event({"summary": "One", "dtstart": "now + 1 hour"})
    assert service.to_string() == service.to_string()
    assert str(service) == service.to_string()

def test_each_event_gets_a_new_uid():
    """Every add_event appends one event with a distinct UID."""
    ics = CalendarService()
    for expected in range(1, 6):
        ics.add_event({"summary": f"Event {expected}"})
        assert len(ics) == expected
        assert ics.event_count == expected
    
    uids = [event["UID"] for event in ics.events]
    assert len(set(uids)) == len(uids)

def test_events_render_in_order(service):
    """Events appear in append order."""
    service.add_event({"summary": "First"})
    service.add_event({"summary": "Second"})
    text = service.to_string()
    
    assert text.index("SUMMARY:First") < text.index("SUMMARY:Second")
    assert "UID:uid-1" in text
    assert "UID:uid-2" in text

def test_events_are_copies(service):
    """Mutating the returned events does not change the calendar."""
    service.add_event({"summary": "Keep"})
    service.events[0]["SUMMARY"] = "Changed"
    assert service.events[0]["SUMMARY"] == "Keep"

def test_set_single_and_mapping(service):
    """set accepts a key and value or a mapping; last write wins."""
    service.set("summary", "First")
    service.set({"summary": "Second", "location": "Room 1, East"})
    
    assert service.properties == {"summary": "Second", "location": r"Room 1\, East"}

def test_set_formats_dates(service):
    """Calendar-level date properties are sanitized like event fields."""
    service.set({"dtstart": "now + 30 minutes", "dtend_date": "2024-06-02"})
    
    assert service.properties["dtstart"] == "20240101T123000Z"
    assert service.properties["dtend_date"] == "20240602"

def test_set_ignores_unknown_keys(service, caplog):
    """Unknown calendar properties are silently dropped."""
    caplog.set_level(logging.DEBUG, logger="icsgen")
    service.set("color", "blue")
    service.set("dtstamp", "now")
    
    assert service.properties == {}
    assert "Ignoring unknown calendar property 'color'" in caplog.text

def test_calendar_properties_not_rendered(service):
    """Calendar-level properties are metadata only."""
    service.set("summary", "Hidden")
    assert "Hidden" not in service.to_string()

def test_constructor_props(app_config, tz_manager):
    """Initial properties go through set."""
    ics = CalendarService({"summary": "Standup", "bogus": 1}, config=app_config, timezone_manager=tz_manager)
    assert ics.properties == {"summary": "Standup"}

def test_parse_errors_surface_immediately(service):
    """Bad dates fail in set/add_event, not at render time."""
    with pytest.raises(DateParseError):
        service.set("dtstart", "???")
    with pytest.raises(DateParseError):
        service.add_event({"summary": "Bad", "dtend": "now + 3 fortnights"})
    
    assert len(service) == 0
    assert service.to_string().endswith("END:VCALENDAR")

def test_config_sets_header(tz_manager):
    """Product id and calendar name come from configuration."""
    config = AppConfig(timezone="Europe/Amsterdam", prodid="-//Acme//Planner//EN", calendar_name="Acme")
    text = CalendarService(config=config, timezone_manager=tz_manager).to_string()
    
    assert "\r\nPRODID:-//Acme//Planner//EN\r\n" in text
    assert "\r\nX-WR-CALNAME:Acme\r\n" in text

def test_timezone_from_environment(monkeypatch):
    """Without injection the local zone comes from the environment."""
    monkeypatch.setenv("ICSGEN_TIMEZONE", "Europe/Berlin")
    text = CalendarService().to_string()
    
    assert "\r\nX-WR-TIMEZONE:Europe/Berlin\r\n" in text
    assert "\r\nTZID:Europe/Berlin\r\n" in text

def test_output_parses_as_icalendar(service):
    """The document is readable by the icalendar library."""
    service.add_event({
        "summary": "Planning",
        "description": " ".join(["Quarterly planning session for the whole team"] * 3),
        "location": "Main hall",
        "url": "https://example.com/planning",
        "dtstart": "2024-03-01 10:00",
        "dtend": "2024-03-01 12:00",
    })
    service.add_event({"summary": "Holiday", "dtstart_date": "2024-06-01"})
    
    calendar = Calendar.from_ical(service.to_string())
    events = calendar.walk("VEVENT")
    
    assert len(events) == 2
    assert str(events[0]["SUMMARY"]) == "Planning"
    assert str(events[0]["DESCRIPTION"]) == " ".join(["Quarterly planning session for the whole team"] * 3)
    assert str(events[1]["UID"]) == "uid-2"

def test_empty_service_is_truthy(service):
    """A service with no events still counts as a calendar."""
    assert len(service) == 0
    assert service
    assert bool(CalendarService(config=AppConfig())) is True

def test_posix_tz_does_not_break_construction(monkeypatch):
    """A TZ value that is not a zone name renders in UTC."""
    monkeypatch.setenv("TZ", "CET-1CEST,M3.5.0,M10.5.0/3")
    text = CalendarService().to_string()
    
    assert "\r\nX-WR-TIMEZONE:UTC\r\n" in text
