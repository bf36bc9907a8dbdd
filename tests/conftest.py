import pytest

from icstools.model import Event, ParsedCalendar, Property, Timezone, Transition
from icstools.policy import OperatingMode, UnknownPropertyPolicy
from icstools.transcode import TranscodeSettings

SEED = b"s3cr3t"

SAMPLE_ICS = """\
BEGIN:VCALENDAR
VERSION:2.0
PRODID:-//Example Corp//Calendar 1.0//EN
CALSCALE:GREGORIAN
METHOD:PUBLISH
X-WR-CALNAME:Jane's calendar
BEGIN:VTIMEZONE
TZID:Europe/Paris
BEGIN:DAYLIGHT
DTSTART:19700329T020000
RRULE:FREQ=YEARLY;BYMONTH=3;BYDAY=-1SU
TZNAME:CEST
TZOFFSETFROM:+0100
TZOFFSETTO:+0200
END:DAYLIGHT
BEGIN:STANDARD
DTSTART:19701025T030000
RRULE:FREQ=YEARLY;BYMONTH=10;BYDAY=-1SU
TZNAME:CET
TZOFFSETFROM:+0200
TZOFFSETTO:+0100
END:STANDARD
END:VTIMEZONE
BEGIN:VEVENT
UID:abc123
DTSTAMP:20231201T120000Z
SUMMARY:Dentist
LOCATION:12 High Street
DESCRIPTION:Bring the forms
DTSTART;TZID=Europe/Paris:20240101T090000
DTEND;TZID=Europe/Paris:20240101T100000
STATUS:CONFIRMED
BEGIN:VALARM
ACTION:DISPLAY
TRIGGER:-PT15M
END:VALARM
END:VEVENT
END:VCALENDAR
"""


def prop(name, value=None, params=None):
    return Property(name, params, value)


@pytest.fixture
def calendar():
    """A small parsed calendar with one timezone and one event."""
    return ParsedCalendar(
        properties=[
            prop("VERSION", "2.0"),
            prop("PRODID", "-//Example Corp//Calendar 1.0//EN"),
            prop("CALSCALE", "GREGORIAN"),
            prop("X-WR-CALNAME", "Jane's calendar"),
        ],
        timezones=[
            Timezone(
                [prop("TZID", "Europe/Paris")],
                [Transition([prop("DTSTART", "19701025T030000"), prop("TZOFFSETFROM", "+0200"), prop("TZOFFSETTO", "+0100")])],
            )
        ],
        events=[
            Event(
                [
                    prop("UID", "abc123"),
                    prop("SUMMARY", "Dentist"),
                    prop("DTSTART", "20240101T090000Z"),
                    prop("LOCATION", "12 High Street"),
                ],
                alarms=[[prop("ACTION", "DISPLAY")]],
            )
        ],
    )


@pytest.fixture
def anonymize_settings():
    return TranscodeSettings(mode=OperatingMode.ANONYMIZE, message="Busy", seed=SEED)


@pytest.fixture
def ignore_settings():
    return TranscodeSettings(
        mode=OperatingMode.IGNORE_MATCHING,
        ignore_if_summary_is="Private",
        unknown_properties=UnknownPropertyPolicy.STRICT,
    )


@pytest.fixture
def sample_ics():
    return SAMPLE_ICS
