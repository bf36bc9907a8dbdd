# Regenerates a whole calendar from its parsed form, keeping only what the policy table allows.
# The output is built from scratch rather than by editing the source text, so nothing we
# haven't explicitly decided to keep can make it through.

import logging
from enum import Enum

from icstools.errors import IcsToolsError, UnsupportedComponent
from icstools.filter import filter_component
from icstools.model import ComponentKind
from icstools.policy import Action, OperatingMode, PolicyTable, UnknownPropertyPolicy
from icstools.render import ParamStyle, begin, end, render_property

logger = logging.getLogger(__name__)

# These are written by the header stage and never by the calendar properties stage
HEADER_PROPERTIES = ("VERSION", "PRODID")
DEFAULT_PRODID = "-//ics-tools//anonymized calendar//EN"
DEFAULT_DTSTAMP = "19700101T000000Z"


class HeaderMode(Enum):
    """
    Whether the `VERSION`/`PRODID` header is a fixed constant or passed through from the
    source calendar.
    """

    FIXED = "fixed"
    PASSTHROUGH = "passthrough"


class TranscodeSettings:
    """
    Everything the transcoder needs to know about how the operator wants calendars
    regenerated. This is built once at startup and never modified.
    """

    mode: OperatingMode
    message: str | None
    seed: bytes | None
    ignore_if_summary_is: str | None
    unknown_properties: UnknownPropertyPolicy
    param_style: ParamStyle
    header: HeaderMode
    prodid: str
    dtstamp: str

    def __init__(
        self,
        mode=OperatingMode.ANONYMIZE,
        message=None,
        seed=None,
        ignore_if_summary_is=None,
        unknown_properties=UnknownPropertyPolicy.STRICT,
        param_style=ParamStyle.BARE,
        header=HeaderMode.FIXED,
        prodid=DEFAULT_PRODID,
        dtstamp=DEFAULT_DTSTAMP,
    ):
        self.mode = mode
        self.message = message
        self.seed = seed
        self.ignore_if_summary_is = ignore_if_summary_is
        self.unknown_properties = unknown_properties
        self.param_style = param_style
        self.header = header
        self.prodid = prodid
        self.dtstamp = dtstamp

    def __repr__(self):
        # Never print the seed
        return (
            f"TranscodeSettings(mode={self.mode.value}, message={self.message!r}, "
            f"ignore_if_summary_is={self.ignore_if_summary_is!r}, "
            f"unknown_properties={self.unknown_properties.value}, param_style={self.param_style.value}, "
            f"header={self.header.value}, prodid={self.prodid!r}, dtstamp={self.dtstamp!r})"
        )


def in_context(message, fn, *args):
    """
    Calls the given function, attaching the given context message to any error it raises.
    """

    try:
        return fn(*args)
    except IcsToolsError as e:
        raise e.with_context(message)


class CalendarTranscoder:
    """
    Walks a parsed calendar (header, calendar properties, timezones, events) and assembles an
    anonymized copy of it. Any failure aborts the whole calendar: there is never partial
    output.
    """

    def __init__(self, settings: TranscodeSettings):
        self.settings = settings
        self.policy = PolicyTable.for_mode(settings.mode)

    def filter(self, kind, properties):
        return filter_component(
            kind,
            properties,
            self.policy,
            self.settings.unknown_properties,
            self.settings.seed,
            self.settings.param_style,
        )

    def render(self, name, params, value):
        return render_property(name, params, value, self.settings.param_style)

    def header(self, cal):
        """
        Renders the `VERSION` and `PRODID` lines, either as constants or from the source
        calendar. A passed-through `VERSION` is still subject to its conditional policy.
        """

        if self.settings.header == HeaderMode.FIXED:
            return [self.render("VERSION", None, "2.0"), self.render("PRODID", None, self.settings.prodid)]

        lines = []
        for prop in cal.properties:
            if prop.name == "PRODID":
                lines.append(self.render(prop.name, prop.params, prop.value))
            elif prop.name == "VERSION" and self.policy.classify(ComponentKind.CALENDAR, prop.name, prop.value) == Action.PASS:
                lines.append(self.render(prop.name, prop.params, prop.value))
        return lines

    def calendar_properties(self, cal):
        properties = [p for p in cal.properties if p.name not in HEADER_PROPERTIES]
        return self.filter(ComponentKind.CALENDAR, properties)

    def timezone(self, tz):
        lines = [begin(ComponentKind.TIMEZONE)]
        lines += self.filter(ComponentKind.TIMEZONE, tz.properties)
        for idx, transition in enumerate(tz.transitions):
            lines.append(begin(ComponentKind.TIMEZONE_TRANSITION))
            lines += in_context(f"Handling transition #{idx}", self.filter, ComponentKind.TIMEZONE_TRANSITION, transition.properties)
            lines.append(end(ComponentKind.TIMEZONE_TRANSITION))
        lines.append(end(ComponentKind.TIMEZONE))
        return lines

    def is_ignored(self, event):
        """
        Whether the given event should be skipped entirely, which only happens when ignoring
        events with any summary matching the configured sentinel.
        """

        return (
            self.settings.mode == OperatingMode.IGNORE_MATCHING
            and self.settings.ignore_if_summary_is is not None
            and self.settings.ignore_if_summary_is in event.summaries
        )

    def event(self, event):
        lines = [begin(ComponentKind.EVENT)]
        if self.settings.mode == OperatingMode.ANONYMIZE:
            # The real summary and stamp are dropped by the policy, these stand in for them
            lines.append(self.render("SUMMARY", None, self.settings.message))
            lines.append(self.render("DTSTAMP", None, self.settings.dtstamp))
        lines += self.filter(ComponentKind.EVENT, event.properties)
        lines.append(end(ComponentKind.EVENT))
        return lines

    def check_supported(self, cal):
        """
        Rejects calendars with top-level components we don't handle. Alarms embedded in events
        aren't checked here, they're just dropped.
        """

        for kind, components in (("VALARM", cal.alarms), ("VTODO", cal.todos), ("VJOURNAL", cal.journals), ("VFREEBUSY", cal.free_busys)):
            if components:
                raise UnsupportedComponent(kind)

    def transcode(self, cal) -> str:
        """
        Regenerates the given parsed calendar as anonymized iCalendar text.
        """

        lines = [begin(ComponentKind.CALENDAR)]
        lines += in_context("Handling the calendar header", self.header, cal)
        lines += in_context("Handling the calendar properties", self.calendar_properties, cal)

        for idx, tz in enumerate(cal.timezones):
            lines += in_context(f"Handling timezone #{idx}", self.timezone, tz)

        skipped = 0
        for idx, event in enumerate(cal.events):
            if self.is_ignored(event):
                skipped += 1
                continue
            lines += in_context(f"Handling event #{idx}", self.event, event)

        self.check_supported(cal)
        lines.append(end(ComponentKind.CALENDAR))

        logger.debug(
            "Regenerated calendar with %d timezone(s) and %d event(s), skipped %d ignored event(s)",
            len(cal.timezones),
            len(cal.events) - skipped,
            skipped,
        )
        return "".join(lines)
