# The in-memory shape of a parsed calendar. These are built fresh from the remote text on every
# request and thrown away once the response has been generated.

from enum import Enum


class ComponentKind(Enum):
    """
    The kinds of component we know how to regenerate. The values are the block names used in
    `BEGIN:`/`END:` lines on output.
    """

    CALENDAR = "VCALENDAR"
    TIMEZONE = "VTIMEZONE"
    # The parser doesn't tell us whether a transition was `DAYLIGHT` or `STANDARD`, and nothing
    # in RFC 5545 needs us to treat them differently, so they all come out as `STANDARD`
    TIMEZONE_TRANSITION = "STANDARD"
    EVENT = "VEVENT"

    def __str__(self):
        return self.value


class Property:
    """
    A single content line of a component. Parameters are kept as an ordered list of
    `(name, [values])` pairs, because their order has to survive to the output.
    """

    name: str
    params: list[tuple[str, list[str]]] | None
    value: str | None

    def __init__(self, name, params=None, value=None):
        self.name = name
        self.params = params
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, Property):
            return NotImplemented
        return (self.name, self.params, self.value) == (other.name, other.params, other.value)

    def __repr__(self):
        return f"Property({self.name!r}, {self.params!r}, {self.value!r})"


def values_of(properties, name):
    """
    Returns the values of every property with the given name, in order. A component can carry
    the same property more than once, so callers that make decisions on a value have to look
    at all of them.
    """

    return [prop.value for prop in properties if prop.name == name]


class Transition:
    """
    One `STANDARD` or `DAYLIGHT` block of a timezone.
    """

    properties: list[Property]

    def __init__(self, properties=None):
        self.properties = properties or []


class Timezone:
    properties: list[Property]
    transitions: list[Transition]

    def __init__(self, properties=None, transitions=None):
        self.properties = properties or []
        self.transitions = transitions or []


class Event:
    """
    A `VEVENT`. Any alarms embedded in it are recorded but never looked at: they are always
    dropped wholesale.
    """

    properties: list[Property]
    alarms: list[list[Property]]

    def __init__(self, properties=None, alarms=None):
        self.properties = properties or []
        self.alarms = alarms or []

    @property
    def summaries(self):
        return values_of(self.properties, "SUMMARY")


class ParsedCalendar:
    """
    A whole parsed `VCALENDAR`. The last four lists hold components we refuse to handle, and
    they have to be empty for the calendar to be regenerated.
    """

    properties: list[Property]
    timezones: list[Timezone]
    events: list[Event]
    alarms: list[list[Property]]
    todos: list[list[Property]]
    journals: list[list[Property]]
    free_busys: list[list[Property]]

    def __init__(self, properties=None, timezones=None, events=None, alarms=None, todos=None, journals=None, free_busys=None):
        self.properties = properties or []
        self.timezones = timezones or []
        self.events = events or []
        self.alarms = alarms or []
        self.todos = todos or []
        self.journals = journals or []
        self.free_busys = free_busys or []
