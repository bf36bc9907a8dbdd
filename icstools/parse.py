# Converts remote calendar text into our `ParsedCalendar` model. The actual lexing (line
# unfolding, content line grammar, BEGIN/END nesting) is done by the `ics` library's grammar,
# this just maps its containers onto the components we know about. Component names are
# case-insensitive, so they are compared upper-cased.

from ics.grammar.parse import GRAMMAR, Container, ContentLine, unfold_lines
from ics.grammar.parse import parse as nest_lines

from icstools.errors import MultipleCalendarsUnsupported, ParseFailed, UnsupportedComponent
from icstools.model import Event, ParsedCalendar, Property, Timezone, Transition

# Top-level components we recognise but refuse to regenerate, by the attribute of
# `ParsedCalendar` they're collected into
UNSUPPORTED_COMPONENTS = {
    "VALARM": "alarms",
    "VTODO": "todos",
    "VJOURNAL": "journals",
    "VFREEBUSY": "free_busys",
}


class OrderedContentLine(ContentLine):
    """
    A content line that also remembers its parameters exactly as written. `ContentLine.params`
    is a dict, which loses the order of repeated parameter names and all but the last of their
    values.
    """

    ordered_params: list[tuple[str, list[str]]]

    @classmethod
    def from_text(cls, text):
        ast = GRAMMAR.parse(text)
        line = cls.interpret_ast(ast)
        line.ordered_params = [
            (param["name"], [str(v["value"]) for v in param["values_"]])
            for param in ast.get("params") or []
        ]
        return line


def tokenize(text):
    for unfolded in unfold_lines(text.splitlines()):
        yield OrderedContentLine.from_text(unfolded)


def to_property(line):
    """
    Converts a parsed content line into a `Property`, keeping parameter order.
    """

    return Property(line.name, line.ordered_params or None, line.value)


def split_container(container):
    """
    Splits a container into its own properties and its nested sub-containers.
    """

    properties = []
    children = []
    for item in container:
        if isinstance(item, Container):
            children.append(item)
        else:
            properties.append(to_property(item))
    return properties, children


def to_timezone(container):
    properties, children = split_container(container)
    transitions = []
    for child in children:
        if child.name.upper() not in ("STANDARD", "DAYLIGHT"):
            raise ParseFailed(f"Unexpected {child.name} component in VTIMEZONE")
        child_properties, grandchildren = split_container(child)
        if grandchildren:
            raise ParseFailed(f"Unexpected {grandchildren[0].name} component in {child.name}")
        transitions.append(Transition(child_properties))
    return Timezone(properties, transitions)


def to_event(container):
    properties, children = split_container(container)
    alarms = []
    for child in children:
        if child.name.upper() != "VALARM":
            raise ParseFailed(f"Unexpected {child.name} component in VEVENT")
        # Alarms are never regenerated, so we only keep enough to know they were there
        alarms.append(split_container(child)[0])
    return Event(properties, alarms)


def to_calendar(container) -> ParsedCalendar:
    properties, children = split_container(container)
    cal = ParsedCalendar(properties)
    for child in children:
        kind = child.name.upper()
        if kind == "VTIMEZONE":
            cal.timezones.append(to_timezone(child))
        elif kind == "VEVENT":
            cal.events.append(to_event(child))
        elif kind in UNSUPPORTED_COMPONENTS:
            getattr(cal, UNSUPPORTED_COMPONENTS[kind]).append(split_container(child)[0])
        else:
            raise UnsupportedComponent(child.name)
    return cal


def parse_calendar(text: str) -> ParsedCalendar:
    """
    Parses the given iCalendar text, which must contain exactly one `VCALENDAR`.
    """

    try:
        top_level = nest_lines(tokenize(text))
    except Exception as e:
        # The grammar raises its own `ParseError`, but also `ValueError`s and `tatsu` errors
        # depending on how the input is malformed
        raise ParseFailed(f"Failed to parse the calendar ({type(e).__name__}: {e})") from e

    calendars = [item for item in top_level if isinstance(item, Container) and item.name.upper() == "VCALENDAR"]
    if len(calendars) > 1:
        raise MultipleCalendarsUnsupported(len(calendars))
    if not calendars:
        raise ParseFailed("No VCALENDAR found in the document")

    return to_calendar(calendars[0])
