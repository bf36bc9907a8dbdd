# The static table deciding what happens to every property of every component we regenerate.
# Anything that could identify what an event is about gets dropped; anything needed to know
# *when* someone is busy gets kept.

from enum import Enum

from icstools.model import ComponentKind


class Action(Enum):
    PASS = "pass"
    DROP = "drop"
    PSEUDONYMIZE = "pseudonymize"
    UNKNOWN = "unknown"


class UnknownPropertyPolicy(Enum):
    """
    What to do with a property that isn't in the table: fail the whole calendar (`STRICT`), or
    drop it with a warning (`LENIENT`).
    """

    STRICT = "strict"
    LENIENT = "lenient"


class OperatingMode(Enum):
    """
    The top-level strategy for events. `ANONYMIZE` keeps every event but masks its summary and
    hashes its UID, `IGNORE_MATCHING` drops events with a sentinel summary and passes the rest
    through without hashing.
    """

    ANONYMIZE = "anonymize"
    IGNORE_MATCHING = "ignore-matching"


def version_is_supported(value):
    return value == "2.0"


def _entries(action, *names):
    return {name: action for name in names}


# Conditional passes are written as a predicate over the property's value: the property is
# passed when it holds and dropped (not rejected) when it doesn't
DEFAULT_TABLE = {
    ComponentKind.CALENDAR: {
        **_entries(Action.PASS, "CALSCALE"),
        **_entries(Action.DROP, "METHOD", "PRODID", "REFRESH-INTERVAL"),
        "VERSION": version_is_supported,
    },
    ComponentKind.TIMEZONE: {
        **_entries(Action.PASS, "TZID"),
    },
    ComponentKind.TIMEZONE_TRANSITION: {
        **_entries(Action.PASS, "DTSTART", "RRULE", "TZNAME", "TZOFFSETFROM", "TZOFFSETTO"),
    },
    ComponentKind.EVENT: {
        **_entries(Action.PASS, "DTSTART", "DTEND", "EXDATE", "EXRULE", "RDATE", "RRULE", "SEQUENCE", "STATUS"),
        **_entries(Action.PSEUDONYMIZE, "UID"),
        **_entries(Action.DROP, "CREATED", "DTSTAMP", "DESCRIPTION", "LAST-MODIFIED", "LOCATION", "SUMMARY", "URL"),
    },
}


class PolicyTable:
    """
    A flat mapping from `(component kind, property name)` to what should be done with that
    property.
    """

    def __init__(self, table=None):
        self.table = table if table is not None else DEFAULT_TABLE

    @classmethod
    def for_mode(cls, mode: OperatingMode):
        """
        Builds the table for the given operating mode. Identifiers are only hashed when
        anonymizing; when ignoring matching events, UIDs pass through untouched.
        """

        if mode == OperatingMode.ANONYMIZE:
            return cls()

        table = {kind: dict(entries) for kind, entries in DEFAULT_TABLE.items()}
        table[ComponentKind.EVENT]["UID"] = Action.PASS
        return cls(table)

    def entry(self, kind: ComponentKind, name: str):
        """
        Returns the raw table entry for the given property, which is either an `Action`, a
        predicate for a conditional pass, or `None` if the property isn't listed.
        """

        entry = self.table.get(kind, {}).get(name)
        if entry is None and kind == ComponentKind.CALENDAR and name.startswith("X-"):
            # Vendor extensions on the calendar itself (`X-WR-CALNAME` and friends) tend to
            # name the calendar's owner
            return Action.DROP
        return entry

    def classify(self, kind: ComponentKind, name: str, value: str | None) -> Action:
        """
        Decides what to do with the given property. Conditional entries are resolved here, so
        this only ever returns `PASS`, `DROP`, `PSEUDONYMIZE`, or `UNKNOWN` (for properties
        that aren't in the table, which the caller resolves with its `UnknownPropertyPolicy`).
        """

        entry = self.entry(kind, name)
        if entry is None:
            return Action.UNKNOWN
        if callable(entry):
            return Action.PASS if entry(value) else Action.DROP
        return entry
