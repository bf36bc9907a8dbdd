"""Serve anonymized copies of remote iCalendar feeds."""

from icstools.config import Config, load_config
from icstools.model import ComponentKind, Event, ParsedCalendar, Property, Timezone, Transition
from icstools.policy import Action, OperatingMode, PolicyTable, UnknownPropertyPolicy
from icstools.pseudonym import pseudonymize
from icstools.render import ParamStyle, render_property
from icstools.transcode import CalendarTranscoder, HeaderMode, TranscodeSettings

__all__ = [
    "Action",
    "CalendarTranscoder",
    "ComponentKind",
    "Config",
    "Event",
    "HeaderMode",
    "OperatingMode",
    "ParamStyle",
    "ParsedCalendar",
    "PolicyTable",
    "Property",
    "Timezone",
    "TranscodeSettings",
    "Transition",
    "UnknownPropertyPolicy",
    "load_config",
    "pseudonymize",
    "render_property",
]
