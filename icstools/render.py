# Turns properties back into iCalendar content lines. This is the only place output lines are
# formatted, whatever component they come from.

from enum import Enum


class ParamStyle(Enum):
    """
    How parameter values are written out: bare (`TZID=a,b`) or each one quoted
    (`TZID="a","b"`). Calendar clients disagree on which they like, so it's configurable.
    """

    BARE = "bare"
    QUOTED = "quoted"


# Parameter values holding any of these have to be quoted whatever the style, or they would
# read back as a different set of values
SPECIAL_CHARS = (",", ":", ";")


def needs_quoting(value):
    return any(c in value for c in SPECIAL_CHARS)


def render_param(name, values, style=ParamStyle.BARE):
    values = [f'"{v}"' if style == ParamStyle.QUOTED or needs_quoting(v) else v for v in values]
    return f"{name}={','.join(values)}"


def render_property(name, params=None, value=None, style=ParamStyle.BARE) -> str:
    """
    Renders a single property as `NAME[;PARAM=VAL[,VAL2...]]*:VALUE\\n`, keeping parameters and
    their values in the order they were given. A missing value still gets its colon.
    """

    line = name
    for param_name, param_values in params or []:
        line += ";" + render_param(param_name, param_values, style)
    return f"{line}:{value or ''}\n"


def begin(kind):
    return f"BEGIN:{kind}\n"


def end(kind):
    return f"END:{kind}\n"
