# Applies the policy table to the properties of a single component, producing the rendered
# lines that survive.

import logging

from icstools.errors import MissingValue, UnknownProperty
from icstools.policy import Action, UnknownPropertyPolicy
from icstools.pseudonym import pseudonymize
from icstools.render import ParamStyle, render_property

logger = logging.getLogger(__name__)


def filter_component(kind, properties, policy, unknown_policy=UnknownPropertyPolicy.STRICT, seed=None, style=ParamStyle.BARE) -> list[str]:
    """
    Runs every property of a component through the given policy table, in order, and returns
    the rendered lines for those that are kept. Pseudonymized properties have their value
    replaced with the keyed hash of the original.

    Any failure (an unknown property in strict mode, or an identifier with nothing to hash)
    aborts the whole component.
    """

    lines = []
    for prop in properties:
        action = policy.classify(kind, prop.name, prop.value)

        if action == Action.UNKNOWN:
            if unknown_policy == UnknownPropertyPolicy.STRICT:
                raise UnknownProperty(kind, prop.name)
            logger.warning("Dropping unknown property %s in %s", prop.name, kind)
            continue

        if action == Action.DROP:
            continue
        elif action == Action.PSEUDONYMIZE:
            if not prop.value:
                raise MissingValue(kind, prop.name)
            lines.append(render_property(prop.name, prop.params, pseudonymize(seed, prop.value), style))
        else:
            lines.append(render_property(prop.name, prop.params, prop.value, style))

    return lines
