"""
Property and setter injection helpers.
"""

import re
from typing import Any, Optional

_CAMEL_SETTER = re.compile(r"^set([A-Z]\w*)$")
_SNAKE_SETTER = re.compile(r"^set_([A-Za-z]\w*)$")


def setter_names(key: str) -> tuple:
    """Candidate setter method names for a property key, in lookup order."""
    return ("set" + key[:1].upper() + key[1:], "set_" + key)


def property_from_setter(name: str) -> Optional[str]:
    """
    Derive the property name a setter method injects.

    ``setLogger`` and ``set_logger`` both map to ``logger``.
    """
    match = _CAMEL_SETTER.match(name)
    if match:
        prop = match.group(1)
        return prop[:1].lower() + prop[1:]

    match = _SNAKE_SETTER.match(name)
    if match:
        return match.group(1)

    return None


def set_property(instance: Any, key: str, value: Any) -> None:
    """
    Inject ``value`` under ``key``.

    Calls ``set<Key>`` or ``set_<key>`` when the instance exposes one,
    otherwise assigns the attribute directly.
    """
    for name in setter_names(key):
        setter = getattr(instance, name, None)
        if callable(setter):
            setter(value)
            return
    setattr(instance, key, value)
