"""
Scope definitions.
"""

from enum import Enum
from dataclasses import dataclass


class ComponentScope(str, Enum):
    """Component lifetime scopes."""

    TRANSIENT = "transient"  # New instance every request
    SINGLETON = "singleton"  # One instance per container lifetime
    STATIC = "static"        # The creator value itself, never called


@dataclass(frozen=True)
class Scope:
    """Scope metadata."""

    name: str
    cacheable: bool
    constructs: bool


SCOPES = {
    "transient": Scope(name="transient", cacheable=False, constructs=True),
    "singleton": Scope(name="singleton", cacheable=True, constructs=True),
    "static": Scope(name="static", cacheable=False, constructs=False),
}


def parse_scope(value) -> ComponentScope:
    """
    Normalize a scope declaration.

    Raises:
        ValueError: If the value names no known scope
    """
    if isinstance(value, ComponentScope):
        return value
    return ComponentScope(str(value).lower())
