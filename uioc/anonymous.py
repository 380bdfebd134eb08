"""
Anonymous component expansion.

Turns inline ``$import`` dependency declarations into freshly registered
components and rewrites the owning component to reference them.
"""

from typing import Any, Dict, List, Mapping, Tuple
import logging

from .component import ANONYMOUS_PREFIX, ComponentDefinition
from .errors import ComponentNotFoundError
from .parser import IMPORT, REF, has_import

logger = logging.getLogger("uioc.registry")

ARG_MARKER = "$arg."
PROP_MARKER = "$prop."


def anonymous_id(owner_id: str, marker: str, position: Any, import_id: str) -> str:
    """
    Synthesize the id of an anonymous component.

    The reserved prefix is added once, even through nested imports.
    """
    component_id = f"{owner_id}-{marker}{position}.{import_id}"
    if ANONYMOUS_PREFIX in component_id:
        return component_id
    return ANONYMOUS_PREFIX + component_id


class AnonymousComponentExpander:
    """Expands ``$import`` values of a component into anonymous components."""

    def __init__(self, registry: Any):
        self.registry = registry

    def expand(self, component: ComponentDefinition) -> List[str]:
        """
        Replace every ``$import`` arg/property of ``component`` with a ``$ref``.

        Children are collected first and registered afterwards, so the
        component's own lists are the only structures rewritten.

        Raises:
            ComponentNotFoundError: If an imported id is not registered
        """
        children: List[Tuple[str, Dict[str, Any]]] = []

        for index, value in enumerate(component.args):
            if has_import(value):
                child_id, child_config = self._derive(component, value, ARG_MARKER, index)
                component.args[index] = {REF: child_id}
                children.append((child_id, child_config))

        for key, value in component.properties.items():
            if has_import(value):
                child_id, child_config = self._derive(component, value, PROP_MARKER, key)
                component.properties[key] = {REF: child_id}
                children.append((child_id, child_config))

        component.anony_deps = [child_id for child_id, _ in children]

        for child_id, child_config in children:
            logger.debug("Registering anonymous component `%s` for `%s`", child_id, component.id)
            self.registry.add({child_id: child_config})

        return component.anony_deps

    def _derive(
        self,
        owner: ComponentDefinition,
        value: Mapping[str, Any],
        marker: str,
        position: Any,
    ) -> Tuple[str, Dict[str, Any]]:
        import_id = value[IMPORT]
        imported = self.registry.get(import_id)
        if imported is None:
            raise ComponentNotFoundError(
                import_id,
                requested_by=owner.id,
                candidates=[cid for cid in self.registry.ids() if str(import_id) in cid],
            )

        overrides = {k: v for k, v in value.items() if k != IMPORT}
        merged = {**imported.config, **overrides}
        return anonymous_id(owner.id, marker, position, import_id), merged
