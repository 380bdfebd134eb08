"""
Component registry.

Stores component definitions by id and runs the registration-time passes:
anonymous expansion, then argument/property dependency extraction.
"""

from typing import Any, Dict, List, Mapping, Optional
import logging

from .anonymous import AnonymousComponentExpander
from .component import ComponentDefinition, create_component
from .diagnostics import IoCEventType

logger = logging.getLogger("uioc.registry")


class ComponentRegistry:
    """Component definitions of one IoC container."""

    def __init__(self, ioc: Any):
        self.ioc = ioc
        self._components: Dict[str, ComponentDefinition] = {}
        self._expander = AnonymousComponentExpander(self)

    def add(self, configs: Mapping[str, Any]) -> List[str]:
        """
        Register a batch of component configs.

        The batch is atomic: every config is normalized before any is
        stored, and if expansion fails every id stored by this call
        (anonymous children included) is removed again. All ids in the
        batch are stored before any is expanded, so a batch may
        ``$import`` its own members. Existing ids are kept and warned.

        Returns:
            Ids actually registered (anonymous children excluded)
        """
        created: Dict[str, ComponentDefinition] = {}
        for component_id, config in configs.items():
            if component_id in self._components:
                logger.warning("`%s` has been added already; this registration has no effect", component_id)
                self.ioc.diagnostics.emit(IoCEventType.DUPLICATE_REGISTRATION, component_id=component_id)
                continue
            created[component_id] = create_component(component_id, config)

        existing = set(self._components)
        self._components.update(created)

        parser = self.ioc.parser
        try:
            for component in reversed(list(created.values())):
                if component.anony_deps is None:
                    self._expander.expand(component)
                component.arg_deps = parser.get_deps_from_args(component.args)
                component.prop_deps = parser.get_deps_from_properties(component.properties)
        except Exception:
            for component_id in [cid for cid in self._components if cid not in existing]:
                del self._components[component_id]
            raise

        for component in created.values():
            self.ioc.diagnostics.emit(
                IoCEventType.REGISTRATION,
                component_id=component.id,
                scope=component.scope.value,
                metadata={"creator": str(component.creator)},
            )

        return list(created)

    def get(self, component_id: str) -> Optional[ComponentDefinition]:
        return self._components.get(component_id)

    def ids(self) -> List[str]:
        return list(self._components)

    def clear(self) -> None:
        self._components.clear()

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def __len__(self) -> int:
        return len(self._components)
