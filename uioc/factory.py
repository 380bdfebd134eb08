"""
Instance factory - the resolve, load, construct and inject pipeline.
"""

from typing import Any, List, Optional, Sequence
import asyncio
import logging

from .component import ComponentDefinition
from .diagnostics import IoCEventType
from .injection import set_property
from .parser import has_reference

logger = logging.getLogger("uioc.factory")


class InstanceFactory:
    """
    Builds fully wired instances for a batch of component ids.

    Every id runs its own pipeline concurrently; results are collected into
    a slot list indexed by request position.
    """

    def __init__(self, ioc: Any):
        self.ioc = ioc

    async def get_components(self, ids: Sequence[str]) -> List[Any]:
        """
        Resolve ``ids`` into instances, positionally.

        Unregistered ids are warned and yield None in their slot.
        """
        if not ids:
            return []

        parser = self.ioc.parser
        components: List[Optional[ComponentDefinition]] = []
        module_map = {}
        for component_id in ids:
            component = self.ioc.get_component_config(component_id)
            if component is None:
                logger.warning("`%s` has not been added to the IoC", component_id)
            else:
                module_map = parser.get_dependent_modules(component, module_map, component.arg_deps or [])
            components.append(component)

        await self.ioc.load_modules(module_map)

        instances: List[Any] = [None] * len(ids)

        async def pipeline(index: int, component: ComponentDefinition) -> None:
            instances[index] = await self.ioc.container.create_instance(component, self._wire)

        await asyncio.gather(*(
            pipeline(index, component)
            for index, component in enumerate(components)
            if component is not None
        ))
        return instances

    async def _wire(self, instance: Any, component: ComponentDefinition) -> None:
        if component.properties or component.auto:
            await self._prepare_injection(instance, component)
            await self.inject(instance, component)

    async def _prepare_injection(self, instance: Any, component: ComponentDefinition) -> None:
        parser = self.ioc.parser
        module_map = parser.get_dependent_modules(component, {}, component.prop_deps or [])

        if component.setter_deps is None and component.auto:
            component.setter_deps = parser.get_deps_from_setters(instance, component.properties)
            module_map = parser.get_dependent_modules(component, module_map, component.setter_deps)

        await self.ioc.load_modules(module_map)

    async def inject(self, instance: Any, component: ComponentDefinition) -> None:
        """Run property and setter injection concurrently; both must finish."""
        await asyncio.gather(
            self._inject_properties(instance, component),
            self._inject_setters(instance, component),
        )
        self.ioc.diagnostics.emit(
            IoCEventType.INJECTION,
            component_id=component.id,
            metadata={
                "properties": list(component.properties),
                "setters": list(component.setter_deps or ()),
            },
        )

    async def _inject_properties(self, instance: Any, component: ComponentDefinition) -> None:
        resolved = iter(await self.ioc.get_component(component.prop_deps or []))
        for key, value in component.properties.items():
            if has_reference(value):
                value = next(resolved)
            set_property(instance, key, value)

    async def _inject_setters(self, instance: Any, component: ComponentDefinition) -> None:
        deps = component.setter_deps or []
        resolved = await self.ioc.get_component(deps)
        for dep, value in zip(deps, resolved):
            set_property(instance, dep, value)
