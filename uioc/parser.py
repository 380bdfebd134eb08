"""
Dependency parsing.

Classifies argument and property configs as literals, ``$ref`` references
or ``$import`` inline definitions, and works out which backing modules a
set of dependencies still needs.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Set
import logging

from .component import ComponentDefinition
from .injection import property_from_setter

logger = logging.getLogger("uioc.parser")

REF = "$ref"
IMPORT = "$import"

ModuleMap = Dict[str, List[ComponentDefinition]]


def has_reference(value: Any) -> bool:
    return isinstance(value, Mapping) and REF in value


def has_import(value: Any) -> bool:
    return isinstance(value, Mapping) and IMPORT in value


class DependencyParser:
    """
    Extracts dependency ids from component configs.

    Subclass and pass ``parser=`` to the IoC to customize discovery.
    """

    def __init__(self, ioc: Any):
        self.ioc = ioc

    def get_deps_from_args(self, args: Iterable[Any]) -> List[str]:
        """Referenced ids in argument order."""
        return [arg[REF] for arg in args if has_reference(arg)]

    def get_deps_from_properties(self, properties: Mapping[str, Any]) -> List[str]:
        """Referenced ids in property declaration order."""
        return [value[REF] for value in properties.values() if has_reference(value)]

    def get_deps_from_setters(self, instance: Any, exclude: Mapping[str, Any]) -> List[str]:
        """
        Component ids injectable through the instance's setter methods.

        Only properties not declared in ``exclude`` and registered as
        components are returned.
        """
        deps = []
        for name in dir(instance):
            prop = property_from_setter(name)
            if prop is None or prop in exclude or prop in deps:
                continue
            if not callable(getattr(instance, name, None)):
                continue
            if self.ioc.has_component(prop):
                deps.append(prop)
        return deps

    def get_dependent_modules(
        self,
        component: ComponentDefinition,
        module_map: ModuleMap,
        dep_ids: Iterable[str],
        _seen: Optional[Set[str]] = None,
    ) -> ModuleMap:
        """
        Collect the modules still needed to build ``component`` and ``dep_ids``.

        Walks argument dependencies transitively. Each pending component is
        listed once under its module name, whatever the number of passes
        merged into ``module_map``.
        """
        seen = set() if _seen is None else _seen
        if component.id in seen:
            return module_map
        seen.add(component.id)

        module = component.pending_module
        if module is not None:
            pending = module_map.setdefault(module, [])
            if component not in pending:
                pending.append(component)

        for dep_id in dep_ids:
            dep = self.ioc.get_component_config(dep_id)
            if dep is None:
                logger.warning("`%s` has not been added to the IoC (required by `%s`)", dep_id, component.id)
                continue
            self.get_dependent_modules(dep, module_map, dep.arg_deps or (), seen)

        return module_map
