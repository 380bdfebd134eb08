"""
IoC container facade.
"""

from typing import Any, Callable, Mapping, Optional, Sequence, Union
import inspect

from .component import ComponentDefinition
from .config import IoCConfig
from .container import Container
from .diagnostics import IoCDiagnostics, IoCEventType
from .errors import ContainerDisposedError
from .factory import InstanceFactory
from .loaders import ModuleLoader, load_component_modules
from .parser import DependencyParser, ModuleMap
from .registry import ComponentRegistry


class IoC:
    """
    Dependency injection container.

    Components are declared as plain configs and resolved asynchronously:
    backing modules are loaded through the configured loader, instances are
    built according to their scope, and ``$ref`` dependencies are injected
    into constructor arguments, properties and (for ``auto`` components)
    setter methods.

    Example:
        >>> ioc = IoC(loader=ImportModuleLoader())
        >>> ioc.add_component({
        ...     "repo": {"creator": "myapp.repo:Repo", "scope": "singleton"},
        ...     "service": {
        ...         "creator": Service,
        ...         "args": [{"$ref": "repo"}],
        ...         "properties": {"name": "users"},
        ...     },
        ... })
        >>> service = await ioc.get_component("service")
    """

    def __init__(self, config: Union[IoCConfig, Mapping[str, Any], None] = None, **overrides: Any):
        config = IoCConfig.coerce(config, overrides)

        self.diagnostics = config.diagnostics or IoCDiagnostics()
        self.module_loader: Optional[ModuleLoader] = config.loader
        self.parser = (config.parser or DependencyParser)(self)
        self.components: Optional[ComponentRegistry] = ComponentRegistry(self)
        self.container = Container(self)
        self.factory = InstanceFactory(self)

        self.add_component(config.components)

    def add_component(self, component_id: Union[str, Mapping[str, Any]], config: Optional[Mapping[str, Any]] = None) -> None:
        """
        Register components.

        Accepts ``add_component(id, config)`` or ``add_component({id: config, ...})``.
        Re-registering an id is ignored with a warning.

        Config fields:
            creator: class, function, value, ``"module:Member"`` or ``"module"``
            module: module name to load, or an already imported module
            is_factory: call creator as a plain function (default False)
            scope: ``"transient"`` (default), ``"singleton"`` or ``"static"``
            args: constructor argument configs
            properties: property configs injected after construction
            auto: also inject through discovered setter methods

        Raises:
            ComponentNotFoundError: If a ``$import`` names an unknown id
            ConfigError: If a config is malformed
        """
        registry = self._registry("add components")
        if isinstance(component_id, str):
            registry.add({component_id: config or {}})
        else:
            registry.add(component_id)

    async def get_component(
        self,
        ids: Union[str, Sequence[str]],
        callback: Optional[Callable[..., Any]] = None,
    ) -> Any:
        """
        Resolve components.

        A single id returns the instance; a list of ids returns a list of
        instances in request order. ``callback``, when given, is invoked
        with the instances as positional arguments in both cases.
        """
        self._registry("get components")
        single = isinstance(ids, str)
        id_list = [ids] if single else list(ids)

        instances = await self.factory.get_components(id_list)

        if callback is not None:
            result = callback(*instances)
            if inspect.isawaitable(result):
                await result

        return instances[0] if single else instances

    def get_component_config(self, component_id: str) -> Optional[ComponentDefinition]:
        return self._registry("read component configs").get(component_id)

    def has_component(self, component_id: str) -> bool:
        return component_id in self._registry("read component configs")

    def loader(self, loader: ModuleLoader) -> None:
        """Replace the module loader for subsequent resolutions."""
        self.module_loader = loader

    async def load_modules(self, module_map: ModuleMap) -> None:
        if not module_map:
            return
        metadata = {
            "modules": list(module_map),
            "components": [component.id for pending in module_map.values() for component in pending],
        }
        with self.diagnostics.measure(IoCEventType.MODULE_LOAD, metadata=metadata):
            await load_component_modules(self.module_loader, module_map)

    def dispose(self) -> None:
        """
        Dispose cached singletons and release the registry.

        The container is unusable afterwards.
        """
        self.container.dispose()
        self._release()

    async def shutdown(self) -> None:
        """Like ``dispose()``, awaiting async ``dispose()`` methods of singletons."""
        await self.container.shutdown()
        self._release()

    def _release(self) -> None:
        if self.components is not None:
            self.components.clear()
        self.components = None
        self.parser = None

    def _registry(self, operation: str) -> ComponentRegistry:
        if self.components is None:
            raise ContainerDisposedError(operation)
        return self.components
