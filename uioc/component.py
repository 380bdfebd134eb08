"""
Component definitions.

A component is the registered unit of the container: how to obtain a
creator, which scope governs its instances, and which arguments and
properties get wired into it.
"""

from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional
from dataclasses import dataclass, field
import inspect

from .config import ConfigError
from .errors import CreatorResolutionError
from .scopes import ComponentScope, parse_scope

# Ids starting with this marker belong to anonymous components
ANONYMOUS_PREFIX = "^uioc-"


@dataclass(frozen=True)
class ModuleMember:
    """
    Creator declared by name, resolved once its module is loaded.

    A ``member`` of None means the loaded module value itself is the creator.
    """

    module: str
    member: Optional[str] = None

    def resolve(self, component_id: str, loaded: Any) -> Any:
        if self.member is None:
            return loaded
        try:
            return getattr(loaded, self.member)
        except AttributeError:
            raise CreatorResolutionError(component_id, self.module, self.member) from None

    def __str__(self) -> str:
        return f"{self.module}:{self.member}" if self.member else self.module


@dataclass(eq=False)
class ComponentDefinition:
    """
    Normalized component record.

    ``args`` and ``properties`` are private copies of the declared config so
    anonymous expansion can rewrite them without touching caller data.
    Dependency lists stay None until they are computed.
    """

    id: str
    creator: Any
    scope: ComponentScope = ComponentScope.TRANSIENT
    is_factory: bool = False
    auto: bool = False
    args: List[Any] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)
    config: Dict[str, Any] = field(default_factory=dict)

    arg_deps: Optional[List[str]] = None
    prop_deps: Optional[List[str]] = None
    setter_deps: Optional[List[str]] = None
    anony_deps: Optional[List[str]] = None

    target: Any = None
    invoke: Optional[Callable[..., Awaitable[Any]]] = None

    @property
    def bound(self) -> bool:
        return self.invoke is not None

    @property
    def pending_module(self) -> Optional[str]:
        """Module name still to be loaded before this component can be built."""
        if self.bound or not isinstance(self.creator, ModuleMember):
            return None
        return self.creator.module

    def __repr__(self) -> str:
        return f"<ComponentDefinition id={self.id!r} scope={self.scope.value}>"


def create_component(component_id: str, config: Mapping[str, Any]) -> ComponentDefinition:
    """
    Normalize a raw component config into a ComponentDefinition.

    Creators that need no loading (callables, values, preloaded module
    objects) are bound immediately.

    Raises:
        ConfigError: If the config is malformed
    """
    if not isinstance(config, Mapping):
        raise ConfigError(
            f"Component `{component_id}` config must be a mapping, "
            f"got {type(config).__name__}"
        )

    try:
        scope = parse_scope(config.get("scope", ComponentScope.TRANSIENT))
    except ValueError:
        raise ConfigError(
            f"Component `{component_id}` has unknown scope {config.get('scope')!r}; "
            f"expected one of: {', '.join(s.value for s in ComponentScope)}"
        ) from None

    args = config.get("args") or []
    properties = config.get("properties") or {}
    if isinstance(args, (str, bytes)) or not isinstance(args, (list, tuple)):
        raise ConfigError(f"Component `{component_id}` args must be a list")
    if not isinstance(properties, Mapping):
        raise ConfigError(f"Component `{component_id}` properties must be a mapping")

    is_factory = config.get("is_factory", config.get("isFactory", False))
    module = config.get("module")
    creator = _parse_creator(component_id, config.get("creator"), module, scope)

    component = ComponentDefinition(
        id=component_id,
        creator=creator,
        scope=scope,
        is_factory=bool(is_factory),
        auto=bool(config.get("auto", False)),
        args=list(args),
        properties=dict(properties),
        config=dict(config),
    )

    if not isinstance(creator, ModuleMember):
        bind_creator(component)
    elif module is not None and not isinstance(module, str):
        # Preloaded module object: nothing to load
        bind_creator(component, module)

    return component


def _parse_creator(component_id: str, creator: Any, module: Any, scope: ComponentScope) -> Any:
    if module is not None:
        if creator is None or isinstance(creator, str):
            name = module if isinstance(module, str) else getattr(module, "__name__", repr(module))
            return ModuleMember(name, creator)
        return creator

    if isinstance(creator, str):
        name, _, member = creator.partition(":")
        return ModuleMember(name, member or None)

    if creator is None:
        raise ConfigError(f"Component `{component_id}` declares neither a creator nor a module")

    if scope is not ComponentScope.STATIC and not callable(creator):
        raise ConfigError(
            f"Component `{component_id}` creator must be callable for "
            f"{scope.value} scope, got {type(creator).__name__}"
        )

    return creator


def bind_creator(component: ComponentDefinition, module: Any = None) -> None:
    """
    Resolve the component's creator and fix its invocation path.

    Constructor vs factory calling is decided here, once.
    """
    creator = component.creator
    if isinstance(creator, ModuleMember):
        target = creator.resolve(component.id, module)
    else:
        target = creator

    component.target = target

    if component.scope is ComponentScope.STATIC:
        component.invoke = _static(target)
    elif component.is_factory:
        component.invoke = _factory(target)
    else:
        component.invoke = _constructor(target)


def _static(value: Any) -> Callable[..., Awaitable[Any]]:
    async def invoke(*args: Any) -> Any:
        return value
    return invoke


def _factory(fn: Callable[..., Any]) -> Callable[..., Awaitable[Any]]:
    async def invoke(*args: Any) -> Any:
        result = fn(*args)
        if inspect.isawaitable(result):
            result = await result
        return result
    return invoke


def _constructor(cls: Callable[..., Any]) -> Callable[..., Awaitable[Any]]:
    async def invoke(*args: Any) -> Any:
        instance = cls(*args)
        async_init = getattr(instance, "async_init", None)
        if callable(async_init):
            result = async_init()
            if inspect.isawaitable(result):
                await result
        return instance
    return invoke
