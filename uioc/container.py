"""
Scope store - dispatches construction per scope and owns singletons.
"""

from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional, Tuple
import asyncio
import inspect
import logging

from .component import ComponentDefinition
from .diagnostics import IoCEventType
from .parser import has_reference
from .scopes import SCOPES

logger = logging.getLogger("uioc.container")

_MISSING = object()

Wire = Callable[[Any, ComponentDefinition], Awaitable[None]]


def substitute_args(args: List[Any], resolved: List[Any]) -> List[Any]:
    """Replace ``$ref`` entries of ``args`` with ``resolved`` values, in order."""
    values = iter(resolved)
    return [next(values) if has_reference(arg) else arg for arg in args]


class Container:
    """
    Holds singleton instances and builds instances per component scope.

    ``create_instance`` runs ``wire(instance, component)`` on every newly
    built instance (static values count as new on each request) before
    handing it out. A singleton is cached, and shared with concurrent
    requesters, only once ``wire`` has finished.
    """

    __slots__ = ("_ioc", "_cache", "_pending")

    def __init__(self, ioc: Any):
        self._ioc = ioc
        self._cache: Dict[str, Any] = {}  # {component_id: instance}, creation order
        self._pending: Dict[str, asyncio.Future] = {}  # singletons under construction

    async def create_instance(self, component: ComponentDefinition, wire: Optional[Wire] = None) -> Any:
        scope = SCOPES[component.scope.value]

        if not scope.constructs:
            return await self._wired(component.target, component, wire)

        if not scope.cacheable:
            return await self._wired(await self._construct(component), component, wire)

        cached = self._cache.get(component.id, _MISSING)
        if cached is not _MISSING:
            return cached

        pending = self._pending.get(component.id)
        if pending is not None:
            return await asyncio.shield(pending)

        future = asyncio.get_running_loop().create_future()
        self._pending[component.id] = future
        try:
            instance = await self._wired(await self._construct(component), component, wire)
        except asyncio.CancelledError:
            future.cancel()
            raise
        except BaseException as exc:
            future.set_exception(exc)
            # Mark retrieved; the error propagates through this call
            future.exception()
            raise
        finally:
            self._pending.pop(component.id, None)

        self._cache[component.id] = instance
        future.set_result(instance)
        return instance

    @staticmethod
    async def _wired(instance: Any, component: ComponentDefinition, wire: Optional[Wire]) -> Any:
        if wire is not None:
            await wire(instance, component)
        return instance

    async def _construct(self, component: ComponentDefinition) -> Any:
        resolved = await self._ioc.get_component(component.arg_deps or [])
        args = substitute_args(component.args, resolved)

        with self._ioc.diagnostics.measure(
            IoCEventType.INSTANTIATION,
            component_id=component.id,
            scope=component.scope.value,
        ):
            return await component.invoke(*args)

    def has_instance(self, component_id: str) -> bool:
        return component_id in self._cache

    def _disposers(self) -> Iterator[Tuple[str, Any]]:
        for component_id in reversed(list(self._cache)):
            dispose = getattr(self._cache[component_id], "dispose", None)
            if callable(dispose):
                yield component_id, dispose

    def dispose(self) -> None:
        """
        Call ``dispose()`` on cached singletons (LIFO), then release them.

        Awaitable results cannot be awaited here; use ``shutdown()`` for
        singletons with async disposal.
        """
        count = 0
        for component_id, dispose in self._disposers():
            try:
                result = dispose()
            except Exception as e:
                logger.error(f"Error disposing `{component_id}`: {e}")
                continue
            count += 1
            if inspect.isawaitable(result):
                logger.warning(f"`{component_id}`.dispose() returned an awaitable; use shutdown() to await it")
                if inspect.iscoroutine(result):
                    result.close()

        self._release(count)

    async def shutdown(self) -> None:
        """Async ``dispose()``: awaits awaitable ``dispose()`` results."""
        count = 0
        for component_id, dispose in self._disposers():
            try:
                result = dispose()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(f"Error disposing `{component_id}`: {e}")
                continue
            count += 1

        self._release(count)

    def _release(self, count: int) -> None:
        self._ioc.diagnostics.emit(IoCEventType.DISPOSAL, metadata={"count": count})
        self._cache.clear()
        self._pending.clear()
