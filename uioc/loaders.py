"""
Module loading.

A loader is any callable taking a list of module names and returning the
loaded modules in the same order, directly or as an awaitable.
"""

from typing import Any, Awaitable, Callable, List, Optional, Sequence, Union
import asyncio
import importlib
import inspect
import logging

from .component import bind_creator
from .errors import IoCError, LoaderNotConfiguredError
from .parser import ModuleMap

logger = logging.getLogger("uioc.loaders")

ModuleLoader = Callable[[List[str]], Union[Sequence[Any], Awaitable[Sequence[Any]]]]


async def load_component_modules(loader: Optional[ModuleLoader], module_map: ModuleMap) -> None:
    """
    Load every module named in ``module_map`` with one loader call, then
    bind the creators of the components waiting on them.

    The loader is not called when nothing is pending.

    Raises:
        LoaderNotConfiguredError: If modules are pending and ``loader`` is None
    """
    modules = list(module_map)
    if not modules:
        return

    if loader is None:
        raise LoaderNotConfiguredError(modules)

    logger.debug("Loading modules %s", modules)
    loaded = loader(modules)
    if inspect.isawaitable(loaded):
        loaded = await loaded
    loaded = list(loaded)

    if len(loaded) != len(modules):
        raise IoCError(
            f"Module loader returned {len(loaded)} value(s) for {len(modules)} module(s): {modules}"
        )

    for name, module in zip(modules, loaded):
        for component in module_map[name]:
            # Another pass may have bound it in the meantime
            if not component.bound:
                bind_creator(component, module)


class ImportModuleLoader:
    """
    Loader backed by ``importlib.import_module``.

    Imports run in a worker thread so the event loop is not blocked.

    Example:
        >>> ioc = IoC(loader=ImportModuleLoader())
        >>> ioc.add_component("store", {"creator": "myapp.store:Store"})
    """

    def __init__(self, package: Optional[str] = None):
        self.package = package

    async def __call__(self, names: List[str]) -> List[Any]:
        return await asyncio.to_thread(self._import_all, names)

    def _import_all(self, names: List[str]) -> List[Any]:
        return [importlib.import_module(name, self.package) for name in names]
