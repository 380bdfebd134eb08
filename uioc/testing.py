"""
Testing utilities for the IoC container.
"""

from typing import Any, Dict, List, Mapping, Optional
import asyncio


class DictModuleLoader:
    """
    In-memory module loader.

    Serves modules from a mapping and records every batch it is asked to
    load, for assertions on load counts.

    Example:
        >>> loader = DictModuleLoader({"app.models": models})
        >>> ioc = IoC(loader=loader)
        >>> ...
        >>> assert loader.calls == [["app.models"]]
    """

    def __init__(
        self,
        modules: Optional[Mapping[str, Any]] = None,
        *,
        delays: Optional[Mapping[str, float]] = None,
    ):
        self.modules: Dict[str, Any] = dict(modules or {})
        self.delays: Dict[str, float] = dict(delays or {})
        self.calls: List[List[str]] = []

    async def __call__(self, names: List[str]) -> List[Any]:
        self.calls.append(list(names))
        delay = max((self.delays.get(name, 0.0) for name in names), default=0.0)
        if delay:
            await asyncio.sleep(delay)
        return [self.modules[name] for name in names]

    @property
    def loaded(self) -> List[str]:
        """Every module name requested, flattened in call order."""
        return [name for batch in self.calls for name in batch]

    def reset(self) -> None:
        """Reset tracking."""
        self.calls.clear()
