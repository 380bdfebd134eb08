"""
IoC-specific error types with rich diagnostics.
"""

from typing import List, Optional


class IoCError(Exception):
    """Base exception for IoC errors."""
    pass


class ComponentNotFoundError(IoCError):
    """`$import` names a component that has not been registered."""

    def __init__(
        self,
        component_id: str,
        requested_by: Optional[str] = None,
        candidates: Optional[List[str]] = None,
    ):
        self.component_id = component_id
        self.requested_by = requested_by
        self.candidates = candidates or []

        msg = f"$import `{component_id}` component, but it does not exist"
        if requested_by:
            msg += f"\nImported by: {requested_by}"

        if self.candidates:
            msg += "\n\nSimilar components:"
            for candidate in self.candidates:
                msg += f"\n  - {candidate}"

        msg += "\n\nSuggested fixes:"
        msg += f"\n  - Register `{component_id}` before the components importing it"
        msg += "\n  - Check for typos in the $import id"

        super().__init__(msg)


class CreatorResolutionError(IoCError):
    """Creator member is missing from its loaded module."""

    def __init__(self, component_id: str, module: str, member: str):
        self.component_id = component_id
        self.module = module
        self.member = member

        msg = (
            f"Component `{component_id}` declares creator `{member}`, "
            f"but module `{module}` has no such member"
        )
        super().__init__(msg)


class LoaderNotConfiguredError(IoCError):
    """Modules must be loaded but no module loader was configured."""

    def __init__(self, modules: List[str]):
        self.modules = modules

        msg = "No module loader configured; cannot load:"
        for name in modules:
            msg += f"\n  - {name}"
        msg += "\n\nSuggested fixes:"
        msg += "\n  - Pass loader=... when creating the IoC"
        msg += "\n  - Call ioc.loader(fn) before requesting components"
        msg += "\n  - Use uioc.loaders.ImportModuleLoader for importable modules"

        super().__init__(msg)


class ContainerDisposedError(IoCError):
    """The IoC container was disposed and can no longer be used."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Cannot {operation}: the IoC container has been disposed")
