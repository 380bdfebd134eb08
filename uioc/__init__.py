"""
uioc - asynchronous dependency injection container.

Components are declared as plain configs (creator, scope, args, properties)
and resolved on demand: backing modules are loaded through a pluggable
loader, instances are built per scope, and ``$ref`` / ``$import``
dependencies are wired into constructors, properties and setters.

Key Features:
- Scopes: transient, singleton, static
- Creators given inline or by module name, loaded in one batch per pass
- Anonymous components via ``$import`` with config overrides
- Property and setter injection
- Deterministic singleton disposal
"""

__version__ = "1.0.0"

from .ioc import IoC

from .component import (
    ANONYMOUS_PREFIX,
    ComponentDefinition,
    ModuleMember,
    create_component,
)

from .config import (
    ConfigError,
    IoCConfig,
)

from .container import Container

from .diagnostics import (
    IoCDiagnostics,
    IoCEvent,
    IoCEventType,
    LoggingDiagnosticListener,
)

from .errors import (
    IoCError,
    ComponentNotFoundError,
    CreatorResolutionError,
    LoaderNotConfiguredError,
    ContainerDisposedError,
)

from .injection import set_property

from .loaders import (
    ImportModuleLoader,
    ModuleLoader,
)

from .parser import DependencyParser

from .scopes import ComponentScope

__all__ = [
    # Core
    "IoC",
    "Container",
    "DependencyParser",

    # Components
    "ANONYMOUS_PREFIX",
    "ComponentDefinition",
    "ComponentScope",
    "ModuleMember",
    "create_component",
    "set_property",

    # Config
    "ConfigError",
    "IoCConfig",

    # Loaders
    "ImportModuleLoader",
    "ModuleLoader",

    # Diagnostics
    "IoCDiagnostics",
    "IoCEvent",
    "IoCEventType",
    "LoggingDiagnosticListener",

    # Errors
    "IoCError",
    "ComponentNotFoundError",
    "CreatorResolutionError",
    "LoaderNotConfiguredError",
    "ContainerDisposedError",
]
