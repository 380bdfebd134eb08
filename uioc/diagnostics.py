"""
IoC Diagnostics - Observability and event tracking for IoC containers.
"""

import time
from typing import Any, Dict, List, Optional, Protocol
from enum import Enum
import dataclasses
import logging

logger = logging.getLogger("uioc.diagnostics")


class IoCEventType(Enum):
    """Types of IoC events."""
    REGISTRATION = "registration"
    DUPLICATE_REGISTRATION = "duplicate_registration"
    MODULE_LOAD = "module_load"
    INSTANTIATION = "instantiation"
    INJECTION = "injection"
    DISPOSAL = "disposal"


@dataclasses.dataclass
class IoCEvent:
    """A diagnostic event in the IoC container."""
    type: IoCEventType
    timestamp: float = dataclasses.field(default_factory=time.time)
    component_id: Optional[str] = None
    scope: Optional[str] = None
    duration: Optional[float] = None
    error: Optional[BaseException] = None
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)


class DiagnosticListener(Protocol):
    """Interface for IoC diagnostic listeners."""
    def on_event(self, event: IoCEvent) -> None:
        """Called when an IoC event occurs."""
        ...


class LoggingDiagnosticListener:
    """Diagnostic listener that writes events to the ``uioc.diagnostics`` logger."""
    def __init__(self, log_level: int = logging.DEBUG):
        self.log_level = log_level

    def on_event(self, event: IoCEvent) -> None:
        if event.error is not None:
            self._failure(event)
        elif event.type == IoCEventType.REGISTRATION:
            logger.log(self.log_level, f"Registered component '{event.component_id}' (scope={event.scope})")
        elif event.type == IoCEventType.DUPLICATE_REGISTRATION:
            logger.log(logging.WARNING, f"Ignored duplicate registration of '{event.component_id}'")
        elif event.type == IoCEventType.MODULE_LOAD:
            logger.log(
                self.log_level,
                f"Loaded modules {event.metadata.get('modules')} for "
                f"{event.metadata.get('components')} in {event.duration:.4f}s",
            )
        elif event.type == IoCEventType.INSTANTIATION:
            logger.log(self.log_level, f"Created '{event.component_id}' ({event.scope}) in {event.duration:.4f}s")
        elif event.type == IoCEventType.INJECTION:
            logger.log(self.log_level, f"Injected dependencies into '{event.component_id}'")
        elif event.type == IoCEventType.DISPOSAL:
            logger.log(logging.INFO, f"Disposed {event.metadata.get('count', 0)} singleton(s)")

    def _failure(self, event: IoCEvent) -> None:
        error_type = event.metadata.get("error_type")
        if event.type == IoCEventType.MODULE_LOAD:
            logger.error(
                f"Loading modules {event.metadata.get('failed_modules')} failed "
                f"({error_type}); components left unbound: {event.metadata.get('components')}: {event.error}"
            )
        else:
            logger.error(f"Creating '{event.component_id}' failed ({error_type}): {event.error}")


class IoCDiagnostics:
    """Coordinator for IoC diagnostic listeners."""
    def __init__(self):
        self._listeners: List[DiagnosticListener] = []

    def add_listener(self, listener: DiagnosticListener) -> None:
        """Add a diagnostic listener."""
        self._listeners.append(listener)

    def emit(self, event_type: IoCEventType, **kwargs) -> None:
        """Emit a diagnostic event to all listeners."""
        if not self._listeners:
            return
        event = IoCEvent(type=event_type, **kwargs)
        for listener in self._listeners:
            try:
                listener.on_event(event)
            except Exception as e:
                # Diagnostics never interrupt resolution
                logger.error(f"Diagnostic listener error: {e}")

    def measure(
        self,
        event_type: IoCEventType,
        component_id: Optional[str] = None,
        scope: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "PhaseTimer":
        """
        Time a module load or an instantiation and emit one event for it.

        Example:
            >>> with diagnostics.measure(IoCEventType.MODULE_LOAD, metadata={"modules": names}):
            ...     await load(names)
        """
        return PhaseTimer(self, event_type, component_id, scope, metadata)


class PhaseTimer:
    """
    Context manager behind ``IoCDiagnostics.measure``.

    ``metadata`` may be extended inside the block. When the block raises,
    the event carries the exception plus ``error_type``; a failed module
    load also records the names it was loading as ``failed_modules``.
    Exceptions are never suppressed.
    """

    __slots__ = ("diagnostics", "event_type", "component_id", "scope", "metadata", "started")

    def __init__(
        self,
        diagnostics: IoCDiagnostics,
        event_type: IoCEventType,
        component_id: Optional[str],
        scope: Optional[str],
        metadata: Optional[Dict[str, Any]],
    ):
        self.diagnostics = diagnostics
        self.event_type = event_type
        self.component_id = component_id
        self.scope = scope
        self.metadata: Dict[str, Any] = dict(metadata or {})
        self.started = 0.0

    def __enter__(self) -> "PhaseTimer":
        self.started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        duration = time.perf_counter() - self.started
        if exc_val is not None:
            self.metadata["error_type"] = exc_type.__name__
            if self.event_type == IoCEventType.MODULE_LOAD:
                self.metadata["failed_modules"] = list(self.metadata.get("modules", ()))
        self.diagnostics.emit(
            self.event_type,
            component_id=self.component_id,
            scope=self.scope,
            duration=duration,
            error=exc_val,
            metadata=self.metadata,
        )
        return False
