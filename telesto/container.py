"""Dependency injection container.

A small registry of factories keyed by port type. Production code asks
for the default bindings; tests register fakes for the ports they need
to control (typically the HTTP transport).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(DirectionsBatchService)

        # Testing
        container = Container.create_default()
        container.register(TransportPort, lambda: FakeTransport())
        service = container.resolve(DirectionsBatchService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Re-registering a type replaces its factory and drops any cached
        instance.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons."""
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.
        """
        from .adapters.transport import RequestsTransport
        from .ports.transport import TransportPort
        from .services import DirectionsBatchService

        config = config or get_config()
        container = cls(config=config)

        container.register(
            TransportPort,
            lambda: RequestsTransport(
                config.directions, pool_size=config.dispatch.concurrency
            ),
        )

        # The service is rebuilt on every resolve so a transport
        # registered later is picked up.
        container.register(
            DirectionsBatchService,
            lambda: DirectionsBatchService(
                transport=container.resolve(TransportPort), config=config
            ),
            singleton=False,
        )

        return container
