"""
Dependency Injection Container.

One container is built per application (see ``coderep.lifecycle``) and
passed to whoever needs services. There is no module-level container.

Usage:
    container = ServiceContainer()
    container.register("todo_service", lambda c: TodoService(c.get("todo_repository")))
    todo = container.get("todo_service")
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Union

logger = logging.getLogger(__name__)

# A class (called with no arguments) or a callable taking the container
Factory = Union[type, Callable[["ServiceContainer"], Any]]

_UNSET = object()


@dataclass
class _Registration:
    factory: Factory
    singleton: bool = True
    instance: Any = _UNSET

    def build(self, container: "ServiceContainer") -> Any:
        if isinstance(self.factory, type):
            return self.factory()
        return self.factory(container)


class ServiceContainer:
    """
    Named service registry with lazy construction.

    Singletons are built on first ``get`` and cached; transient services are
    rebuilt on every ``get``. Registering a name again replaces the old entry
    and drops its cached instance.
    """

    def __init__(self) -> None:
        self._registry: Dict[str, _Registration] = {}

    def register(self, name: str, factory: Factory, singleton: bool = True) -> None:
        """
        Register a service factory.

        Args:
            name: Service name/key
            factory: Class, or callable receiving the container
            singleton: Cache the first instance (default) or build per call
        """
        self._registry[name] = _Registration(factory=factory, singleton=singleton)
        logger.debug(f"Registered service: {name} (singleton={singleton})")

    def register_instance(self, name: str, instance: Any) -> None:
        """Register an already-built object as a singleton."""
        self._registry[name] = _Registration(factory=lambda c: instance, instance=instance)
        logger.debug(f"Registered instance: {name}")

    def get(self, name: str) -> Any:
        """
        Resolve a service, building it if needed.

        Raises:
            KeyError: If service is not registered
        """
        registration = self._registry.get(name)
        if registration is None:
            raise KeyError(f"Service '{name}' is not registered")

        if not registration.singleton:
            return registration.build(self)

        if registration.instance is _UNSET:
            registration.instance = registration.build(self)
            logger.debug(f"Created singleton instance: {name}")
        return registration.instance

    @contextmanager
    def override(self, name: str, instance: Any) -> Iterator[Any]:
        """Temporarily replace a service with ``instance``."""
        previous = self._registry.get(name)
        self.register_instance(name, instance)
        try:
            yield instance
        finally:
            if previous is None:
                self._registry.pop(name, None)
            else:
                self._registry[name] = previous

    def has(self, name: str) -> bool:
        return name in self._registry

    def names(self) -> List[str]:
        return sorted(self._registry)

    def clear(self) -> None:
        """Drop every registration and cached instance."""
        self._registry.clear()
        logger.debug("Container cleared")
