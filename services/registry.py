"""
Service Registry - Central management of application services
Implements dependency injection and lazy loading patterns
"""
from typing import Dict, Any, Callable, Optional, List
import logging

logger = logging.getLogger(__name__)


class ServiceDescriptor:
    """Describes a service registration"""

    def __init__(self, name: str, factory: Callable,
                 dependencies: Optional[List[str]] = None):
        self.name = name
        self.factory = factory
        self.dependencies = dependencies or []
        self.instance = None


class ServiceRegistry:
    """
    Centralized registry for all application services.

    Factories are called on first use; each declared dependency is resolved
    from the registry and passed to the factory as a keyword argument.
    """

    def __init__(self):
        self._descriptors: Dict[str, ServiceDescriptor] = {}
        self._resolving: List[str] = []

    def register(self, name: str, service: Any) -> None:
        """
        Register a service instance directly.

        Args:
            name: Service identifier
            service: Service instance
        """
        descriptor = ServiceDescriptor(name, factory=lambda: service)
        descriptor.instance = service
        self._descriptors[name] = descriptor

    def register_factory(self, name: str, factory: Callable,
                         dependencies: Optional[List[str]] = None) -> None:
        """
        Register a factory function for lazy service instantiation.

        Args:
            name: Service identifier
            factory: Callable that returns a service instance
            dependencies: Services this factory depends on
        """
        self._descriptors[name] = ServiceDescriptor(name, factory, dependencies)

    def get(self, name: str) -> Any:
        """
        Get a service by name. Lazy loads if a factory is registered.

        Raises:
            ValueError: If service is not registered
            RuntimeError: If a circular dependency is detected
        """
        descriptor = self._descriptors.get(name)
        if descriptor is None:
            raise ValueError(f"Service '{name}' is not registered")

        if descriptor.instance is not None:
            return descriptor.instance

        if name in self._resolving:
            cycle = " -> ".join(self._resolving + [name])
            raise RuntimeError(f"Circular dependency detected: {cycle}")

        self._resolving.append(name)
        try:
            deps = {dep: self.get(dep) for dep in descriptor.dependencies}
            instance = descriptor.factory(**deps)
            logger.debug(f"Created service instance: {name}")
        finally:
            self._resolving.pop()

        descriptor.instance = instance
        return instance

    def reset(self) -> None:
        """Drop all cached singleton instances (used between tests)."""
        for descriptor in self._descriptors.values():
            descriptor.instance = None

    def validate_dependencies(self) -> List[str]:
        """List every dependency that refers to an unregistered service."""
        errors = []
        for name, descriptor in self._descriptors.items():
            for dep in descriptor.dependencies:
                if dep not in self._descriptors:
                    errors.append(f"Service '{name}' depends on unregistered service '{dep}'")
        return errors
