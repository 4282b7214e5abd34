"""
Service Container - Dependency Injection Container for the RPS game server
Manages service creation and dependencies. Every service is a singleton.
"""

from typing import Dict, Any, List, Optional, Callable


class ServiceDefinition:
    """Definition of how a service should be created"""

    def __init__(
        self,
        name: str,
        factory: Callable,
        dependencies: List[str] = None,
        config: Dict[str, Any] = None
    ):
        self.name = name
        self.factory = factory
        self.dependencies = dependencies or []
        self.config = config or {}


class CircularDependencyError(Exception):
    """Raised when circular dependency is detected"""
    pass


class ServiceNotFoundError(Exception):
    """Raised when requested service is not registered"""
    pass


class ServiceContainer:
    """
    Dependency Injection Container for managing services and their dependencies.

    Features:
    - Explicit dependency resolution
    - Circular dependency detection
    - Singleton instances, created on first use
    - Configuration injection
    """

    def __init__(self):
        self._services: Dict[str, ServiceDefinition] = {}
        self._instances: Dict[str, Any] = {}
        self._creating: set = set()  # Track services being created (circular detection)
        self._config: Dict[str, Any] = {}

    def register(
        self,
        name: str,
        factory: Callable,
        dependencies: List[str] = None,
        config: Dict[str, Any] = None
    ) -> 'ServiceContainer':
        """
        Register a service with the container.

        Args:
            name: Service name for retrieval
            factory: Class or function to create the service
            dependencies: List of service names this service depends on
            config: Keyword arguments passed to the factory

        Returns:
            Self for method chaining
        """
        if name in self._services:
            raise ValueError(f"Service '{name}' is already registered")

        if not callable(factory):
            raise ValueError(f"Factory for '{name}' must be callable")

        self._services[name] = ServiceDefinition(
            name=name,
            factory=factory,
            dependencies=dependencies or [],
            config=config
        )
        return self

    def configure_services(self) -> 'ServiceContainer':
        """
        Register all game services with their dependencies.
        This method contains the service configuration for the application.
        """
        from rps.message_catalog import MessageCatalog
        from rps.room_registry import RoomRegistry
        from rps.session_coordinator import SessionCoordinator
        from rps.services.broadcast_service import BroadcastService
        from rps.services.deferred_task_queue import DeferredTaskQueue
        from rps.services.error_response_factory import ErrorResponseFactory
        from rps.services.validation_service import ValidationService

        # Leaf services - no dependencies
        self.register('MessageCatalog', MessageCatalog,
                      config={'yaml_file_path': self._config.get('messages_file')})
        self.register('ErrorResponseFactory', ErrorResponseFactory)
        self.register('RoomRegistry', RoomRegistry)
        self.register('DeferredTaskQueue', DeferredTaskQueue)

        self.register('ValidationService', ValidationService, dependencies=['MessageCatalog'])

        # socketio is injected as an external dependency
        self.register('BroadcastService', BroadcastService, dependencies=['socketio'])

        self.register('SessionCoordinator', SessionCoordinator,
                      dependencies=['RoomRegistry', 'BroadcastService', 'DeferredTaskQueue', 'MessageCatalog'])

        return self

    def set_external_dependency(self, name: str, instance: Any) -> 'ServiceContainer':
        """
        Set an external dependency that's created outside the container.
        Useful for Flask-SocketIO and similar framework objects.
        """
        self._instances[name] = instance
        return self

    def set_config(self, config: Dict[str, Any]) -> 'ServiceContainer':
        """Set global configuration for the container"""
        self._config.update(config)
        return self

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get a global configuration value"""
        return self._config.get(key, default)

    def get(self, name: str) -> Any:
        """
        Get a service instance, creating it if necessary.

        Raises:
            ServiceNotFoundError: If service is not registered
            CircularDependencyError: If circular dependency detected
        """
        if name in self._instances:
            return self._instances[name]

        if name not in self._services:
            raise ServiceNotFoundError(f"Service '{name}' is not registered")

        return self._create_service(name)

    def _create_service(self, name: str) -> Any:
        """
        Create a service instance with dependency injection.
        """
        if name in self._creating:
            cycle = ' -> '.join(list(self._creating) + [name])
            raise CircularDependencyError(f"Circular dependency detected: {cycle}")

        self._creating.add(name)

        try:
            service_def = self._services[name]

            dependencies = [self.get(dep_name) for dep_name in service_def.dependencies]

            instance = service_def.factory(*dependencies, **service_def.config)

            self._instances[name] = instance

            return instance

        finally:
            self._creating.discard(name)

    def has_service(self, name: str) -> bool:
        """Check if a service is registered"""
        return name in self._services

    def get_service_names(self) -> List[str]:
        """Get list of all registered service names"""
        return list(self._services.keys())

    def validate_dependencies(self) -> Dict[str, List[str]]:
        """
        Validate all service dependencies can be resolved.

        Returns:
            Dictionary mapping service names to lists of missing dependencies
        """
        issues = {}

        for name, service_def in self._services.items():
            missing_deps = [dep for dep in service_def.dependencies
                            if not self.has_service(dep) and dep not in self._instances]
            if missing_deps:
                issues[name] = missing_deps

        return issues

    def clear(self) -> 'ServiceContainer':
        """Clear all services and instances (useful for testing)"""
        self._services.clear()
        self._instances.clear()
        self._creating.clear()
        self._config.clear()
        return self

    def __repr__(self) -> str:
        return f"ServiceContainer(services={len(self._services)}, instances={len(self._instances)})"


# Global container instance for the application
_app_container: Optional[ServiceContainer] = None


def get_container() -> ServiceContainer:
    """Get the global application service container"""
    global _app_container
    if _app_container is None:
        _app_container = ServiceContainer()
    return _app_container


def reset_container() -> None:
    """Clear the global container in place (for testing).

    Handlers keep a reference to the container object, so it is emptied
    rather than replaced.
    """
    get_container().clear()


def configure_container(socketio=None, config=None) -> ServiceContainer:
    """
    Configure the global service container with the game services.

    Args:
        socketio: Flask-SocketIO instance
        config: Application configuration dict

    Returns:
        Configured service container
    """
    container = get_container()
    container.clear()

    if socketio is not None:
        container.set_external_dependency('socketio', socketio)

    if config is not None:
        container.set_config(config)

    container.configure_services()

    return container
