"""
Dependency injection container for Doctor Connect.

One container is built per application in ``create_app()`` and kept on
``app.state.container``; tests build their own with in-memory adapters.
"""

from typing import Any, Callable, Dict, Optional

from .exceptions import ConfigurationError


class Container:
    """Lightweight dependency injection container."""

    def __init__(self) -> None:
        self._factories: Dict[str, Callable[[], Any]] = {}
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, name: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[name] = instance

    def register_factory(self, name: str, factory: Callable[[], Any]) -> None:
        """Register a factory, invoked once on first lookup."""
        self._factories[name] = factory

    def get(self, name: str) -> Any:
        """Get a service by name."""
        if name in self._singletons:
            return self._singletons[name]

        if name in self._factories:
            instance = self._factories[name]()
            self._singletons[name] = instance
            return instance

        raise ConfigurationError(f"Service '{name}' not found")

    def get_or_none(self, name: str) -> Optional[Any]:
        """Get a service by name, return None if not found."""
        try:
            return self.get(name)
        except ConfigurationError:
            return None

    def has(self, name: str) -> bool:
        """Check if a service is registered."""
        return name in self._factories or name in self._singletons


class ServiceNames:
    """Service names used throughout the application."""

    SETTINGS = "settings"
    DATABASE_CLIENT = "database_client"

    # Record stores
    DOCTOR_REPOSITORY = "doctor_repository"
    HOSPITAL_REPOSITORY = "hospital_repository"
    ENROLLMENT_REPOSITORY = "enrollment_repository"
    CERTIFICATE_REPOSITORY = "certificate_repository"

    # Security services
    PASSWORD_HASHER = "password_hasher"
    TOKEN_SERVICE = "token_service"
    AUTH_SERVICE = "auth_service"

    # Certificate artifact services
    CERTIFICATE_RENDERER = "certificate_renderer"
    CERTIFICATE_STORAGE = "certificate_storage"
