#!/usr/bin/env python3
"""
Dependency Injection Container

Wires configuration, the store, the linguistic engine and the stabilization
service in one place so commands never build them by hand. Factories receive
the container and resolve their own dependencies through it; tests swap any
service with register_instance().
"""

import logging
import threading
from typing import Any, Dict, Callable, Optional

logger = logging.getLogger(__name__)

Factory = Callable[['Container'], Any]


class Container:
    """Service registry with singleton and per-call lifecycles."""

    def __init__(self):
        self._factories: Dict[str, Factory] = {}
        self._shared: Dict[str, bool] = {}
        self._instances: Dict[str, Any] = {}
        # Reentrant: factories resolve their dependencies while the lock is held
        self._lock = threading.RLock()

    def register_singleton(self, service_name: str, factory: Factory) -> None:
        """
        Register a service built on first use and reused afterwards.

        Args:
            service_name: Unique name for the service
            factory: Callable taking the container and returning the service
        """
        with self._lock:
            self._factories[service_name] = factory
            self._shared[service_name] = True
            self._instances.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Factory) -> None:
        """Register a service built anew on every get()."""
        with self._lock:
            self._factories[service_name] = factory
            self._shared[service_name] = False

    def register_instance(self, service_name: str, instance: Any) -> None:
        """Register a ready-made instance, overriding any factory."""
        with self._lock:
            self._instances[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        with self._lock:
            if service_name in self._instances:
                return self._instances[service_name]
            if service_name not in self._factories:
                raise KeyError(f"Service '{service_name}' not registered")

            instance = self._factories[service_name](self)
            if self._shared[service_name]:
                self._instances[service_name] = instance
                logger.debug(f"Created singleton '{service_name}'")
            return instance

    def clear(self) -> None:
        with self._lock:
            self._factories.clear()
            self._shared.clear()
            self._instances.clear()


# Global container instance
_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get global container instance (thread-safe singleton)."""
    global _container
    if _container is None:
        with _container_lock:
            if _container is None:
                _container = Container()
                _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    with _container_lock:
        if _container:
            _container.clear()
        _container = None


def _create_config(container: Container):
    # Offline commands work without database variables
    from core.config import get_config_manager
    return get_config_manager(requires_database=False).get_config()


def _create_database(container: Container):
    from core.database import get_database
    return get_database(container.get('config'))


def _create_slack_notifier(container: Container):
    from integrations.slack_notifier import SlackNotifier
    config = container.get('config')
    if not config.has_slack():
        raise ValueError("Slack configuration not found")
    return SlackNotifier(webhook_url=config.integrations.slack_webhook_url)


def _create_engine(container: Container):
    from core.analysis import LinguisticEngine
    config = container.get('config')
    store = None
    if config.has_database() and config.engine.persist_results:
        store = container.get('database')
    notifier = container.get('slack_notifier') if config.engine.notify_alerts else None
    return LinguisticEngine(store=store, config=config.engine, notifier=notifier)


def _create_stabilization_service(container: Container):
    from core.stabilization import StabilizationService
    return StabilizationService(container.get('database'), container.get('stabilization_advisor'))


def _create_stabilization_advisor(container: Container):
    from core.stabilization import StabilizationAdvisor
    return StabilizationAdvisor()


def _create_drift_detector(container: Container):
    from core.analysis import DriftDetector
    return DriftDetector()


def _setup_default_services(container: Container) -> None:
    """Register the application's services."""
    container.register_singleton('config', _create_config)
    container.register_singleton('database', _create_database)
    container.register_singleton('engine', _create_engine)
    container.register_singleton('stabilization_advisor', _create_stabilization_advisor)
    container.register_singleton('stabilization_service', _create_stabilization_service)
    container.register_singleton('drift_detector', _create_drift_detector)

    # Built per use so a changed webhook is picked up
    container.register_factory('slack_notifier', _create_slack_notifier)

    logger.debug("Default services registered in container")
