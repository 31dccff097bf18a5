from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._declarations import Lazy, declaration_of, is_empty_name
from ._errors import AlreadyRegisteredError, CircularDependencyError, DependencyNotFoundError
from ._lifecycle import run_post_construct
from ._scopes import PrototypeScopeHandler, ScopeHandler, SingletonScopeHandler
from ._settings import DependencySettings, Registration, Scope, validate_settings


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Mapping

T = TypeVar("T")


class Container:
    """Named dependency registry and resolver.

    - register / override components under a unique name
    - resolve with field injection, eager or lazy
    - scopes: singleton / prototype
    - post-construct hooks after injection.

    All public operations hold a reentrant lock, so nested and lazy
    resolutions on one thread proceed while other threads wait for the
    current top-level resolution to finish.
    """

    def __init__(self) -> None:
        self._registrations: dict[Hashable, Registration] = {}
        self._scope_handlers: dict[Scope, ScopeHandler] = {
            Scope.SINGLETON: SingletonScopeHandler(),
            Scope.PROTOTYPE: PrototypeScopeHandler(),
        }
        self._resolving: list[Hashable] = []
        self._lock = threading.RLock()

    def register_dependency(
        self,
        name: Hashable,
        constructor: Callable[[], object],
        settings: DependencySettings | None = None,
    ) -> None:
        """Register a zero-argument constructor under `name`.

        Example:
          container.register_dependency("Repo", Repo)
          container.register_dependency("Clock", Clock, DependencySettings(scope=Scope.PROTOTYPE))

        """
        registration = self._make_registration(name, constructor, settings)
        with self._lock:
            if name in self._registrations:
                raise AlreadyRegisteredError(name)
            self._registrations[name] = registration
        logger.debug("Registered %r (%s, lazy=%s)", name, registration.scope.value, registration.lazy)

    def override_dependency(
        self,
        name: Hashable,
        constructor: Callable[[], object],
        settings: DependencySettings | None = None,
    ) -> None:
        """Register `constructor` under `name`, replacing any existing registration.

        Intended for tests; application code should use `register_dependency`.
        """
        registration = self._make_registration(name, constructor, settings)
        with self._lock:
            replaced = self._registrations.get(name)
            self._registrations[name] = registration
        if replaced is not None:
            logger.debug("Overrode %r: %r -> %r", name, replaced.constructor, constructor)
        else:
            logger.debug("Registered %r via override (%s, lazy=%s)", name, registration.scope.value, registration.lazy)

    def lookup(self, name: Hashable) -> Registration:
        with self._lock:
            registration = self._registrations.get(name)
        if registration is None:
            raise DependencyNotFoundError(name)
        return registration

    def is_registered(self, name: Hashable) -> bool:
        with self._lock:
            return name in self._registrations

    def __contains__(self, name: object) -> bool:
        try:
            return self.is_registered(name)  # type: ignore[arg-type]
        except TypeError:
            # unhashable
            return False

    @overload
    def get_dependency(self, name: type[T]) -> T: ...

    @overload
    def get_dependency(self, name: Hashable) -> Any: ...

    def get_dependency(self, name: Hashable) -> Any:
        """Resolve `name` to an instance.

        A name already on the current resolution path means an eager cycle and
        raises `CircularDependencyError`. The path is unwound whether or not
        resolution succeeds.
        """
        with self._lock:
            if name in self._resolving:
                raise CircularDependencyError(name, self._resolving)

            registration = self._registrations.get(name)
            if registration is None:
                raise DependencyNotFoundError(name)

            self._resolving.append(name)
            try:
                handler = self._scope_handlers[registration.scope]
                return handler.create(registration.constructor, self._wire)
            finally:
                self._resolving.pop()

    def clear(self) -> None:
        """Drop cached singleton instances. Registrations are kept."""
        with self._lock:
            self._scope_handlers[Scope.SINGLETON] = SingletonScopeHandler()
        logger.debug("Cleared singleton instances")

    def component(
        self,
        name: Hashable,
        *,
        lazy: bool = False,
        scope: Scope = Scope.SINGLETON,
    ) -> Callable[[type[T]], type[T]]:
        """Class decorator registering the class under `name`.

        Example:
          @container.component("Service")
          class Service:
              repo = autowired("Repo")

        """
        if is_empty_name(name):
            msg = "Empty dependency name"
            raise ValueError(msg)

        def decorator(cls: type[T]) -> type[T]:
            self.register_dependency(name, cls, DependencySettings(lazy=lazy, scope=scope))
            return cls

        return decorator

    service = component
    repository = component
    controller = component

    def _make_registration(
        self,
        name: Hashable,
        constructor: Callable[[], object],
        settings: DependencySettings | None,
    ) -> Registration:
        settings = settings if settings is not None else DependencySettings()
        validate_settings(name, settings)

        if not callable(constructor):
            msg = f"Constructor for dependency {name!r} must be callable, got {constructor!r}"
            raise TypeError(msg)

        return Registration(name=name, constructor=constructor, lazy=settings.lazy, scope=settings.scope)

    def _wire(self, instance: object) -> None:
        declaration = declaration_of(type(instance))
        self._inject_dependencies(instance, declaration.dependencies)
        run_post_construct(instance, declaration.post_construct)

    def _inject_dependencies(self, instance: object, dependencies: Mapping[str, Hashable]) -> None:
        for field_name, dependency_name in dependencies.items():
            target = self._registrations.get(dependency_name)
            if target is None:
                raise DependencyNotFoundError(dependency_name)

            if target.lazy:
                setattr(instance, field_name, Lazy(self._lazy_resolver(dependency_name), lock=self._lock))
            else:
                setattr(instance, field_name, self.get_dependency(dependency_name))

    def _lazy_resolver(self, name: Hashable) -> Callable[[], Any]:
        def resolve() -> Any:
            logger.debug("Resolving lazy dependency %r", name)
            return self.get_dependency(name)

        return resolve
