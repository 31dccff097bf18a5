"""Named dependency injection registry.

This package provides a small dependency injection container for Python.
Components are registered under unique names with a zero-argument constructor,
and declare the named dependencies they need as fields. Resolution injects those
fields, eagerly or lazily, and then runs post-construct hooks.

Exports:
- `Container`: Registry and resolver (register, override, resolve, clear).
- `ApplicationContext`: A container plus read-only configuration properties.
- `Scope`, `DependencySettings`: Singleton / prototype scope and lazy-init mode.
- `autowired`, `post_construct`, `declare`: Declare injected fields and hooks.
- `Lazy`: Compute-once cell holding a lazily injected dependency.
- Errors: `ContainerError` and its subclasses.
"""

from ._container import Container
from ._context import ApplicationContext
from ._declarations import Declaration, Lazy, autowired, declaration_of, declare, post_construct
from ._errors import (
    AlreadyRegisteredError,
    CircularDependencyError,
    ContainerError,
    DependencyNotFoundError,
    InvalidSettingsError,
)
from ._settings import DependencySettings, Registration, Scope


__all__ = [
    "AlreadyRegisteredError",
    "ApplicationContext",
    "CircularDependencyError",
    "Container",
    "ContainerError",
    "Declaration",
    "DependencyNotFoundError",
    "DependencySettings",
    "InvalidSettingsError",
    "Lazy",
    "Registration",
    "Scope",
    "autowired",
    "declaration_of",
    "declare",
    "post_construct",
]
