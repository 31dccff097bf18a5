from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Hashable, Iterable


class ContainerError(RuntimeError):
    """Base class for dependency registration and resolution failures."""

    def __init__(self, msg: str, name: Hashable) -> None:
        super().__init__(msg)
        self.name = name


class AlreadyRegisteredError(ContainerError):
    def __init__(self, name: Hashable) -> None:
        msg = f"Dependency {name!r} is already registered. Use override_dependency() to replace it."
        super().__init__(msg, name)


class DependencyNotFoundError(ContainerError):
    def __init__(self, name: Hashable) -> None:
        msg = f"Dependency {name!r} not found."
        super().__init__(msg, name)


class CircularDependencyError(ContainerError):
    def __init__(self, name: Hashable, path: Iterable[Hashable] = ()) -> None:
        self.path = (*path, name)
        chain = " -> ".join(repr(p) for p in self.path)
        msg = f"Circular dependency detected for component {name!r}: {chain}"
        super().__init__(msg, name)


class InvalidSettingsError(ContainerError, ValueError):
    pass
