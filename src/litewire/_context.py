from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from ._container import Container


if TYPE_CHECKING:
    from collections.abc import Hashable, Mapping


class ApplicationContext:
    """Holds an application's container and its read-only configuration.

    Pass the context (or its container) to whatever needs to register or
    resolve components; there is no process-wide instance.
    """

    def __init__(self, configuration_properties: Mapping[str, Any] | None = None) -> None:
        self._container = Container()
        self._configuration_properties: Mapping[str, Any] = MappingProxyType(dict(configuration_properties or {}))

    @property
    def container(self) -> Container:
        return self._container

    @property
    def configuration_properties(self) -> Mapping[str, Any]:
        return self._configuration_properties

    def get_property(self, key: str, default: Any = None) -> Any:
        return self._configuration_properties.get(key, default)

    def get_dependency(self, name: Hashable) -> Any:
        return self._container.get_dependency(name)
