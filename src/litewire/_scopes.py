from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, TypeVar


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


class ScopeHandler(Protocol):
    def create(self, constructor: Callable[[], T], wire: Callable[[T], None]) -> T: ...


class SingletonScopeHandler:
    """Keeps one instance per constructor.

    An instance is cached only after `wire` returns, so a constructor whose
    injection or post-construct hooks fail is built again on the next request.
    """

    def __init__(self) -> None:
        self._instances: dict[Callable[[], object], object] = {}

    def create(self, constructor: Callable[[], T], wire: Callable[[T], None]) -> T:
        if constructor in self._instances:
            return self._instances[constructor]  # type: ignore[return-value]

        instance = constructor()
        wire(instance)
        self._instances[constructor] = instance
        logger.debug("Cached singleton instance of %r", constructor)
        return instance


class PrototypeScopeHandler:
    def create(self, constructor: Callable[[], T], wire: Callable[[T], None]) -> T:
        instance = constructor()
        wire(instance)
        return instance
