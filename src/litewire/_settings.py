from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from ._errors import InvalidSettingsError


if TYPE_CHECKING:
    from collections.abc import Callable, Hashable


class Scope(Enum):
    SINGLETON = "singleton"
    PROTOTYPE = "prototype"


@dataclass(frozen=True)
class DependencySettings:
    lazy: bool = False
    scope: Scope = Scope.SINGLETON


@dataclass(frozen=True)
class Registration:
    name: Hashable
    constructor: Callable[[], object]
    lazy: bool
    scope: Scope


def validate_settings(name: Hashable, settings: DependencySettings) -> None:
    """Reject settings a registration cannot be built from.

    `lazy` has to be an actual bool (truthy values such as 1 or "yes" are refused),
    and `scope` has to be a `Scope` member.
    """
    lazy = getattr(settings, "lazy", None)
    if not isinstance(lazy, bool):
        msg = f"Unknown lazy-init mode {lazy!r} for dependency {name!r}."
        raise InvalidSettingsError(msg, name)

    scope = getattr(settings, "scope", None)
    if not isinstance(scope, Scope):
        msg = f"Unknown scope {scope!r} for dependency {name!r}."
        raise InvalidSettingsError(msg, name)
