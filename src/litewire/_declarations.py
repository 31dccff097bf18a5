from __future__ import annotations

import inspect
import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Generic, TypeVar


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Iterable, Mapping

    Hook = str | Callable[[Any], object]

T = TypeVar("T")

_EXPLICIT_ATTR = "__litewire_explicit__"
_POST_CONSTRUCT_ATTR = "__litewire_post_construct__"
_UNSET: Any = object()


@dataclass(frozen=True)
class Declaration:
    """What an instance's type asks of the container.

    - `dependencies`: field name -> name of the registered dependency to inject.
    - `post_construct`: hooks to run, in order, once injection is done.
    """

    dependencies: Mapping[str, Hashable] = field(default_factory=lambda: MappingProxyType({}))
    post_construct: tuple[Hook, ...] = ()


EMPTY_DECLARATION = Declaration()


class Lazy(Generic[T]):
    """Compute-once cell standing in for a lazily injected dependency."""

    __slots__ = ("_factory", "_lock", "_value")

    def __init__(self, factory: Callable[[], T], lock: threading.RLock | None = None) -> None:
        self._factory = factory
        self._value: T = _UNSET
        self._lock = lock if lock is not None else threading.RLock()

    @property
    def resolved(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        if self._value is _UNSET:
            with self._lock:
                if self._value is _UNSET:
                    self._value = self._factory()
        return self._value

    def __repr__(self) -> str:
        state = repr(self._value) if self.resolved else "<unresolved>"
        return f"Lazy({state})"


class autowired:  # noqa: N801
    """Field marker for an injected dependency.

    Example:
        class Service:
            repo = autowired("Repo")

    Reading the field returns the injected instance. When the dependency was
    registered as lazy, the first read resolves it and the value replaces the
    `Lazy` cell, so later reads are plain dictionary lookups.
    """

    def __init__(self, name: Hashable) -> None:
        if is_empty_name(name):
            msg = "Empty dependency name"
            raise ValueError(msg)
        self.dependency_name = name
        self.field_name = ""

    def __set_name__(self, owner: type, field_name: str) -> None:
        self.field_name = field_name

    def __get__(self, instance: object | None, owner: type | None = None) -> Any:
        if instance is None:
            return self

        try:
            value = instance.__dict__[self.field_name]
        except KeyError as e:
            msg = (
                f"{type(instance).__name__}.{self.field_name} has not been injected "
                f"(dependency {self.dependency_name!r})"
            )
            raise AttributeError(msg) from e

        if isinstance(value, Lazy):
            value = value.get()
            instance.__dict__[self.field_name] = value
        return value

    def __set__(self, instance: object, value: object) -> None:
        instance.__dict__[self.field_name] = value


def post_construct(func: Callable[[Any], T]) -> Callable[[Any], T]:
    """Mark a method to be called once the instance's dependencies are injected.

    The hook is called by name, so a subclass overriding the method runs its own
    body (once), whether or not the override is decorated too.
    """
    setattr(func, _POST_CONSTRUCT_ATTR, True)
    return func


def is_empty_name(name: object) -> bool:
    return name is None or name == ""


def declare(
    cls: type[T],
    dependencies: Mapping[str, Hashable] | None = None,
    post_construct: Iterable[Hook] = (),
) -> type[T]:
    """Attach explicit dependencies and hooks to `cls`.

    For classes that do not use `autowired` / `@post_construct`, or need more
    than those express.

    Replaces whatever an earlier `declare()` attached to the same class. The
    entries are merged into `declaration_of(cls)` and of its subclasses.
    """
    deps: dict[str, Hashable] = {}
    for field_name, dependency_name in (dependencies or {}).items():
        if is_empty_name(field_name) or is_empty_name(dependency_name):
            msg = f"Invalid dependency declaration {field_name!r} -> {dependency_name!r} on {cls.__name__}"
            raise ValueError(msg)
        deps[field_name] = dependency_name

    hooks: list[Hook] = []
    for hook in post_construct:
        if not isinstance(hook, str) and not callable(hook):
            msg = f"Post-construct hook {hook!r} on {cls.__name__} is neither a method name nor callable"
            raise TypeError(msg)
        if hook in hooks:
            msg = f"Post-construct hook {hook!r} declared twice on {cls.__name__}"
            raise ValueError(msg)
        hooks.append(hook)

    setattr(cls, _EXPLICIT_ATTR, Declaration(dependencies=MappingProxyType(deps), post_construct=tuple(hooks)))
    logger.debug("Declared %s: dependencies=%s, post_construct=%d hook(s)", cls.__name__, deps, len(hooks))
    return cls


def declaration_of(cls: type) -> Declaration:
    """Collect the declaration of `cls` from its whole MRO, base classes first.

    For each class: `autowired` fields and `@post_construct` methods in class-body
    order, then whatever `declare()` attached to it. A field redeclared in a
    subclass takes the subclass's dependency name; a hook name already collected
    keeps its first position.
    """
    deps: dict[str, Hashable] = {}
    hooks: list[Hook] = []

    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, autowired):
                deps[attr_name] = attr.dependency_name
            elif inspect.isfunction(attr) and getattr(attr, _POST_CONSTRUCT_ATTR, False) and attr_name not in hooks:
                hooks.append(attr_name)

        explicit = vars(klass).get(_EXPLICIT_ATTR)
        if explicit is not None:
            deps.update(explicit.dependencies)
            hooks.extend(h for h in explicit.post_construct if h not in hooks)

    if not deps and not hooks:
        return EMPTY_DECLARATION
    return Declaration(dependencies=MappingProxyType(deps), post_construct=tuple(hooks))
