from __future__ import annotations

import logging
from typing import TYPE_CHECKING


logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable


def run_post_construct(instance: object, hooks: Iterable[str | Callable[[object], object]]) -> None:
    """Invoke post-construct hooks on `instance` in declaration order.

    Callable entries receive the instance as their only argument (an unbound
    method works as is). Name entries are looked up on the instance; a name that
    does not resolve to a callable is skipped.
    """
    for hook in hooks:
        if isinstance(hook, str):
            method = getattr(instance, hook, None)
            if not callable(method):
                logger.debug("Skipping post-construct hook %r on %s: not callable", hook, type(instance).__name__)
                continue
            method()
        else:
            hook(instance)
