"""Registry mapping original callables to their memoized wrappers."""

from __future__ import annotations

import logging
import types
import weakref
from typing import Any, Callable, Hashable

logger = logging.getLogger(__name__)

BINDINGS_ATTR = "__mems_memorizers__"


class RegistryError(TypeError):
    """Raised when a target cannot be registered."""


class _RegistryToken:
    __slots__ = ("__weakref__",)


class FunctionRegistry:
    """Non-owning association from a target callable to its wrapper.

    The binding is stored on the target itself, under ``__mems_memorizers__``,
    keyed by a token only this registry holds. A wrapper therefore lives exactly
    as long as its target: the target/wrapper cycle is collectable once nothing
    else references the target. Bound methods store their binding on
    ``__self__`` keyed by ``__func__``, so ``obj.method`` resolves to the same
    wrapper on every access. Callables without a writable ``__dict__``
    (builtins and the like) are pinned in a side table.
    """

    def __init__(self) -> None:
        self._token = _RegistryToken()
        self._wrappers: weakref.WeakSet[Callable[..., Any]] = weakref.WeakSet()
        self._pinned: dict[tuple[int, Hashable], tuple[Any, Callable[..., Any]]] = {}

    def add_memorizer(self, target: Callable[..., Any], wrapper: Callable[..., Any]) -> None:
        if not callable(target):
            raise RegistryError(f"Cannot memoize non-callable {type(target).__name__}")
        owner, slot = _owner_and_slot(target)
        previous = self.get_memorizer(target)
        if previous is not None:
            self._wrappers.discard(previous)

        bindings = _bindings(owner, create=True)
        if bindings is None:
            logger.debug("%r has no writable __dict__; pinning its wrapper", target)
            self._pinned[(id(owner), slot)] = (owner, wrapper)
        else:
            bindings.setdefault(self._token, {})[slot] = wrapper
        self._wrappers.add(wrapper)

    def get_memorizer(self, target: Callable[..., Any]) -> Callable[..., Any] | None:
        owner, slot = _owner_and_slot(target)
        bindings = _bindings(owner, create=False)
        if bindings is not None:
            return bindings.get(self._token, {}).get(slot)
        pinned = self._pinned.get((id(owner), slot))
        if pinned is not None and pinned[0] is owner:
            return pinned[1]
        return None

    def clear(self) -> None:
        # bindings left on targets are keyed by the old token and drop with it
        self._token = _RegistryToken()
        self._wrappers = weakref.WeakSet()
        self._pinned.clear()

    def __contains__(self, target: object) -> bool:
        return self.get_memorizer(target) is not None  # type: ignore[arg-type]

    def __len__(self) -> int:
        return len(self._wrappers)


def _owner_and_slot(target: Any) -> tuple[Any, Hashable]:
    if isinstance(target, types.MethodType):
        return target.__self__, target.__func__
    return target, None


def _bindings(owner: Any, create: bool) -> weakref.WeakKeyDictionary | None:
    try:
        bindings = vars(owner).get(BINDINGS_ATTR)
    except TypeError:
        return None
    if bindings is None and create:
        bindings = weakref.WeakKeyDictionary()
        try:
            setattr(owner, BINDINGS_ATTR, bindings)
        except (AttributeError, TypeError):
            return None
    return bindings


_DEFAULT_REGISTRY = FunctionRegistry()


def default_registry() -> FunctionRegistry:
    return _DEFAULT_REGISTRY


def clear_registry() -> None:
    _DEFAULT_REGISTRY.clear()
