"""Method registry.

Handlers register themselves via the ``@registry.handler`` decorator or
``registry.add``.  The registry maps JSON-RPC method names to handlers,
nothing more; invoking them is the dispatcher's job.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Protocol, Union, runtime_checkable

from rpcengine.jsonrpc import JsonRpcRequest

log = logging.getLogger(__name__)

# Type alias for an RPC handler: (request) -> result
HandlerFn = Callable[[JsonRpcRequest], Any]


@runtime_checkable
class HandlerObject(Protocol):
    """Anything with a ``handle(request)`` method can serve a method."""

    def handle(self, request: JsonRpcRequest) -> Any: ...


Handler = Union[HandlerFn, HandlerObject]


class MethodLookup(Protocol):
    """What the dispatcher needs from a registry."""

    def lookup(self, name: str) -> Handler | None: ...


def invoke(handler: Handler, request: JsonRpcRequest) -> Any:
    """Call *handler* with *request*, whichever shape it has."""
    if isinstance(handler, HandlerObject):
        return handler.handle(request)
    return handler(request)


class Registry:
    """A simple method → handler mapping.

    Usage::

        registry = Registry()

        @registry.handler("subtract")
        def subtract(request):
            a, b = request.params
            return a - b

        registry.lookup("subtract")
    """

    def __init__(self, handlers: Mapping[str, Handler] | None = None) -> None:
        self._handlers: dict[str, Handler] = {}
        for name, fn in (handlers or {}).items():
            self.add(name, fn)

    # -- Registration --------------------------------------------------
    def add(self, method: str, fn: Handler) -> None:
        """Register *fn* under *method*, replacing any previous handler."""
        if not isinstance(method, str) or not method:
            raise ValueError("method must be a non-empty string")
        if isinstance(fn, type):
            raise TypeError(f"register an instance of {fn.__name__}, not the class")
        if not (callable(fn) or isinstance(fn, HandlerObject)):
            raise TypeError("handler must be callable or define handle()")
        if method in self._handlers:
            log.warning("overwriting handler for %r", method)
        self._handlers[method] = fn
        log.debug("registered handler %r → %s", method, getattr(fn, "__qualname__", type(fn).__name__))

    def remove(self, method: str) -> bool:
        """Unregister *method*.  Returns True if it was registered."""
        removed = self._handlers.pop(method, None) is not None
        if removed:
            log.debug("removed handler %r", method)
        return removed

    def handler(self, method: str) -> Callable[[HandlerFn], HandlerFn]:
        """Decorator that registers *fn* under *method*."""

        def decorator(fn: HandlerFn) -> HandlerFn:
            self.add(method, fn)
            return fn

        return decorator

    # -- Lookup --------------------------------------------------------
    def lookup(self, name: str) -> Handler | None:
        return self._handlers.get(name)

    # -- Introspection -------------------------------------------------
    @property
    def methods(self) -> list[str]:
        return list(self._handlers.keys())

    def is_registered(self, method: str) -> bool:
        return method in self._handlers

    def __contains__(self, method: object) -> bool:
        return method in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
