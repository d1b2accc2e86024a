"""Request dispatch.

``Dispatcher`` takes raw request text (or an already decoded JSON tree),
validates every envelope, calls the registered handler and composes the
response.  Every failure is turned into a response where it is detected;
nothing raises out of ``dispatch_single``, ``dispatch_batch``,
``dispatch`` or ``process``.

Usage::

    registry = Registry()

    @registry.handler("subtract")
    def subtract(request):
        minuend, subtrahend = request.params
        return minuend - subtrahend

    dispatcher = Dispatcher(registry)
    dispatcher.process('{"jsonrpc": "2.0", "method": "subtract", "params": [42, 23], "id": 1}')
    # '{"jsonrpc":"2.0","result":19,"id":1}'
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Union

from rpcengine.codec import parse, render
from rpcengine.errors import ErrorKind, RpcError
from rpcengine.jsonrpc import JsonRpcRequest, JsonRpcResponse
from rpcengine.registry import MethodLookup, invoke

log = logging.getLogger(__name__)

# What a dispatch produces: one response, a batch of them, or nothing at all
Outcome = Union[JsonRpcResponse, list[JsonRpcResponse], None]


class Dispatcher:
    """Validate, route and answer JSON-RPC 2.0 requests.

    Parameters
    ----------
    registry : MethodLookup
        Anything with ``lookup(name) -> handler | None``.  Borrowed for
        each call, never mutated.
    strict_notifications : bool
        A notification handler must return ``None``.  When True, any
        other return value is answered with Internal error (id null);
        when False the value is dropped and a warning is logged.
    max_workers : int
        Batch elements are run on a thread pool of this size when it is
        greater than one.  Output order always follows input order.
    """

    def __init__(
        self,
        registry: MethodLookup,
        strict_notifications: bool = True,
        max_workers: int = 1,
    ) -> None:
        self.registry = registry
        self.strict_notifications = strict_notifications
        self.max_workers = max(1, max_workers)

    # -- Single request ------------------------------------------------
    def dispatch_single(self, obj: Any, context: Any = None) -> JsonRpcResponse:
        """Answer one envelope.  Suppressed for notifications."""
        try:
            request = JsonRpcRequest.from_dict(obj, context=context)
        except RpcError as exc:
            log.debug("invalid request: %s", exc)
            return JsonRpcResponse.fail(exc.request_id, exc.kind, exc.data)

        log.debug("rpc ← %s(id=%r)", request.method, request.id)

        handler = self.registry.lookup(request.method)
        if handler is None:
            log.warning("requested method %r not found", request.method)
            return JsonRpcResponse.fail(request.id, ErrorKind.METHOD_NOT_FOUND)

        try:
            result = invoke(handler, request)
        except RpcError as exc:
            return JsonRpcResponse.fail(request.id, exc.kind, exc.data)
        except Exception as exc:
            log.exception("handler error for %s", request.method)
            return JsonRpcResponse.fail(
                request.id, ErrorKind.INTERNAL_ERROR, {"exception": type(exc).__name__}
            )

        if request.is_notification and result is not None:
            if self.strict_notifications:
                log.error("notification %r returned a result", request.method)
                return JsonRpcResponse.fail(
                    None,
                    ErrorKind.INTERNAL_ERROR,
                    {"method": request.method, "reason": "notification returned a result"},
                )
            log.warning("dropping result of notification %r", request.method)

        return JsonRpcResponse.success(request.id, result)

    # -- Batch ---------------------------------------------------------
    def dispatch_batch(self, items: list[Any], context: Any = None) -> Outcome:
        """Answer a batch.

        Returns a single error for an empty batch, ``None`` when every
        element was a notification, otherwise the non-suppressed
        responses in input order.
        """
        if not items:
            return JsonRpcResponse.fail(None, ErrorKind.INVALID_REQUEST)

        log.debug("batch of %d request(s)", len(items))

        if self.max_workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(items))) as pool:
                responses = list(pool.map(lambda item: self.dispatch_single(item, context), items))
        else:
            responses = [self.dispatch_single(item, context) for item in items]

        kept = [r for r in responses if not r.suppressed]
        return kept or None

    # -- Decoded tree --------------------------------------------------
    def dispatch(self, payload: Any, context: Any = None) -> Outcome:
        """Route a decoded JSON tree by its top-level shape."""
        if isinstance(payload, dict):
            resp = self.dispatch_single(payload, context)
            return None if resp.suppressed else resp
        if isinstance(payload, list):
            return self.dispatch_batch(payload, context)
        return JsonRpcResponse.fail(None, ErrorKind.INVALID_REQUEST)

    # -- Raw text ------------------------------------------------------
    def process(self, raw: str | bytes, context: Any = None) -> str | None:
        """Answer raw request text.

        Returns the response text, or ``None`` when nothing at all may be
        sent back (not even an empty body).
        """
        try:
            payload = parse(raw)
        except RpcError as exc:
            return render(JsonRpcResponse.fail(None, exc.kind))

        outcome = self.dispatch(payload, context)
        if outcome is None:
            return None
        return render(outcome)


def process(
    raw: str | bytes,
    registry: MethodLookup,
    context: Any = None,
    **options: Any,
) -> str | None:
    """One-shot ``Dispatcher(registry, **options).process(raw, context)``."""
    return Dispatcher(registry, **options).process(raw, context)
