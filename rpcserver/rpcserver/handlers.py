"""Example RPC handlers.

All handlers are registered on the module-level ``registry`` which the
server imports.  They accept positional or named params the way the
JSON-RPC 2.0 examples do.
"""

from __future__ import annotations

import logging
from typing import Any

from rpcengine import ErrorKind, JsonRpcRequest, Registry, RpcError, ServerError

log = logging.getLogger(__name__)

registry = Registry()


def _numbers(values: Any) -> list[float]:
    if not isinstance(values, list) or not all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in values
    ):
        raise RpcError(ErrorKind.INVALID_PARAMS, data="expected a list of numbers")
    return values


# ── Calls ────────────────────────────────────────────────────────────


@registry.handler("echo")
def echo(request: JsonRpcRequest) -> Any:
    """Return params unchanged."""
    return request.params


@registry.handler("add")
def add(request: JsonRpcRequest) -> dict:
    """Add two numbers given as ``{"a": .., "b": ..}``."""
    params = request.params if isinstance(request.params, dict) else {}
    a, b = _numbers([params.get("a", 0), params.get("b", 0)])
    return {"result": a + b}


@registry.handler("subtract")
def subtract(request: JsonRpcRequest) -> float:
    params = request.params
    if isinstance(params, dict):
        try:
            params = [params["minuend"], params["subtrahend"]]
        except KeyError as exc:
            raise RpcError(ErrorKind.INVALID_PARAMS, data=f"missing {exc.args[0]}") from exc
    values = _numbers(params)
    if len(values) != 2:
        raise RpcError(ErrorKind.INVALID_PARAMS, data="expected exactly two numbers")
    return values[0] - values[1]


@registry.handler("sum")
def sum_(request: JsonRpcRequest) -> float:
    return sum(_numbers(request.params))


@registry.handler("get_data")
def get_data(request: JsonRpcRequest) -> list:
    return ["hello", 5]


@registry.handler("fail")
def fail(request: JsonRpcRequest) -> None:
    """Always answer with a custom server error."""
    raise RpcError(ServerError(-32000, "Server error"), data=request.params)


# ── Notifications ────────────────────────────────────────────────────


@registry.handler("update")
def update(request: JsonRpcRequest) -> None:
    log.info("update: %r", request.params)


@registry.handler("notify_hello")
def notify_hello(request: JsonRpcRequest) -> None:
    log.info("hello: %r", request.params)
