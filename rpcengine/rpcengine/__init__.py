"""rpcengine — JSON-RPC 2.0 request processing."""

from rpcengine.dispatcher import Dispatcher, process
from rpcengine.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorKind,
    RpcError,
    ServerError,
)
from rpcengine.jsonrpc import ABSENT, JsonRpcError, JsonRpcRequest, JsonRpcResponse
from rpcengine.registry import Registry

__all__ = [
    "Dispatcher",
    "process",
    "Registry",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "JsonRpcError",
    "ABSENT",
    "ErrorKind",
    "ServerError",
    "RpcError",
    "PARSE_ERROR",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
]
