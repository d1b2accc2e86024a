"""rpcclient — JSON-RPC 2.0 over HTTP."""

from rpcclient.client import ProtocolError, RemoteCallError, RpcClient

__all__ = ["RpcClient", "RemoteCallError", "ProtocolError"]
