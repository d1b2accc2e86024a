"""JSON-RPC 2.0 wire-format models.

Pure data — no I/O, no business logic.  The server, the client and the
dispatcher import these for validation and serialisation.

Two different "nothing" values travel through here and must not be
confused:

* ``None`` as a request/response id is the JSON ``null`` id and is
  written to the wire.
* ``ABSENT`` means the request had no ``id`` member at all (a
  notification).  A response carrying it is *suppressed* and must never
  be rendered.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from rpcengine.errors import ErrorKind, Kind, RpcError, coerce

JSONRPC_VERSION = "2.0"


class _Absent:
    """Marker for an ``id`` member that was not present."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()


def is_valid_id(value: Any) -> bool:
    """Ids are strings, numbers or null.

    ``bool`` is not a number here, and neither is a float that overflowed
    to infinity while decoding (e.g. ``1e400``): it cannot be echoed back.
    """
    if value is None or isinstance(value, str):
        return True
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, int) and not isinstance(value, bool)


# ── Models ───────────────────────────────────────────────────────────
@dataclass(slots=True)
class JsonRpcError:
    """JSON-RPC 2.0 error object.

    ``data`` is written only when it is not ``None``.
    """

    code: int
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            d["data"] = self.data
        return d

    @classmethod
    def from_kind(cls, kind: Kind, data: Any = None) -> "JsonRpcError":
        """Build the error object for *kind*, downgrading illegal server codes."""
        kind = coerce(kind)
        return cls(code=kind.code, message=kind.message, data=data)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "JsonRpcError":
        return cls(code=raw["code"], message=raw["message"], data=raw.get("data"))


@dataclass(frozen=True, slots=True)
class JsonRpcRequest:
    """A validated inbound JSON-RPC 2.0 request.

    ``id`` is ``ABSENT`` for notifications.  ``context`` is whatever the
    caller of the dispatcher passed in; it is never serialised.
    """

    method: str
    params: list[Any] | dict[str, Any] | None = None
    id: Any = ABSENT
    context: Any = None

    @property
    def is_notification(self) -> bool:
        return self.id is ABSENT

    # -- Convenience ---------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION, "method": self.method}
        if self.params is not None:
            d["params"] = self.params
        if self.id is not ABSENT:
            d["id"] = self.id
        return d

    @classmethod
    def from_dict(cls, raw: Any, context: Any = None) -> "JsonRpcRequest":
        """Validate a decoded envelope and build the request.

        Raises ``RpcError(INVALID_REQUEST)`` on bad input.  The error's
        ``request_id`` is the id that could be trusted at the point of
        failure, or ``None`` (JSON null) when there was none.
        """
        if not isinstance(raw, dict):
            raise RpcError(ErrorKind.INVALID_REQUEST)
        # The version goes first: nothing else in the envelope is trusted
        # until it passes.
        if raw.get("jsonrpc") != JSONRPC_VERSION:
            raise RpcError(ErrorKind.INVALID_REQUEST)

        req_id = raw.get("id", ABSENT)
        if req_id is not ABSENT and not is_valid_id(req_id):
            raise RpcError(ErrorKind.INVALID_REQUEST)
        known_id = None if req_id is ABSENT else req_id

        method = raw.get("method")
        if not isinstance(method, str) or not method:
            raise RpcError(ErrorKind.INVALID_REQUEST, request_id=known_id)

        params = raw.get("params", ABSENT)
        if params is ABSENT:
            params = None
        elif not isinstance(params, (list, dict)):
            raise RpcError(ErrorKind.INVALID_REQUEST, request_id=known_id)

        return cls(method=method, params=params, id=req_id, context=context)


@dataclass(slots=True)
class JsonRpcResponse:
    """Outbound JSON-RPC 2.0 response.

    Exactly one of ``result`` / ``error`` is meaningful: a response is an
    error response iff ``error`` is set, so ``result=None`` is a valid
    JSON ``null`` result.
    """

    id: Any
    result: Any = None
    error: JsonRpcError | None = None

    @property
    def suppressed(self) -> bool:
        """True for responses to notifications; these are never written."""
        return self.id is ABSENT

    def to_dict(self) -> dict[str, Any]:
        if self.suppressed:
            raise ValueError("suppressed response has no wire form")
        d: dict[str, Any] = {"jsonrpc": JSONRPC_VERSION}
        if self.error is not None:
            d["error"] = self.error.to_dict()
        else:
            d["result"] = self.result
        d["id"] = self.id
        return d

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "JsonRpcResponse":
        error = raw.get("error")
        return cls(
            id=raw.get("id"),
            result=raw.get("result"),
            error=JsonRpcError.from_dict(error) if error is not None else None,
        )

    # -- Factories -----------------------------------------------------
    @classmethod
    def success(cls, req_id: Any, result: Any) -> "JsonRpcResponse":
        return cls(id=req_id, result=result)

    @classmethod
    def fail(cls, req_id: Any, kind: Kind, data: Any = None) -> "JsonRpcResponse":
        return cls(id=req_id, error=JsonRpcError.from_kind(kind, data))
