"""JSON-RPC 2.0 error taxonomy.

Fixed error kinds, caller-defined server errors and the exception that
handlers raise to report a classified failure.  Pure lookups, no state.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# ── Standard error codes (JSON-RPC 2.0 §5.1) ────────────────────────
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

# Reserved for implementation-defined server errors
SERVER_ERROR_MIN = -32099
SERVER_ERROR_MAX = -32000


class ErrorKind(Enum):
    """The predefined error kinds."""

    PARSE_ERROR = (PARSE_ERROR, "Parse error")
    INVALID_REQUEST = (INVALID_REQUEST, "Invalid Request")
    METHOD_NOT_FOUND = (METHOD_NOT_FOUND, "Method not found")
    INVALID_PARAMS = (INVALID_PARAMS, "Invalid params")
    INTERNAL_ERROR = (INTERNAL_ERROR, "Internal error")

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class ServerError:
    """Implementation-defined error.

    Only codes in ``[-32099, -32000]`` are legal; anything else is
    reported as Internal error when it reaches the wire.
    """

    code: int
    message: str


Kind = Union[ErrorKind, ServerError]


def code_of(kind: Kind) -> int:
    return kind.code


def description_of(kind: Kind) -> str:
    return kind.message


def is_valid(kind: Kind) -> bool:
    """Predefined kinds are always valid, server errors only in range."""
    if isinstance(kind, ServerError):
        return SERVER_ERROR_MIN <= kind.code <= SERVER_ERROR_MAX
    return True


def coerce(kind: Kind) -> Kind:
    """Return *kind*, or Internal error if it carries an illegal code."""
    return kind if is_valid(kind) else ErrorKind.INTERNAL_ERROR


class RpcError(Exception):
    """A classified JSON-RPC failure.

    Handlers raise this to answer with a specific error instead of a
    result.  ``request_id`` is the id that was recoverable where the
    failure was detected; ``None`` renders as JSON null.

    ``data=None`` means "no data": the error object then has no ``data``
    member at all, so an explicit ``"data": null`` cannot be sent.

    Usage::

        raise RpcError(ErrorKind.INVALID_PARAMS, data={"expected": "list"})
    """

    def __init__(self, kind: Kind, data: Any = None, request_id: Any = None) -> None:
        self.kind = kind
        self.data = data
        self.request_id = request_id
        super().__init__(f"[{kind.code}] {kind.message}")

    @property
    def code(self) -> int:
        return self.kind.code
