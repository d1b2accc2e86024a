"""Text ↔ JSON tree for the wire.

``parse`` turns raw request text into a JSON tree or raises a Parse
error; ``render`` turns one response or a list of responses into
compact JSON text.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from rpcengine.errors import ErrorKind, RpcError
from rpcengine.jsonrpc import JsonRpcResponse

log = logging.getLogger(__name__)

_SEPARATORS = (",", ":")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def parse(raw: str | bytes | bytearray) -> Any:
    """Decode *raw* (text or UTF-8 bytes) into a JSON tree.

    ``NaN``, ``Infinity`` and ``-Infinity`` are not JSON and are
    rejected along with everything else ``json`` refuses.
    """
    try:
        if isinstance(raw, (bytes, bytearray)):
            raw = raw.decode("utf-8")
        return json.loads(raw, parse_constant=_reject_constant)
    except (UnicodeDecodeError, ValueError, RecursionError) as exc:
        log.debug("parse error: %s", exc)
        raise RpcError(ErrorKind.PARSE_ERROR) from exc


def dumps(obj: Any) -> str:
    return json.dumps(obj, separators=_SEPARATORS, ensure_ascii=False, allow_nan=False)


def encode_response(resp: JsonRpcResponse) -> str:
    """Render one response.

    A result (or error data) that cannot be encoded as JSON is answered
    with Internal error under the same id, or under a null id when the
    id itself cannot be encoded.
    """
    try:
        return dumps(resp.to_dict())
    except (TypeError, ValueError):
        log.exception("cannot encode response for id=%r", resp.id)
    try:
        return dumps(JsonRpcResponse.fail(resp.id, ErrorKind.INTERNAL_ERROR).to_dict())
    except (TypeError, ValueError):
        return dumps(JsonRpcResponse.fail(None, ErrorKind.INTERNAL_ERROR).to_dict())


def render(outcome: JsonRpcResponse | list[JsonRpcResponse]) -> str:
    """Render a single response or a batch of responses.

    Suppressed responses must have been filtered out by the caller.
    """
    if isinstance(outcome, list):
        return "[" + ",".join(encode_response(r) for r in outcome) + "]"
    return encode_response(outcome)
