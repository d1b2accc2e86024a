"""Tests for the error taxonomy."""

import pytest
from rpcengine.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ErrorKind,
    RpcError,
    ServerError,
    code_of,
    coerce,
    description_of,
    is_valid,
)


class TestErrorCodes:
    def test_standard_codes(self):
        assert PARSE_ERROR == -32700
        assert INVALID_REQUEST == -32600
        assert METHOD_NOT_FOUND == -32601
        assert INVALID_PARAMS == -32602
        assert INTERNAL_ERROR == -32603

    @pytest.mark.parametrize(
        "kind, code, message",
        [
            (ErrorKind.PARSE_ERROR, -32700, "Parse error"),
            (ErrorKind.INVALID_REQUEST, -32600, "Invalid Request"),
            (ErrorKind.METHOD_NOT_FOUND, -32601, "Method not found"),
            (ErrorKind.INVALID_PARAMS, -32602, "Invalid params"),
            (ErrorKind.INTERNAL_ERROR, -32603, "Internal error"),
        ],
    )
    def test_fixed_kinds(self, kind, code, message):
        assert code_of(kind) == code
        assert description_of(kind) == message
        assert is_valid(kind)
        assert coerce(kind) is kind


class TestServerError:
    @pytest.mark.parametrize("code", [-32099, -32050, -32000])
    def test_in_range(self, code):
        kind = ServerError(code, "Custom")
        assert is_valid(kind)
        assert coerce(kind) == kind
        assert code_of(kind) == code
        assert description_of(kind) == "Custom"

    @pytest.mark.parametrize("code", [-32100, -31999, 0, 1, -32603])
    def test_out_of_range(self, code):
        kind = ServerError(code, "Custom")
        assert not is_valid(kind)
        assert coerce(kind) is ErrorKind.INTERNAL_ERROR


class TestRpcError:
    def test_str(self):
        err = RpcError(ErrorKind.INVALID_PARAMS, data=[1])
        assert str(err) == "[-32602] Invalid params"
        assert err.code == INVALID_PARAMS
        assert err.data == [1]
        assert err.request_id is None
