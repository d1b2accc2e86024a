import pytest
from rpcengine import ErrorKind, Registry, RpcError, ServerError


@pytest.fixture
def calls():
    """Names of invoked methods, in call order."""
    return []


@pytest.fixture
def registry(calls):
    """Registry with the handlers used by the JSON-RPC 2.0 examples."""
    reg = Registry()

    def track(name, result):
        def handler(request):
            calls.append(name)
            return result

        reg.add(name, handler)

    track("subtract", 19)
    track("sum", 7)
    track("get_data", ["hello", 5])
    track("update", None)
    track("notify_hello", None)
    track("notify_sum", None)
    track("chatty", "unexpected")

    @reg.handler("echo")
    def echo(request):
        calls.append("echo")
        return request.params

    @reg.handler("whoami")
    def whoami(request):
        return request.context

    @reg.handler("bad_params")
    def bad_params(request):
        calls.append("bad_params")
        raise RpcError(ErrorKind.INVALID_PARAMS, data={"expected": "list"})

    @reg.handler("busy")
    def busy(request):
        raise RpcError(ServerError(-32001, "Busy"))

    @reg.handler("weird")
    def weird(request):
        raise RpcError(ServerError(12, "Out of range"))

    @reg.handler("boom")
    def boom(request):
        calls.append("boom")
        raise RuntimeError("kaboom")

    return reg
