"""RPC client — thin JSON-RPC 2.0 consumer over HTTP.

* ``call(method, params)``          → result
* ``notify(method, params)``        → nothing; the server answers 204
* ``batch(calls)``                  → results in call order

Uses ``httpx.AsyncClient`` with connection pooling.
**Never** imports from ``rpcserver``.

Run directly for a quick demo against a local server::

    python -m rpcclient.client
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Sequence

import httpx
from rpcengine.jsonrpc import JsonRpcError, JsonRpcRequest, JsonRpcResponse

from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential, retry_if_exception_type

log = logging.getLogger(__name__)

Params = list[Any] | dict[str, Any] | None

# (method, params) or (method, params, notify)
BatchEntry = tuple[str, Params] | tuple[str, Params, bool]


class RemoteCallError(Exception):
    """Raised when the server answers with a JSON-RPC error."""

    def __init__(self, error: JsonRpcError) -> None:
        self.error = error
        super().__init__(f"[{error.code}] {error.message}")


class ProtocolError(Exception):
    """The server's answer is not what JSON-RPC 2.0 allows."""


def _new_id() -> str:
    return uuid.uuid4().hex


class RpcClient:
    """Async client that talks JSON-RPC 2.0 over HTTP.

    Parameters
    ----------
    base_url : str
        Server origin, e.g. ``http://127.0.0.1:8100``.
    timeout : float
        Default request timeout in seconds.
    max_retries : int
        Max connection-level retries.
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8100",
        timeout: float = 30.0,
        max_retries: int = 3,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
        )

    # -- Lifecycle -----------------------------------------------------

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RpcClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

    # -- Internal helpers ----------------------------------------------

    def _get_retrier(self) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=0.5, max=10),
            retry=retry_if_exception_type((httpx.NetworkError, httpx.TimeoutException)),
            reraise=True,
        )

    async def _post(self, payload: Any) -> httpx.Response:
        async for attempt in self._get_retrier():
            with attempt:
                resp = await self._client.post("/rpc", json=payload)
                resp.raise_for_status()
        return resp

    # -- Unary RPC -----------------------------------------------------

    async def call(self, method: str, params: Params = None) -> Any:
        """Send one request and return its result.

        Raises ``RemoteCallError`` if the server answers with an error.
        """
        req = JsonRpcRequest(method=method, params=params, id=_new_id())

        log.debug("rpc → %s(id=%s)", method, req.id)

        resp = await self._post(req.to_dict())
        if resp.status_code == 204 or not resp.content:
            raise ProtocolError(f"no response to {method!r} (id={req.id})")

        answer = JsonRpcResponse.from_dict(resp.json())
        if answer.error is not None:
            raise RemoteCallError(answer.error)
        return answer.result

    async def notify(self, method: str, params: Params = None) -> None:
        """Send a notification.  Nothing comes back on success."""
        req = JsonRpcRequest(method=method, params=params)

        log.debug("rpc notify → %s", method)

        resp = await self._post(req.to_dict())
        if resp.status_code != 204:
            data = resp.json()
            error = data.get("error") if isinstance(data, dict) else None
            if error is not None:
                raise RemoteCallError(JsonRpcError.from_dict(error))
            raise ProtocolError(f"unexpected response to notification {method!r}")

    # -- Batch RPC -----------------------------------------------------

    async def batch(
        self,
        calls: Sequence[BatchEntry],
    ) -> list[Any]:
        """Send *calls* as one batch.

        Each entry is ``(method, params)``, or ``(method, params, notify)``
        where a true *notify* sends that entry as a notification.  Returns
        one entry per non-notification call, in call order: the result, or
        a ``RemoteCallError`` instance for calls that failed.
        """
        requests: list[JsonRpcRequest] = []
        payload: list[dict[str, Any]] = []
        for entry in calls:
            method, params = entry[0], entry[1]
            notify = len(entry) > 2 and bool(entry[2])
            if notify:
                req = JsonRpcRequest(method=method, params=params)
            else:
                req = JsonRpcRequest(method=method, params=params, id=_new_id())
                requests.append(req)
            payload.append(req.to_dict())

        log.debug("rpc batch → %d call(s), %d total", len(requests), len(payload))

        resp = await self._post(payload)
        if resp.status_code == 204 or not resp.content:
            if requests:
                raise ProtocolError("no response to a batch containing calls")
            return []

        data = resp.json()
        if isinstance(data, dict):
            # The whole batch was rejected
            answer = JsonRpcResponse.from_dict(data)
            raise RemoteCallError(answer.error or JsonRpcError(code=0, message="bad batch answer"))

        by_id: dict[Any, JsonRpcResponse] = {}
        for raw in data:
            answer = JsonRpcResponse.from_dict(raw)
            by_id[answer.id] = answer

        results: list[Any] = []
        for req in requests:
            answer = by_id.get(req.id)
            if answer is None:
                raise ProtocolError(f"missing response for id={req.id}")
            results.append(RemoteCallError(answer.error) if answer.error else answer.result)
        return results


# ── Demo entrypoint ──────────────────────────────────────────────────


async def _demo() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    async with RpcClient() as client:
        print("── subtract ──")
        result = await client.call("subtract", [42, 23])
        print(f"  result: {result}")

        print("── notify ──")
        await client.notify("notify_hello", [7])

        print("── batch ──")
        results = await client.batch(
            [
                ("sum", [1, 2, 4]),
                ("update", [1, 2, 3], True),
                ("subtract", {"minuend": 42, "subtrahend": 23}),
                ("nope", None),
            ],
        )
        for r in results:
            print(f"  {r!r}")

        print("── done ──")


if __name__ == "__main__":
    import anyio

    anyio.run(_demo)
