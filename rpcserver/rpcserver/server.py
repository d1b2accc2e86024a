"""HTTP transport — Starlette ASGI server.

Single ``/rpc`` POST endpoint that hands the raw body to the dispatcher
and writes back whatever it answers.  No answer (notifications) is a
``204`` with an empty body.

Run directly::

    python -m rpcserver
"""

from __future__ import annotations

import logging

from rpcengine import Dispatcher, Registry
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from rpcserver.handlers import registry as default_registry
from rpcserver.settings import Settings

log = logging.getLogger(__name__)


# ── RPC endpoint ─────────────────────────────────────────────────────


async def rpc_endpoint(request: Request) -> Response:
    """Handle a JSON-RPC 2.0 POST to ``/rpc``."""
    dispatcher: Dispatcher = request.app.state.dispatcher
    body = await request.body()

    log.info("rpc ← %d byte(s) from %s", len(body), request.client.host if request.client else "-")

    # Handlers may block; keep them off the event loop
    answer = await run_in_threadpool(dispatcher.process, body)
    if answer is None:
        return Response(status_code=204)
    return Response(answer, media_type="application/json")


# ── App factory ──────────────────────────────────────────────────────


def create_app(registry: Registry | None = None, settings: Settings | None = None) -> Starlette:
    settings = settings or Settings()
    app = Starlette(
        debug=False,
        routes=[Route("/rpc", rpc_endpoint, methods=["POST"])],
    )
    app.state.dispatcher = Dispatcher(
        registry if registry is not None else default_registry,
        strict_notifications=settings.strict_notifications,
        max_workers=settings.max_workers,
    )
    return app


app = create_app(settings=Settings.from_env())
