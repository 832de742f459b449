"""WebSocket transport for dashboard snapshots."""

from __future__ import annotations

import anyio
import structlog
from starlette.routing import WebSocketRoute
from starlette.websockets import WebSocket, WebSocketDisconnect

from covboard.dashboard.broadcaster import SnapshotBroadcaster

logger = structlog.get_logger()


async def serve_websocket(broadcaster: SnapshotBroadcaster, websocket: WebSocket) -> None:
    """Stream snapshots to one client until either side goes away.

    The client gets the current snapshot immediately, then every later
    publish as a JSON text frame. A client too slow to keep up with its
    queue is disconnected.
    """
    await websocket.accept()
    subscription = broadcaster.open_subscription()
    logger.debug("websocket_connected", subscribers=broadcaster.subscriber_count)
    client_gone = False

    async def pump(scope: anyio.CancelScope) -> None:
        nonlocal client_gone
        try:
            async for snapshot in subscription:
                await websocket.send_json(snapshot.to_dict())
        except WebSocketDisconnect:
            client_gone = True
        scope.cancel()

    async def drain(scope: anyio.CancelScope) -> None:
        # Client messages are ignored; this only notices the disconnect
        nonlocal client_gone
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                client_gone = True
                scope.cancel()
                return

    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(pump, tg.cancel_scope)
            tg.start_soon(drain, tg.cancel_scope)
    finally:
        broadcaster.unsubscribe(subscription)
        subscription.close()

    if not client_gone:
        await websocket.close()
    logger.debug("websocket_disconnected", subscribers=broadcaster.subscriber_count)


def websocket_route(broadcaster: SnapshotBroadcaster, path: str = "/ws") -> WebSocketRoute:
    """Starlette route serving the snapshot stream at ``path``."""

    async def endpoint(websocket: WebSocket) -> None:
        await serve_websocket(broadcaster, websocket)

    return WebSocketRoute(path, endpoint)
