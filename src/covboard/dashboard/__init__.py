"""covboard dashboard - live snapshots, run triggering and report lifecycle."""

from covboard.dashboard.broadcaster import (
    SnapshotBroadcaster,
    SubscriberClosedError,
    Subscription,
)
from covboard.dashboard.controller import DashboardController
from covboard.dashboard.websocket import serve_websocket, websocket_route

__all__ = [
    "DashboardController",
    "SnapshotBroadcaster",
    "SubscriberClosedError",
    "Subscription",
    "serve_websocket",
    "websocket_route",
]
