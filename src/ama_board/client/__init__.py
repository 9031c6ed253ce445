"""Async polling client with optimistic vote and presenter state."""

from .http import ApiError, BoardClient, ClientError, NetworkError
from .poller import BoardPoller, PollingLoop
from .presenter import PresenterController
from .reconcile import OptimisticBoard, merge_refresh, resolve_vote_target

__all__ = [
    "ApiError",
    "BoardClient",
    "BoardPoller",
    "ClientError",
    "NetworkError",
    "OptimisticBoard",
    "PollingLoop",
    "PresenterController",
    "merge_refresh",
    "resolve_vote_target",
]
