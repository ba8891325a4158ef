"""Middleware for the short link web app."""

from .heartbeat import HeartbeatMiddleware
from .logging import LoggingMiddleware
from .request_id import RequestIDMiddleware
from .headers import RealIPMiddleware
from .recovery import RecoveryMiddleware
from .content_type import JSONContentTypeMiddleware

__all__ = [
    "HeartbeatMiddleware",
    "LoggingMiddleware",
    "RequestIDMiddleware",
    "RealIPMiddleware",
    "RecoveryMiddleware",
    "JSONContentTypeMiddleware",
]
