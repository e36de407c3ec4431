"""
application.context - Request-scoped context.

Every service call receives its context explicitly. Two concurrent users
get two different RequestContext instances; nothing is shared.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import uuid4


@dataclass(frozen=True)
class RequestContext:
    """Per-request context passed through all layers.

    Attributes:
        user_id:     Authenticated user ID (provided by adapter).
        request_id:  Unique per request, for tracing/logging.
    """
    user_id: int
    request_id: str = field(default_factory=lambda: uuid4().hex)
