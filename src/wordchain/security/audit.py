"""Security audit events.

Small opt-in event channel for authentication telemetry: logins, session
rotations, and rejected credentials. The CLI installs ``log_sink`` so
events land on the ``wordchain.audit`` logger; tests install a list.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from time import time
from typing import Any, TypeAlias

logger = logging.getLogger("wordchain.audit")


@dataclass(frozen=True, slots=True)
class SecurityEvent:
    """A structured security event."""

    name: str
    timestamp: float = field(default_factory=time)
    path: str | None = None
    method: str | None = None
    user_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


SecurityEventSink: TypeAlias = Callable[[SecurityEvent], None]


_sink_lock = threading.Lock()
_sink: SecurityEventSink | None = None


def set_security_event_sink(sink: SecurityEventSink | None) -> None:
    """Set a process-wide sink for security events.

    Pass ``None`` to disable event delivery.
    """
    global _sink
    with _sink_lock:
        _sink = sink


def log_sink(event: SecurityEvent) -> None:
    """Sink that writes each event to the ``wordchain.audit`` logger."""
    logger.info("security event %s", event.name, extra={"data": asdict(event)})


def emit_security_event(
    name: str,
    *,
    request: Any | None = None,
    user_id: str | None = None,
    details: dict[str, Any] | None = None,
) -> None:
    """Emit a best-effort security event to the configured sink."""
    with _sink_lock:
        sink = _sink
    if sink is None:
        return

    path = None
    method = None
    if request is not None:
        path = getattr(request, "path", None)
        method = getattr(request, "method", None)

    sink(
        SecurityEvent(
            name=name,
            path=path,
            method=method,
            user_id=user_id,
            details=details or {},
        )
    )
