import logging
import json
from typing import Any, Callable, Dict, List, Optional
from accountkit.modules.users.domain.events import UserEvent
from accountkit.modules.users.domain.user import utc_now

logger = logging.getLogger("accountkit.audit")

EventSink = Callable[[UserEvent], None]


class AuditManager:
    """
    Centralized event emission point.
    Every significant user transition passes through here and is logged and
    forwarded to the registered sinks (metrics, log shippers, tests).
    """

    def __init__(self):
        self._sinks: List[EventSink] = []

    def add_sink(self, sink: EventSink) -> None:
        self._sinks.append(sink)

    def remove_sink(self, sink: EventSink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def log_event(
        self,
        event_type: str,
        user_id: str,
        details: Optional[Dict[str, Any]] = None
    ) -> UserEvent:
        """
        Builds and emits an event for a single user.
        """
        event = UserEvent(
            event_type=event_type,
            user_id=str(user_id),
            details=details or {},
            occurred_at=utc_now().isoformat(),
        )
        self.emit(event)
        return event

    def emit(self, event: UserEvent) -> None:
        logger.info(f"AUDIT [{event.user_id}] {event.event_type} {json.dumps(event.details, default=str)}")

        for sink in list(self._sinks):
            try:
                sink(event)
            except Exception as e:
                # A broken sink must not fail the operation
                logger.critical(f"AUDIT SINK FAILURE: {e} - Event: {event.event_type} {event.user_id}")


audit_manager = AuditManager()
