"""
Notification event model.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol


@dataclass(frozen=True)
class ChangeEvent:
    """
    A single broadcast on the notification channel.
    
    Attributes:
        channel: Channel name ("data_changed" or "route_changed")
        action: What happened (see DataAction)
        payload: Action-specific data (a project, route details, ...)
        timestamp: When the event was emitted (UTC)
    """
    channel: str
    action: str
    payload: Any = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ChangeListener(Protocol):
    """Protocol for notification listeners."""
    
    def __call__(self, event: ChangeEvent) -> None:
        """Called once per emission while subscribed."""
        ...
