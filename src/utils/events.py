"""
In-process notification channel.

Listeners subscribe and get back an unsubscribe callable. Every emission is
delivered at most once to each listener registered at the time of the
emission; a failing listener is logged and does not stop the fan-out.
"""

import logging
from enum import Enum
from typing import Any, Callable, Union

from src.models.events import ChangeEvent, ChangeListener


logger = logging.getLogger(__name__)


class EventChannel:
    """A named broadcast channel ("data_changed", "route_changed", ...)."""
    
    def __init__(self, name: str):
        self.name = name
        self._listeners: list[ChangeListener] = []
    
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """
        Register a listener.
        
        Returns:
            A callable that removes the listener; calling it twice is a no-op
        """
        self._listeners.append(listener)
        
        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        
        return unsubscribe
    
    @property
    def listener_count(self) -> int:
        return len(self._listeners)
    
    def emit(self, action: Union[str, Enum], payload: Any = None) -> ChangeEvent:
        """Broadcast an event to the current listeners and return it."""
        if isinstance(action, Enum):
            action = action.value
        event = ChangeEvent(channel=self.name, action=action, payload=payload)
        
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(f"Listener failed on {self.name}:{event.action}")
        
        return event
