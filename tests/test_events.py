"""Tests for the notification channel."""

from src.models.enums import DataAction
from src.utils.events import EventChannel


class TestEventChannel:
    """Tests for EventChannel."""
    
    def test_emit_delivers_to_listeners(self):
        channel = EventChannel("data_changed")
        received = []
        channel.subscribe(received.append)
        
        event = channel.emit(DataAction.UPDATE, {"id": "proj_1"})
        
        assert received == [event]
        assert event.channel == "data_changed"
        assert event.action == "update"
        assert event.payload == {"id": "proj_1"}
    
    def test_plain_string_actions(self):
        channel = EventChannel("route_changed")
        
        assert channel.emit("route_changed").action == "route_changed"
    
    def test_unsubscribe(self):
        channel = EventChannel("data_changed")
        received = []
        unsubscribe = channel.subscribe(received.append)
        
        unsubscribe()
        unsubscribe()
        channel.emit(DataAction.CREATE)
        
        assert received == []
        assert channel.listener_count == 0
    
    def test_failing_listener_does_not_stop_others(self):
        channel = EventChannel("data_changed")
        received = []
        
        def broken(event):
            raise RuntimeError("listener bug")
        
        channel.subscribe(broken)
        channel.subscribe(received.append)
        channel.emit(DataAction.DELETE, "proj_1")
        
        assert len(received) == 1
    
    def test_subscribe_during_emit_waits_for_next_event(self):
        """Listeners added mid-emission only see later events."""
        channel = EventChannel("data_changed")
        late = []
        
        def add_listener(event):
            channel.subscribe(late.append)
        
        unsubscribe = channel.subscribe(add_listener)
        channel.emit(DataAction.CREATE)
        unsubscribe()
        
        assert late == []
        channel.emit(DataAction.UPDATE)
        assert [e.action for e in late] == ["update"]
