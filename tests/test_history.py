"""Tests for the in-memory history."""

from src.routing.history import InMemoryHistory


class TestInMemoryHistory:
    """Tests for InMemoryHistory."""
    
    def test_initial_entry(self):
        history = InMemoryHistory("/projects/acme")
        
        assert history.current_path == "/projects/acme"
        assert history.length == 1
    
    def test_empty_initial_path_is_root(self):
        assert InMemoryHistory("").current_path == "/"
    
    def test_push_and_back_forward(self):
        history = InMemoryHistory("/")
        history.push("/projects/a")
        history.push("/projects/b", state={"from": "a"})
        
        assert history.current_path == "/projects/b"
        assert history.current_state == {"from": "a"}
        
        assert history.back()
        assert history.current_path == "/projects/a"
        assert history.forward()
        assert history.current_path == "/projects/b"
    
    def test_back_at_start_and_forward_at_end(self):
        history = InMemoryHistory("/")
        
        assert not history.back()
        assert not history.forward()
    
    def test_push_drops_forward_entries(self):
        history = InMemoryHistory("/")
        history.push("/a")
        history.push("/b")
        history.back()
        history.push("/c")
        
        assert history.entries() == ["/", "/a", "/c"]
        assert not history.forward()
    
    def test_replace(self):
        history = InMemoryHistory("/")
        history.push("/a")
        history.replace("/404")
        
        assert history.entries() == ["/", "/404"]
        assert history.entries(limit=1) == ["/404"]
