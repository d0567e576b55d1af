"""
Client Navigation Router - route patterns, history and dispatch.
"""

from src.routing.history import InMemoryHistory
from src.routing.pattern import RoutePattern
from src.routing.router import DEFAULT_ROUTES, NOT_FOUND_PATH, Router

__all__ = ["Router", "RoutePattern", "InMemoryHistory", "DEFAULT_ROUTES", "NOT_FOUND_PATH"]
