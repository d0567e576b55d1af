"""
Navigation data models.

Route definitions, matches and the navigation state the router publishes.
Handlers receive a ``RouteMatch``; its ``token`` tells them whether their
dispatch is still the latest one.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

if TYPE_CHECKING:
    from src.routing.pattern import RoutePattern


class RouterState(str, Enum):
    """Router lifecycle."""
    
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISPATCHING = "dispatching"


class SequenceCounter:
    """Monotonic dispatch counter shared by a router and its tokens."""
    
    def __init__(self):
        self._value = 0
    
    @property
    def latest(self) -> int:
        return self._value
    
    def advance(self) -> int:
        self._value += 1
        return self._value


@dataclass(frozen=True)
class DispatchToken:
    """Identifies one dispatch; stale once a later dispatch has started."""
    
    sequence: int
    counter: SequenceCounter = field(repr=False, compare=False)
    
    def is_current(self) -> bool:
        return self.sequence == self.counter.latest
    
    @property
    def is_stale(self) -> bool:
        return not self.is_current()


RouteHandler = Callable[["RouteMatch"], Union[Awaitable[None], None]]


@dataclass(frozen=True)
class RouteDefinition:
    """
    A registered route.
    
    Attributes:
        pattern: Compiled path template
        handler: Called with the RouteMatch on dispatch (sync or async)
        name: Identifier used by is_current_route / generate_url
        title: Page title shown while the route is active
    """
    pattern: "RoutePattern"
    handler: RouteHandler
    name: str
    title: str = ""


@dataclass(frozen=True)
class RouteMatch:
    """A route matched against a concrete path."""
    
    route: RouteDefinition
    params: dict[str, str]
    path: str
    token: Optional[DispatchToken] = None
    
    def is_current(self) -> bool:
        """True unless a later dispatch has superseded this one."""
        return self.token is None or self.token.is_current()


@dataclass(frozen=True)
class NavigationState:
    """The router's published view of the active route."""
    
    match: RouteMatch
    changed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    
    @property
    def route_name(self) -> str:
        return self.match.route.name
    
    @property
    def params(self) -> dict[str, str]:
        return self.match.params


@dataclass
class LinkClick:
    """
    An intercepted anchor activation.
    
    ``href`` is None when the click did not land inside an anchor.
    """
    href: Optional[str]
    button: int = 0
    ctrl_key: bool = False
    meta_key: bool = False
    shift_key: bool = False
    alt_key: bool = False
    default_prevented: bool = False
    
    @property
    def has_modifier(self) -> bool:
        return self.ctrl_key or self.meta_key or self.shift_key or self.alt_key
    
    def prevent_default(self) -> None:
        self.default_prevented = True


def route_change_payload(match: RouteMatch) -> dict[str, Any]:
    """Payload carried by route_changed notifications."""
    return {
        "route": match.route.name,
        "title": match.route.title,
        "params": dict(match.params),
        "path": match.path,
    }
