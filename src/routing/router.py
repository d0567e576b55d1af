"""
Client Navigation Router.

Dispatches paths to handlers through an ordered registry of route patterns,
keeps the host history in step, and applies a fixed fallback policy:

- a path no route matches is redirected to ``/404`` (never an exception)
- a handler that raises is logged and replaced by a generic error surface
- a ``route_changed`` notification follows every dispatch, success or not

Every dispatch carries a sequence token. Handlers that await data check
``match.is_current()`` afterwards and drop their result if a newer
navigation has started, so the last navigation wins.
"""

import dataclasses
import inspect
import logging
from typing import Any, Callable, Optional
from urllib.parse import urlsplit

from src.models.enums import DataAction
from src.models.events import ChangeListener
from src.models.routing import (
    DispatchToken,
    LinkClick,
    NavigationState,
    RouteDefinition,
    RouteHandler,
    RouteMatch,
    RouterState,
    SequenceCounter,
    route_change_payload,
)
from src.routing.links import resolve_href, should_intercept
from src.routing.pattern import RoutePattern
from src.utils.events import EventChannel
from src.utils.protocols import HistoryProtocol, PageSurfaceProtocol, RouteHandlersProtocol


logger = logging.getLogger(__name__)


NOT_FOUND_PATH = "/404"
ROUTE_ERROR_MESSAGE = "An error occurred while loading the page."

# (pattern, name, title, handler attribute) - registration order is match order
DEFAULT_ROUTES: list[tuple[str, str, str, str]] = [
    ("/", "dashboard", "Project Dashboard", "dashboard"),
    ("/projects/:slug", "project", "Project Dashboard", "project"),
    ("/projects/:slug/edit", "project-edit", "Edit Project", "project_edit"),
    ("*", "404", "Page Not Found", "not_found"),
]


def not_found_message(path: str) -> str:
    return f'The page "{path}" could not be found.'


class Router:
    """
    Pattern-based path dispatcher with history integration.
    
    Lifecycle: UNINITIALIZED until initialize(), then READY, moving to
    DISPATCHING while a handler runs.
    """
    
    def __init__(
        self,
        history: HistoryProtocol,
        handlers: Optional[RouteHandlersProtocol] = None,
        surface: Optional[PageSurfaceProtocol] = None,
        channel: Optional[EventChannel] = None,
        base_path: str = "",
        title_suffix: str = "Supplement Factory",
    ):
        """
        Initialize the router.
        
        Args:
            history: Host navigation facility (push/replace/back/forward)
            handlers: Page handlers for the fixed route set
            surface: Receives page titles and error messages
            channel: Channel for route_changed notifications
            base_path: Prefix the app is mounted under (e.g. "/tracker")
            title_suffix: Appended to every route title
        """
        self.history = history
        self.handlers = handlers
        self.surface = surface
        self.channel = channel or EventChannel("route_changed")
        self.title_suffix = title_suffix
        self.base_path = ""
        self.set_base_path(base_path)
        
        self.routes: list[RouteDefinition] = []
        self._navigation: Optional[NavigationState] = None
        self._sequence = SequenceCounter()
        self._state = RouterState.UNINITIALIZED
    
    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    
    @property
    def state(self) -> RouterState:
        return self._state
    
    def add_route(
        self,
        pattern: str,
        name: str,
        title: str,
        handler: RouteHandler,
    ) -> RouteDefinition:
        """
        Register a route. Routes are tried in registration order, except
        that a wildcard route always stays last.
        """
        route = RouteDefinition(
            pattern=RoutePattern(pattern),
            handler=handler,
            name=name,
            title=title,
        )
        
        if not route.pattern.is_wildcard and self.routes and self.routes[-1].pattern.is_wildcard:
            self.routes.insert(len(self.routes) - 1, route)
        else:
            self.routes.append(route)
        
        logger.debug(f"Registered route '{name}': {pattern}")
        return route
    
    def setup_routes(self) -> None:
        """Register the dashboard, project, project-edit and 404 routes."""
        if self.handlers is None:
            raise RuntimeError("Router needs route handlers to register the default routes")
        
        for pattern, name, title, attribute in DEFAULT_ROUTES:
            self.add_route(pattern, name, title, getattr(self.handlers, attribute))
    
    async def initialize(self) -> Optional[RouteMatch]:
        """
        Register the fixed routes and dispatch the current location.
        
        The initial navigation replaces the current history entry.
        """
        if self._state != RouterState.UNINITIALIZED:
            logger.debug("Router already initialized")
            return self.current_route
        
        self.setup_routes()
        self._state = RouterState.READY
        return await self.navigate(self.current_path(), replace=True)
    
    def match_route(self, path: str) -> Optional[RouteMatch]:
        """First registered route whose pattern matches the whole path."""
        route_path = urlsplit(path).path or "/"
        
        for route in self.routes:
            params = route.pattern.match(route_path)
            if params is not None:
                return RouteMatch(route=route, params=params, path=path)
        return None
    
    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    
    def set_base_path(self, base_path: str) -> None:
        self.base_path = (base_path or "").rstrip("/")
    
    def current_path(self) -> str:
        """Host location with the base path removed."""
        path = self.history.current_path
        if self.base_path and path.startswith(self.base_path):
            path = path[len(self.base_path):]
        return path or "/"
    
    async def navigate(
        self,
        path: str,
        replace: bool = False,
        state: Any = None,
    ) -> Optional[RouteMatch]:
        """
        Navigate to a path.
        
        Args:
            path: App-relative path (without base path)
            replace: Replace the current history entry instead of pushing
            state: Opaque state stored with the history entry
        
        Returns:
            The dispatched match (the 404 match for unknown paths)
        """
        match = self.match_route(path)
        
        if match is None:
            logger.warning(f"No route found for path: {path}")
            if path != NOT_FOUND_PATH:
                return await self.navigate(NOT_FOUND_PATH, replace=True)
            match = self._synthetic_not_found(path)
        
        full_path = self.base_path + path
        if replace:
            self.history.replace(full_path, state)
        else:
            self.history.push(full_path, state)
        
        return await self.dispatch(match)
    
    async def dispatch(self, match: RouteMatch) -> RouteMatch:
        """
        Run a matched route's handler.
        
        Publishes the new navigation state first, then sets the page title
        and awaits the handler. Handler errors are contained here.
        """
        token = DispatchToken(self._sequence.advance(), self._sequence)
        match = dataclasses.replace(match, token=token)
        
        self._navigation = NavigationState(match=match)
        self._state = RouterState.DISPATCHING
        self._set_title(match.route.title)
        logger.debug(f"Dispatching '{match.route.name}' for {match.path} (#{token.sequence})")
        
        try:
            result = match.route.handler(match)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Error executing route '{match.route.name}' for {match.path}")
            self._show_error(ROUTE_ERROR_MESSAGE)
        finally:
            if token.is_current():
                self._state = RouterState.READY
            self.channel.emit(DataAction.ROUTE_CHANGED, route_change_payload(match))
        
        return match
    
    async def handle_pop_state(self) -> Optional[RouteMatch]:
        """Redispatch after the host moved back/forward; history is untouched."""
        path = self.current_path()
        match = self.match_route(path) or self._synthetic_not_found(path)
        return await self.dispatch(match)
    
    async def handle_link_click(self, click: LinkClick) -> bool:
        """
        Take over a link activation when it is a plain click on a relative link.
        
        Returns:
            True if the router handled the click (default navigation prevented)
        """
        if not should_intercept(click):
            return False
        
        click.prevent_default()
        await self.navigate(resolve_href(click.href, self.current_path()))
        return True
    
    async def redirect(self, path: str, state: Any = None) -> Optional[RouteMatch]:
        return await self.navigate(path, replace=True, state=state)
    
    async def reload(self) -> Optional[RouteMatch]:
        return await self.navigate(self.current_path(), replace=True)
    
    async def go_back(self) -> Optional[RouteMatch]:
        if not self.history.back():
            return None
        return await self.handle_pop_state()
    
    async def go_forward(self) -> Optional[RouteMatch]:
        if not self.history.forward():
            return None
        return await self.handle_pop_state()
    
    # ------------------------------------------------------------------
    # Navigation state
    # ------------------------------------------------------------------
    
    @property
    def navigation_state(self) -> Optional[NavigationState]:
        return self._navigation
    
    @property
    def current_route(self) -> Optional[RouteMatch]:
        return self._navigation.match if self._navigation else None
    
    @property
    def route_params(self) -> dict[str, str]:
        return dict(self._navigation.params) if self._navigation else {}
    
    def is_current_route(self, name: str) -> bool:
        return self._navigation is not None and self._navigation.route_name == name
    
    def is_latest(self, token: Optional[DispatchToken]) -> bool:
        return token is not None and token.sequence == self._sequence.latest
    
    def generate_url(self, name: str, params: Optional[dict[str, Any]] = None) -> str:
        """
        Build a path for a named route.
        
        Returns "/" for unknown route names.
        
        Raises:
            MissingParamError: If the route needs a parameter that was not given
        """
        for route in self.routes:
            if route.name == name:
                return route.pattern.reverse_generate(params or {})
        return "/"
    
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Listen for route_changed notifications."""
        return self.channel.subscribe(listener)
    
    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    
    def _synthetic_not_found(self, path: str) -> RouteMatch:
        handler = getattr(self.handlers, "not_found", None) or self._render_not_found
        route = RouteDefinition(
            pattern=RoutePattern("*"),
            handler=handler,
            name="404",
            title="Page Not Found",
        )
        return RouteMatch(route=route, params={}, path=path)
    
    def _render_not_found(self, match: RouteMatch) -> None:
        self._show_error(not_found_message(match.path))
    
    def _set_title(self, title: str) -> None:
        if self.surface is None:
            return
        full_title = f"{title} - {self.title_suffix}" if self.title_suffix else title
        self.surface.set_title(full_title)
    
    def _show_error(self, message: str) -> None:
        if self.surface is not None:
            self.surface.show_error(message)
