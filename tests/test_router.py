"""Tests for the client navigation router."""

import asyncio
import pytest

from src.models.routing import LinkClick, RouteMatch, RouterState
from src.routing.history import InMemoryHistory
from src.routing.router import NOT_FOUND_PATH, ROUTE_ERROR_MESSAGE, Router
from src.utils.errors import MissingParamError


def make_router(handlers, surface=None, path="/", base_path=""):
    return Router(
        InMemoryHistory(path),
        handlers=handlers,
        surface=surface,
        base_path=base_path,
    )


class TestRouteRegistry:
    """Tests for route registration and matching."""
    
    def test_default_routes(self, handlers):
        router = make_router(handlers)
        router.setup_routes()
        
        assert [r.name for r in router.routes] == ["dashboard", "project", "project-edit", "404"]
    
    def test_setup_routes_needs_handlers(self):
        with pytest.raises(RuntimeError):
            make_router(None).setup_routes()
    
    def test_first_registered_route_wins(self, handlers):
        router = make_router(handlers)
        router.add_route("/projects/:slug", "first", "First", handlers.project)
        router.add_route("/projects/:id", "second", "Second", handlers.project)
        
        match = router.match_route("/projects/acme")
        
        assert match.route.name == "first"
        assert match.params == {"slug": "acme"}
    
    def test_wildcard_stays_last(self, handlers):
        router = make_router(handlers)
        router.add_route("*", "404", "Page Not Found", handlers.not_found)
        router.add_route("/about", "about", "About", handlers.dashboard)
        
        assert [r.name for r in router.routes] == ["about", "404"]
        assert router.match_route("/about").route.name == "about"
    
    def test_query_string_ignored_for_matching(self, handlers):
        router = make_router(handlers)
        router.setup_routes()
        
        match = router.match_route("/projects/acme?tab=roadmap")
        
        assert match.route.name == "project"
        assert match.params == {"slug": "acme"}
        assert match.path == "/projects/acme?tab=roadmap"
    
    def test_generate_url(self, handlers):
        router = make_router(handlers)
        router.setup_routes()
        
        assert router.generate_url("project-edit", {"slug": "acme"}) == "/projects/acme/edit"
        assert router.generate_url("dashboard") == "/"
        assert router.generate_url("unknown") == "/"
    
    def test_generate_url_missing_param(self, handlers):
        router = make_router(handlers)
        router.setup_routes()
        
        with pytest.raises(MissingParamError):
            router.generate_url("project", {})


class TestInitialize:
    """Tests for router start-up."""
    
    @pytest.mark.asyncio
    async def test_dispatches_current_location(self, handlers, surface):
        router = make_router(handlers, surface, path="/projects/acme")
        
        match = await router.initialize()
        
        assert handlers.names == ["project"]
        assert match.params == {"slug": "acme"}
        assert router.state == RouterState.READY
        assert router.history.length == 1
        assert surface.titles == ["Project Dashboard - Supplement Factory"]
    
    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, handlers):
        router = make_router(handlers)
        
        await router.initialize()
        await router.initialize()
        
        assert handlers.names == ["dashboard"]
        assert len(router.routes) == 4


class TestNavigate:
    """Tests for navigation and dispatch."""
    
    @pytest.mark.asyncio
    async def test_push_navigation(self, handlers, surface):
        router = make_router(handlers, surface)
        await router.initialize()
        
        await router.navigate("/projects/acme/edit")
        
        assert handlers.names == ["dashboard", "project_edit"]
        assert router.history.entries() == ["/", "/projects/acme/edit"]
        assert router.is_current_route("project-edit")
        assert router.route_params == {"slug": "acme"}
        assert surface.titles[-1] == "Edit Project - Supplement Factory"
    
    @pytest.mark.asyncio
    async def test_replace_navigation(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        
        await router.navigate("/projects/acme", replace=True)
        
        assert router.history.entries() == ["/projects/acme"]
    
    @pytest.mark.asyncio
    async def test_unknown_path_goes_to_404(self, handlers, surface):
        """The wildcard route catches unknown paths."""
        router = make_router(handlers, surface)
        await router.initialize()
        
        match = await router.navigate("/nowhere/at/all")
        
        assert handlers.names[-1] == "not_found"
        assert match.route.name == "404"
        assert surface.titles[-1] == "Page Not Found - Supplement Factory"
    
    @pytest.mark.asyncio
    async def test_no_match_redirects_to_404_path(self, handlers, surface):
        """Without a wildcard route, a miss is redirected to /404."""
        router = make_router(handlers, surface)
        router.add_route("/", "dashboard", "Project Dashboard", handlers.dashboard)
        router.add_route(NOT_FOUND_PATH, "404", "Page Not Found", handlers.not_found)
        
        match = await router.navigate("/missing")
        
        assert match.route.name == "404"
        assert router.history.current_path == NOT_FOUND_PATH
        assert handlers.names == ["not_found"]
    
    @pytest.mark.asyncio
    async def test_no_match_without_404_route(self, handlers, surface):
        """Even with no 404 route at all, navigation never raises."""
        router = make_router(handlers, surface)
        router.add_route("/", "dashboard", "Project Dashboard", handlers.dashboard)
        
        match = await router.navigate("/missing")
        
        assert match.route.name == "404"
        assert handlers.names == ["not_found"]
    
    @pytest.mark.asyncio
    async def test_handler_failure_is_contained(self, handlers, surface):
        """A failing handler shows the generic error and still updates state."""
        handlers.fail_on.add("project")
        router = make_router(handlers, surface)
        await router.initialize()
        
        match = await router.navigate("/projects/acme")
        
        assert match.route.name == "project"
        assert surface.errors == [ROUTE_ERROR_MESSAGE]
        assert router.is_current_route("project")
        assert router.state == RouterState.READY
    
    @pytest.mark.asyncio
    async def test_route_changed_after_every_dispatch(self, handlers):
        handlers.fail_on.add("project")
        router = make_router(handlers)
        events = []
        router.subscribe(events.append)
        
        await router.initialize()
        await router.navigate("/projects/acme")
        
        assert [e.action for e in events] == ["route_changed", "route_changed"]
        assert events[-1].payload == {
            "route": "project",
            "title": "Project Dashboard",
            "params": {"slug": "acme"},
            "path": "/projects/acme",
        }
    
    @pytest.mark.asyncio
    async def test_async_handler_awaited(self, handlers):
        seen = []
        
        async def slow_handler(match: RouteMatch):
            await asyncio.sleep(0)
            seen.append(match.params["slug"])
        
        router = make_router(handlers)
        router.add_route("/projects/:slug", "project", "Project", slow_handler)
        
        await router.navigate("/projects/acme")
        
        assert seen == ["acme"]
    
    @pytest.mark.asyncio
    async def test_redirect_and_reload(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        await router.navigate("/projects/a")
        
        await router.redirect("/projects/b")
        await router.reload()
        
        assert router.history.entries() == ["/", "/projects/b"]
        assert handlers.names == ["dashboard", "project", "project", "project"]


class TestSequencing:
    """Last navigation wins over slower, earlier ones."""
    
    @pytest.mark.asyncio
    async def test_stale_dispatch_detected(self, handlers):
        release = asyncio.Event()
        rendered = []
        
        async def slow_project(match: RouteMatch):
            await release.wait()
            if match.is_current():
                rendered.append(match.params["slug"])
        
        router = make_router(handlers)
        router.add_route("/projects/:slug", "project", "Project", slow_project)
        router.add_route("/", "dashboard", "Dashboard", handlers.dashboard)
        
        slow = asyncio.create_task(router.navigate("/projects/acme"))
        await asyncio.sleep(0)
        await router.navigate("/")
        release.set()
        stale_match = await slow
        
        assert rendered == []
        assert stale_match.token.is_stale
        assert router.is_current_route("dashboard")
        assert not router.is_latest(stale_match.token)
        assert router.is_latest(router.current_route.token)
    
    @pytest.mark.asyncio
    async def test_tokens_increase(self, handlers):
        router = make_router(handlers)
        first = await router.initialize()
        second = await router.navigate("/projects/a")
        
        assert second.token.sequence > first.token.sequence
        assert not first.is_current()
        assert second.is_current()


class TestHistoryTraversal:
    """Tests for back/forward handling."""
    
    @pytest.mark.asyncio
    async def test_back_and_forward(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        await router.navigate("/projects/a")
        
        back = await router.go_back()
        forward = await router.go_forward()
        
        assert back.route.name == "dashboard"
        assert forward.params == {"slug": "a"}
        assert router.history.entries() == ["/", "/projects/a"]
    
    @pytest.mark.asyncio
    async def test_back_at_start(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        
        assert await router.go_back() is None
        assert await router.go_forward() is None
    
    @pytest.mark.asyncio
    async def test_pop_state_does_not_touch_history(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        await router.navigate("/projects/a")
        router.history.back()
        
        match = await router.handle_pop_state()
        
        assert match.route.name == "dashboard"
        assert router.history.length == 2


class TestLinkClicks:
    """Tests for link interception."""
    
    @pytest.mark.asyncio
    async def test_plain_click_navigates_once(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        click = LinkClick(href="/projects/acme")
        
        handled = await router.handle_link_click(click)
        
        assert handled
        assert click.default_prevented
        assert handlers.names == ["dashboard", "project"]
        assert router.history.entries() == ["/", "/projects/acme"]
    
    @pytest.mark.asyncio
    async def test_relative_click(self, handlers):
        router = make_router(handlers, path="/projects/acme")
        await router.initialize()
        
        await router.handle_link_click(LinkClick(href="acme/edit"))
        
        assert router.history.current_path == "/projects/acme/edit"
    
    @pytest.mark.asyncio
    async def test_external_and_modified_clicks_ignored(self, handlers):
        router = make_router(handlers)
        await router.initialize()
        external = LinkClick(href="https://example.com")
        modified = LinkClick(href="/projects/acme", ctrl_key=True)
        
        assert not await router.handle_link_click(external)
        assert not await router.handle_link_click(modified)
        assert not external.default_prevented
        assert handlers.names == ["dashboard"]


class TestBasePath:
    """Tests for mounting under a base path."""
    
    @pytest.mark.asyncio
    async def test_base_path_prefixes_history(self, handlers):
        router = make_router(handlers, path="/tracker/projects/acme", base_path="/tracker/")
        
        match = await router.initialize()
        await router.navigate("/")
        
        assert match.params == {"slug": "acme"}
        assert router.base_path == "/tracker"
        assert router.history.entries() == ["/tracker/projects/acme", "/tracker/"]
        assert router.current_path() == "/"
