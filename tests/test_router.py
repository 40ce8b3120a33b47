"""Tests for switchyard.routing.router — registration, prefixes, mounting."""

import pytest

from switchyard.errors import ConfigurationError, DuplicateRouteError
from switchyard.routing.route import RouteSchemas
from switchyard.routing.router import Router
from switchyard.validation import s


def _handler(req, res):
    return "ok"


def _mw_a(req, res):
    return None


def _mw_b(req, res):
    return None


def _mw_c(req, res):
    return None


class TestRegistration:
    @pytest.mark.parametrize("method", ["get", "post", "put", "patch", "delete"])
    def test_method_helpers(self, method) -> None:
        router = Router()
        getattr(router, method)("/items", _handler)
        (route,) = router.routes
        assert route.method == method.upper()
        assert route.url == "/items"
        assert route.handler is _handler

    def test_decorator_form_returns_function(self) -> None:
        router = Router()

        @router.get("/items/:id")
        def show(req, res):
            return "item"

        assert show(None, None) == "item"
        assert router.routes[0].handler is show

    def test_custom_method(self) -> None:
        router = Router()
        router.route("head", "/health", _handler)
        assert router.routes[0].method == "HEAD"

    def test_route_middleware_and_schemas(self) -> None:
        router = Router()
        body = s.object({"name": s.string()})
        router.post("/users", _handler, middleware=[_mw_a], schemas={"body": body})
        route = router.routes[0]
        assert route.middleware == (_mw_a,)
        assert route.schemas == RouteSchemas(body=body)

    def test_url_is_normalized(self) -> None:
        router = Router()
        router.get("//users///", _handler)
        assert router.routes[0].url == "/users"

    def test_duplicate_raises(self) -> None:
        router = Router()
        router.get("/users", _handler)
        with pytest.raises(DuplicateRouteError):
            router.get("/users/", _handler)

    def test_bad_pattern_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            Router().get("/users/{id}", _handler)

    def test_prefix(self) -> None:
        router = Router(prefix="users/")
        router.get("/", _handler)
        router.get("/:id", _handler)
        assert [r.url for r in router.routes] == ["/users", "/users/:id"]


class TestMount:
    def test_prefix_and_middleware_prepended(self) -> None:
        child = Router(prefix="/users")
        child.use(_mw_b)
        child.get("/:id", _handler, middleware=[_mw_c])

        parent = Router()
        parent.use(_mw_a)
        parent.mount(child, "/api")

        (route,) = parent.routes
        assert route.url == "/api/users/:id"
        assert route.middleware == (_mw_b, _mw_c)

    def test_nested_mounts_compose_middleware_in_order(self) -> None:
        leaf = Router()
        leaf.use(_mw_c)
        leaf.get("/x", _handler)

        middle = Router(prefix="/m")
        middle.use(_mw_b)
        middle.mount(leaf)

        root = Router()
        root.mount(middle, "/r")

        (route,) = root.routes
        assert route.url == "/r/m/x"
        assert route.middleware == (_mw_b, _mw_c)

    def test_snapshot_semantics(self) -> None:
        child = Router()
        child.get("/a", _handler)
        parent = Router()
        parent.mount(child)
        child.get("/b", _handler)
        assert [r.url for r in parent.routes] == ["/a"]
        assert len(child.routes) == 2

    def test_original_router_unaffected(self) -> None:
        child = Router()
        child.get("/a", _handler)
        Router().mount(child, "/p")
        assert child.routes[0].url == "/a"
        assert child.routes[0].middleware == ()

    def test_empty_router_adds_nothing(self) -> None:
        parent = Router()
        parent.mount(Router(), "/empty")
        assert parent.routes == ()

    def test_duplicate_at_mount_time(self) -> None:
        parent = Router()
        parent.get("/api/a", _handler)
        child = Router()
        child.get("/a", _handler)
        with pytest.raises(DuplicateRouteError):
            parent.mount(child, "/api")

    def test_mount_at_root(self) -> None:
        child = Router()
        child.get("/", _handler)
        parent = Router()
        parent.mount(child)
        assert parent.routes[0].url == "/"
