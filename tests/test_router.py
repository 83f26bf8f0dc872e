"""Router tests."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from roadrouter_core.http.request import Request, Response
from roadrouter_core.routing.args import path_args
from roadrouter_core.routing.errors import PatternError, RouteDefinitionError
from roadrouter_core.routing.handlers import as_handler
from roadrouter_core.routing.router import Outcome, Route, Router


def text_handler(text):
    """Handler answering with fixed text."""
    return lambda request: Response.text(text)


def fruits_router():
    """Router with overlapping fruit routes."""

    def any_fruits(request):
        return Response.text(f"{request.method} fruits")

    def numbered(request, args):
        return Response.text(f"{request.method} n={args.by_index(0)}")

    def get_fruit(request, args):
        return Response.text(f"get {args.by_index(0)}")

    def delete_fruit(request, args):
        return Response.text(f"rm {args.by_index(0)}")

    return Router([
        ("/fruits", "*", any_fruits),
        (r"/fruits/{name:\d+}", "*", numbered),
        ("/fruits/{name}", "GET", get_fruit),
        ("/fruits/{name}", "DELETE", delete_fruit),
    ])


class TestServe:
    """Test serving requests end to end."""

    @pytest.mark.parametrize(
        "method,path,status,body",
        [
            ("POST", "/fruits", 200, b"POST fruits"),
            ("GET", "/fruits", 200, b"GET fruits"),
            ("GET", "/fruits/apple", 200, b"get apple"),
            ("PUT", "/fruits/321", 200, b"PUT n=321"),
            ("DELETE", "/fruits/apple", 200, b"rm apple"),
            ("PUT", "/fruits/apple", 405, b"Method Not Allowed\n"),
            ("GET", "/car/land-rover", 404, b"Not Found\n"),
        ],
    )
    def test_fruits(self, method, path, status, body):
        """Test handler selection and fallbacks."""
        router = fruits_router()

        response = router.serve(Request(method=method, path=path))

        assert response.status == status
        assert response.body == body

    def test_default_fallbacks_are_plain_text(self):
        """Test default 404/405 responses."""
        router = fruits_router()

        not_found = router.serve(Request(method="GET", path="/nope"))
        not_allowed = router.serve(Request(method="PUT", path="/fruits/apple"))

        assert not_found.get_header("Content-Type") == "text/plain; charset=utf-8"
        assert not_allowed.get_header("Content-Type") == "text/plain; charset=utf-8"
        assert not_allowed.get_header("Allow") == "DELETE, GET"

    def test_custom_fallbacks(self):
        """Test replacing the 404 and 405 handlers."""
        router = Router(
            [("/", "GET", text_handler("home"))],
            not_found=lambda request: Response.text("nothing here", 404),
            method_not_allowed=lambda request: Response.text("no", 405),
        )

        assert router.serve(Request(method="GET", path="/x")).body == b"nothing here"
        assert router.serve(Request(method="POST", path="/")).body == b"no"

    def test_handler_sees_args_and_original_does_not(self):
        """Test path args are scoped to the handler invocation."""
        seen = []

        def handler(request):
            seen.append(path_args(request))
            return Response.text("ok")

        router = Router([("/fruits/{name}", "GET", handler)])
        request = Request(method="GET", path="/fruits/apple")

        router.serve(request)

        assert seen[0].by_name("name") == "apple"
        assert path_args(request).count() == 0

    def test_router_is_a_handler(self):
        """Test router can be used wherever a handler is expected."""
        router = fruits_router()

        assert as_handler(router) is router
        assert router(Request(method="GET", path="/fruits")).body == b"GET fruits"


class TestDispatch:
    """Test dispatch outcomes."""

    def test_later_route_with_matching_method(self):
        """Test scanning continues past a method mismatch."""
        router = fruits_router()

        result = router.dispatch("DELETE", "/fruits/apple")

        assert result.outcome is Outcome.HANDLED
        assert result.route is router.routes[3]
        assert list(result.args) == ["apple"]

    def test_method_not_allowed(self):
        """Test path matched but no method set accepted."""
        router = fruits_router()

        result = router.dispatch("PUT", "/fruits/apple")

        assert result.outcome is Outcome.METHOD_NOT_ALLOWED
        assert result.allowed == frozenset({"GET", "DELETE"})
        assert result.handler is None

    def test_first_declared_wins(self):
        """Test declaration order breaks ties."""
        first = text_handler("first")
        second = text_handler("second")
        router = Router([
            (r"/x/{w:\w+}/{n:\d+}", "GET", first),
            (r"/x/{n:\d+}/{w:\w+}", "GET", second),
        ])

        result = router.dispatch("GET", "/x/foo/321")

        assert result.route is router.routes[0]
        assert result.args.by_name("w") == "foo"
        assert result.args.by_name("n") == "321"

    def test_first_declared_wins_regardless_of_methods(self):
        """Test an earlier wildcard route shadows a later specific one."""
        router = Router([
            ("/x/{id}", "*", text_handler("any")),
            ("/x/42", "GET", text_handler("specific")),
        ])

        assert router.dispatch("GET", "/x/42").route is router.routes[0]

    def test_wildcard_after_specific(self):
        """Test literal wildcard route after a method specific one."""
        router = Router([
            ("/x/{id}", "GET", text_handler("get")),
            ("/x/42", "*", text_handler("any")),
        ])

        assert router.dispatch("GET", "/x/42").route is router.routes[0]
        assert router.dispatch("POST", "/x/42").route is router.routes[1]
        assert router.dispatch("POST", "/x/7").outcome is Outcome.METHOD_NOT_ALLOWED

    def test_no_routes(self):
        """Test empty router always answers not found."""
        router = Router()

        assert router.dispatch("GET", "/").outcome is Outcome.NOT_FOUND
        response = router.serve(Request(method="DELETE", path="/anything"))
        assert response.status == 404
        assert response.body == b"Not Found\n"

    def test_root_only(self):
        """Test root route with other methods and paths."""
        router = Router([("/", "GET", text_handler("home"))])

        assert router.dispatch("GET", "/").outcome is Outcome.HANDLED
        assert router.dispatch("POST", "/").outcome is Outcome.METHOD_NOT_ALLOWED
        assert router.dispatch("GET", "/missing").outcome is Outcome.NOT_FOUND

    def test_literal_route_has_no_args(self):
        """Test literal routes extract nothing."""
        router = Router([("/books", "GET", text_handler("books"))])

        result = router.dispatch("GET", "/books")

        assert result.found
        assert result.args.count() == 0

    def test_methods_are_case_insensitive(self):
        """Test method tokens and request methods are upper-cased."""
        router = Router([("/books", " get , post ", text_handler("books"))])

        assert router.dispatch("get", "/books").found
        assert router.dispatch("POST", "/books").found
        assert not router.dispatch("PUT", "/books").found

    def test_concurrent_dispatch(self):
        """Test concurrent lookups give deterministic results."""
        router = fruits_router()
        requests = [("DELETE", "/fruits/apple"), ("PUT", "/fruits/321")] * 200

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda r: router.dispatch(*r), requests))

        for (method, _), result in zip(requests, results):
            expected = router.routes[3] if method == "DELETE" else router.routes[1]
            assert result.route is expected


class TestRegistration:
    """Test building the route table."""

    def test_list_and_add_are_equivalent(self):
        """Test constructor list and add produce the same table."""
        handler = text_handler("x")
        definitions = [
            ("/", "GET", handler),
            ("/{id}", "GET,PUT", handler),
            ("/{id}/tags", "*", handler),
        ]

        from_list = Router(definitions)
        incremental = Router()
        for path, methods, h in definitions:
            incremental.add(path, methods, h)

        assert [repr(r) for r in from_list.routes] == [
            repr(r) for r in incremental.routes
        ]

    def test_route_objects_and_tuples(self):
        """Test Route instances and tuples are interchangeable."""
        handler = text_handler("x")
        router = Router([Route("/a", "GET", handler), ("/b", "POST", handler)])

        assert [r.path for r in router.routes] == ["/a", "/b"]

    def test_verb_helpers_and_decorator(self):
        """Test shortcut registration forms."""
        router = Router()
        router.get("/a", text_handler("get"))
        router.post("/a", text_handler("post"))
        router.put("/a", text_handler("put"))
        router.patch("/a", text_handler("patch"))
        router.delete("/a", text_handler("delete"))

        @router.route("/b/{id}", "GET, HEAD")
        def show(request, args):
            return Response.text(args.by_name("id"))

        assert router.serve(Request(method="PATCH", path="/a")).body == b"patch"
        assert router.serve(Request(method="HEAD", path="/b/7")).body == b"7"
        assert show.__name__ == "show"

    def test_invalid_pattern_fails_construction(self):
        """Test bad templates fail when the router is built."""
        with pytest.raises(PatternError):
            Router([("/fruits/{name", "GET", text_handler("x"))])

    @pytest.mark.parametrize(
        "definition",
        [
            ("/a", "", text_handler("x")),
            ("/a", " , ", text_handler("x")),
            ("/a", "GET", None),
            ("/a", "GET"),
            "/a",
        ],
    )
    def test_invalid_definitions(self, definition):
        """Test bad definitions fail construction."""
        with pytest.raises(RouteDefinitionError):
            Router([definition])

    def test_add_after_serving(self):
        """Test the table is frozen once dispatching starts."""
        router = Router([("/", "GET", text_handler("x"))])
        router.dispatch("GET", "/")

        assert router.frozen
        with pytest.raises(RuntimeError):
            router.add("/late", "GET", text_handler("late"))


class TestStrictMode:
    """Test optional strict validation."""

    def test_permissive_by_default(self):
        """Test duplicates are tolerated by default."""
        handler = text_handler("x")
        router = Router([
            ("/a", "GET,GET,", handler),
            ("/a", "GET", handler),
        ])

        assert len(router) == 2

    def test_duplicate_method_tokens(self):
        """Test duplicate tokens are rejected."""
        with pytest.raises(RouteDefinitionError):
            Router([("/a", "GET,GET", text_handler("x"))], strict=True)

    def test_empty_method_token(self):
        """Test empty tokens are rejected."""
        with pytest.raises(RouteDefinitionError):
            Router([("/a", "GET,", text_handler("x"))], strict=True)

    def test_shadowed_route(self):
        """Test unreachable routes are rejected."""
        handler = text_handler("x")
        with pytest.raises(RouteDefinitionError):
            Router([("/a", "*", handler), ("/a", "GET", handler)], strict=True)

    def test_distinct_methods_allowed(self):
        """Test same template with other methods is accepted."""
        handler = text_handler("x")
        router = Router(
            [("/a", "GET", handler), ("/a", "POST,DELETE", handler)],
            strict=True,
        )

        assert len(router) == 2
