"""Tests for pihen.server.handler — CORS, preflight, method dispatch, results."""

import contextlib
import logging

from pihen.collection import Collection
from pihen.errors import RequestError
from pihen.router import Router
from pihen.testing import TestClient

ORIGIN = "https://app.example.com"


class Recorder:
    """Collects the calls a collection method receives."""

    def __init__(self, result: object = None) -> None:
        self.result = result
        self.calls: list[tuple[object, object, object]] = []

    def __call__(self, ctx, request, user):
        self.calls.append((ctx, request, user))
        return self.result


def _router(**methods) -> Router:
    return Router().bind([Collection("/api/items", methods, allowed_origin=ORIGIN)])


class TestMethodDispatch:
    async def test_each_verb_invokes_its_own_handler(self) -> None:
        handlers = {verb: Recorder({"verb": verb}) for verb in ("GET", "POST", "PUT", "DELETE")}
        async with TestClient(_router(**handlers)) as client:
            for verb, handler in handlers.items():
                response = await client.request(verb, "/api/items")
                assert response.status == 200
                assert response.text == f'{{"verb":"{verb}"}}\n'
                assert len(handler.calls) == 1

        for handler in handlers.values():
            assert len(handler.calls) == 1

    async def test_unregistered_verb_is_405(self) -> None:
        get = Recorder([])
        async with TestClient(_router(GET=get)) as client:
            response = await client.request("PATCH", "/api/items")

        assert response.status == 405
        assert response.text == "Method not allowed.\n"
        assert response.content_type == "text/plain; charset=utf-8"
        assert get.calls == []

    async def test_lowercase_verb_names_are_bound(self) -> None:
        router = Router().bind([Collection("/api/items", {"get": Recorder([1])})])
        async with TestClient(router) as client:
            response = await client.get("/api/items")
        assert response.status == 200
        assert response.text == "[1]\n"

    async def test_async_handler(self) -> None:
        async def list_items(ctx, request, user):
            return [{"id": 1}, {"id": 2}]

        async with TestClient(_router(GET=list_items)) as client:
            response = await client.get("/api/items")
        assert response.status == 200
        assert response.text == '[{"id":1},{"id":2}]\n'

    async def test_handler_receives_request_and_no_user(self) -> None:
        get = Recorder({})
        async with TestClient(_router(GET=get)) as client:
            await client.get("/api/items?id=7")

        ctx, request, user = get.calls[0]
        assert ctx.collection_url == "/api/items"
        assert request.method == "GET"
        assert request.query["id"] == "7"
        assert user is None

    async def test_handler_can_read_body(self) -> None:
        async def create(ctx, request, user):
            payload = await request.json()
            return {"created": payload["name"]}

        async with TestClient(_router(POST=create)) as client:
            response = await client.post("/api/items", json={"name": "pen"})
        assert response.text == '{"created":"pen"}\n'


class TestCORS:
    async def test_allow_origin_on_success(self) -> None:
        async with TestClient(_router(GET=Recorder({}))) as client:
            response = await client.get("/api/items")
        assert response.header("Access-Control-Allow-Origin") == ORIGIN

    async def test_allow_origin_on_errors(self) -> None:
        def fail(ctx, request, user):
            raise RequestError(403, "forbidden")

        async with TestClient(_router(GET=fail)) as client:
            failed = await client.get("/api/items")
            not_allowed = await client.delete("/api/items")

        assert failed.header("Access-Control-Allow-Origin") == ORIGIN
        assert not_allowed.header("Access-Control-Allow-Origin") == ORIGIN

    async def test_preflight_lists_registered_verbs(self) -> None:
        handlers = {"GET": Recorder(), "POST": Recorder(), "DELETE": Recorder()}
        async with TestClient(_router(**handlers)) as client:
            response = await client.options("/api/items", headers={"Origin": ORIGIN})

        assert response.status == 200
        assert response.body_bytes == b""
        assert response.content_type is None
        assert response.header("Access-Control-Allow-Origin") == ORIGIN
        assert response.header("Access-Control-Allow-Headers") == "Content-Type"
        allowed = response.header("Access-Control-Allow-Methods")
        assert allowed is not None
        assert set(allowed.split(",")) == {"GET", "POST", "DELETE"}
        assert all(not handler.calls for handler in handlers.values())

    async def test_preflight_never_calls_a_bound_options_handler(self) -> None:
        options = Recorder({"called": True})
        async with TestClient(_router(OPTIONS=options, GET=Recorder())) as client:
            response = await client.options("/api/items")

        assert response.body_bytes == b""
        assert set(response.header("Access-Control-Allow-Methods").split(",")) == {
            "OPTIONS",
            "GET",
        }
        assert options.calls == []


class TestFailures:
    async def test_request_error_maps_to_status_and_message(self) -> None:
        def get(ctx, request, user):
            raise RequestError(404, "not found")

        async with TestClient(_router(GET=get)) as client:
            response = await client.get("/api/items")

        assert response.status == 404
        assert response.text == "not found\n"
        assert response.content_type == "text/plain; charset=utf-8"
        assert response.header("X-Content-Type-Options") == "nosniff"

    async def test_request_error_through_context_manager(self) -> None:
        @contextlib.contextmanager
        def transaction():
            yield

        def get(ctx, request, user):
            with transaction():
                raise RequestError(404, "not found")

        async with TestClient(_router(GET=get)) as client:
            response = await client.get("/api/items")

        assert response.status == 404
        assert response.text == "not found\n"

    async def test_request_error_logged_at_info(self, caplog) -> None:
        def get(ctx, request, user):
            raise RequestError(409, "already exists")

        with caplog.at_level(logging.INFO, logger="pihen.request"):
            async with TestClient(_router(GET=get)) as client:
                await client.get("/api/items")

        records = [r for r in caplog.records if r.name == "pihen.request"]
        assert len(records) == 1
        assert records[0].levelno == logging.INFO
        assert "Api failure: 409 already exists" in records[0].getMessage()

    async def test_unexpected_error_is_500_with_its_text(self, caplog) -> None:
        def get(ctx, request, user):
            raise KeyError("boom")

        with caplog.at_level(logging.INFO, logger="pihen.request"):
            async with TestClient(_router(GET=get)) as client:
                response = await client.get("/api/items")

        assert response.status == 500
        assert response.text == "'boom'\n"
        records = [r for r in caplog.records if r.name == "pihen.request"]
        assert len(records) == 1
        assert records[0].levelno == logging.ERROR
        assert "Unexpected error: 'boom'" in records[0].getMessage()
        assert records[0].exc_info is not None

    async def test_async_handler_failure(self) -> None:
        async def get(ctx, request, user):
            raise RuntimeError("database unavailable")

        async with TestClient(_router(GET=get)) as client:
            response = await client.get("/api/items")
        assert response.status == 500
        assert response.text == "database unavailable\n"

    async def test_unencodable_result_is_500(self) -> None:
        async with TestClient(_router(GET=Recorder(object()))) as client:
            response = await client.get("/api/items")
        assert response.status == 500
        assert "not JSON serializable" in response.text


class TestSuccess:
    async def test_json_result(self) -> None:
        async with TestClient(_router(GET=Recorder({"id": 1}))) as client:
            response = await client.get("/api/items")

        assert response.status == 200
        assert response.content_type == "text/json; charset=utf-8"
        assert response.body_bytes == b'{"id":1}\n'

    async def test_none_result_is_null(self) -> None:
        async with TestClient(_router(POST=Recorder(None))) as client:
            response = await client.post("/api/items")
        assert response.status == 200
        assert response.text == "null\n"
