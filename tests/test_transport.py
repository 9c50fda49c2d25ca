"""
Tests for the aiohttp client and Expect.send() against an in-process server.
"""

import asyncio
import base64
import socket

import aiohttp
from aiohttp import test_utils, web

from cadence.assertions import AssertionType
from cadence.config import AuthConfig, AuthType, Config
from cadence.expect import Expect
from cadence.transport import AiohttpClient, HttpRequest, TransportErrorCode


def make_app() -> web.Application:
    async def get_user(request):
        return web.json_response({"id": int(request.match_info["id"]), "name": "alice"})

    async def echo(request):
        body = await request.text()
        return web.json_response({
            "method": request.method,
            "headers": dict(request.headers),
            "query": dict(request.query),
            "body": body,
        })

    async def slow(request):
        await asyncio.sleep(1)
        return web.Response(text="late")

    app = web.Application()
    app.router.add_get("/users/{id}", get_user)
    app.router.add_route("*", "/echo", echo)
    app.router.add_get("/slow", slow)
    return app


def run_with_server(test):
    """Start the test app, run `test(base_url)` and stop the app."""
    async def main():
        async with test_utils.TestServer(make_app()) as server:
            return await test(f"http://{server.host}:{server.port}")

    return asyncio.run(main())


def unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestAiohttpClient:

    def test_get_json(self):
        async def test(base_url):
            async with AiohttpClient() as client:
                return await client.send(HttpRequest("GET", f"{base_url}/users/7"))

        response = run_with_server(test)
        assert response.success
        assert response.status == 200
        assert response.content_type == "application/json"
        assert response.json() == {"id": 7, "name": "alice"}
        assert response.elapsed_ms >= 0

    def test_post_json_with_params(self):
        async def test(base_url):
            async with AiohttpClient() as client:
                return await client.send(HttpRequest(
                    "POST", f"{base_url}/echo", params={"q": "1"}, json={"a": 1},
                ))

        echoed = run_with_server(test).json()
        assert echoed["method"] == "POST"
        assert echoed["query"] == {"q": "1"}
        assert echoed["body"] == '{"a": 1}'

    def test_default_auth_and_request_headers(self):
        auth = AuthConfig(type=AuthType.BASIC, username="u", password="p")

        async def test(base_url):
            client = AiohttpClient(auth_config=auth, headers={"X-Default": "d", "X-Both": "default"})
            async with client:
                return await client.send(HttpRequest(
                    "GET", f"{base_url}/echo", headers={"X-Both": "request"},
                ))

        headers = run_with_server(test).json()["headers"]
        assert headers["Authorization"] == "Basic " + base64.b64encode(b"u:p").decode()
        assert headers["X-Default"] == "d"
        assert headers["X-Both"] == "request"

    def test_api_key_header(self):
        auth = AuthConfig(type=AuthType.API_KEY, key="k", header="X-Key")

        async def test(base_url):
            async with AiohttpClient(auth_config=auth) as client:
                return await client.send(HttpRequest("GET", f"{base_url}/echo"))

        assert run_with_server(test).json()["headers"]["X-Key"] == "k"

    def test_timeout(self):
        async def test(base_url):
            async with AiohttpClient(timeout_ms=100) as client:
                return await client.send(HttpRequest("GET", f"{base_url}/slow"))

        response = run_with_server(test)
        assert not response.success
        assert response.error.code == TransportErrorCode.TIMEOUT_ERROR

    def test_connection_refused(self):
        port = unused_port()

        async def main():
            async with AiohttpClient() as client:
                return await client.send(HttpRequest("GET", f"http://127.0.0.1:{port}/"))

        response = asyncio.run(main())
        assert not response.success
        assert response.error.code == TransportErrorCode.CONNECTION_ERROR

    def test_disconnect(self):
        async def main():
            client = AiohttpClient()
            await client.connect()
            connected = client.is_connected
            await client.disconnect()
            return connected, client.is_connected

        assert asyncio.run(main()) == (True, False)

    def test_from_session_leaves_session_open(self):
        async def test(base_url):
            async with aiohttp.ClientSession() as session:
                client = AiohttpClient.from_session(session, headers={"X-Shared": "1"})
                response = await client.send(HttpRequest("GET", f"{base_url}/echo"))
                await client.disconnect()
                return response, session.closed

        response, closed = run_with_server(test)
        assert response.json()["headers"]["X-Shared"] == "1"
        assert not closed


class TestExpectSend:

    def test_send_with_owned_client(self, handler):
        async def test(base_url):
            e = Expect(Config(assertion_handler=handler, base_url=base_url))
            resp = await e.send(HttpRequest("GET", "/users/1"))
            resp.status(200).content_type("application/json")
            resp.json().object().value("name").string().is_equal("alice")
            return e

        e = run_with_server(test)
        assert handler.failures == []
        assert not e.client.is_connected

    def test_concurrent_sends_share_owned_client(self, handler):
        async def test(base_url):
            e = Expect(Config(assertion_handler=handler, base_url=base_url, timeout_ms=5000))
            slow, fast = await asyncio.gather(
                e.send(HttpRequest("GET", "/slow")),
                e.send(HttpRequest("GET", "/users/3")),
            )
            slow.status(200).body().is_equal("late")
            fast.json().path("$.id").number().is_equal(3)
            return e

        e = run_with_server(test)
        assert handler.failures == []
        assert not e.client.is_connected

    def test_send_with_supplied_client(self, handler):
        async def test(base_url):
            client = AiohttpClient(headers={"X-Session": "s"})
            async with client:
                e = Expect(Config(assertion_handler=handler, base_url=base_url, client=client))
                first = await e.send(HttpRequest("GET", "/echo"))
                second = await e.send(HttpRequest("GET", "/users/2"))
                still_connected = client.is_connected
            first.json().object().value("headers").object().value("X-Session").string().is_equal("s")
            second.json().path("$.id").number().is_equal(2)
            return still_connected

        assert run_with_server(test)
        assert handler.failures == []

    def test_send_transport_error(self, handler):
        port = unused_port()

        async def main():
            e = Expect(Config(assertion_handler=handler, base_url=f"http://127.0.0.1:{port}"))
            resp = await e.send(HttpRequest("GET", "/users/1"))
            resp.status(200)
            return e

        e = asyncio.run(main())
        assert [r.type for r in handler.failures] == [AssertionType.OPERATION]
        assert not e.chain.failed
